"""HTTP 客户端：向 GSI 接收服务回放快照。"""
from .client import GameStateClient

__all__ = ["GameStateClient"]
