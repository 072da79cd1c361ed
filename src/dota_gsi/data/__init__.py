"""规范化后的 GSI 状态记录。"""
from .models import GameState, GameStateEvent, Mode

__all__ = ["GameState", "GameStateEvent", "Mode"]
