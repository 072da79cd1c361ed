"""Dota 2 Game State Integration：接收客户端快照并规范化为玩家/观战状态。"""
__version__ = "0.1.0"

from .data.models import GameState, GameStateEvent
from .events import EventBus
from .parsers import MalformedPayloadError, parse_payload

__all__ = [
    "EventBus",
    "GameState",
    "GameStateEvent",
    "MalformedPayloadError",
    "parse_payload",
    "__version__",
]
