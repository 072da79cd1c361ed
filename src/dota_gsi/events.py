"""同步事件总线：按主题注册处理函数，发布时按注册顺序依次调用。"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

GAME_STATE = "dota2-game-state"
PLAYER_STATE = "dota2-player-state"
OBSERVER_STATE = "dota2-observer-state"
ERROR = "dota2-error"

Handler = Callable[[Any], None]


class EventBus:
    """
    主题 -> 处理函数列表。publish 在当前线程内同步调用，
    同一主题内保证注册顺序；处理函数抛出的异常直接向上传播。
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> Handler:
        self._handlers[topic].append(handler)
        return handler

    def unsubscribe(self, topic: str, handler: Handler) -> bool:
        handlers = self._handlers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, topic: str, payload: Any) -> int:
        """发布并返回被调用的处理函数数量。"""
        handlers = list(self._handlers.get(topic, ()))
        logger.debug("publish %s -> %d handler(s)", topic, len(handlers))
        for handler in handlers:
            handler(payload)
        return len(handlers)

    def handler_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, ()))
