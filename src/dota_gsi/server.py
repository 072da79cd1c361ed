"""GSI 接收服务：接收 Dota 2 客户端 POST 的快照，解析后按玩家/观战模式派发事件。"""
from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.concurrency import run_in_threadpool

from . import __version__
from .data.models import GameStateEvent
from .events import ERROR, GAME_STATE, OBSERVER_STATE, PLAYER_STATE, EventBus
from .parsers.state import MalformedPayloadError, decode_payload, parse_payload

logger = logging.getLogger(__name__)


class GameStateServer:
    """
    游戏客户端在玩家或观战时会上报不同结构的快照；
    玩家模式只包含当前选手，观战模式覆盖全部 10 名选手。
    """

    def __init__(self, path: str = "/", debug: bool = False, bus: EventBus | None = None):
        if not path.startswith("/"):
            raise ValueError(f"Invalid serve path '{path}'! Must start with '/'.")
        self.path = path
        self.debug = debug
        self.events = bus or EventBus()
        self._uvicorn: Any = None

    def on_game_state(self, handler: Callable[[dict[str, Any]], None]) -> None:
        """注册原始快照处理函数（解析前、与模式无关）。"""
        self.events.subscribe(GAME_STATE, handler)

    def on_player_state(self, handler: Callable[[GameStateEvent], None]) -> None:
        self.events.subscribe(PLAYER_STATE, handler)

    def on_observer_state(self, handler: Callable[[GameStateEvent], None]) -> None:
        self.events.subscribe(OBSERVER_STATE, handler)

    def on_error(self, handler: Callable[[MalformedPayloadError], None]) -> None:
        self.events.subscribe(ERROR, handler)

    def handle_body(self, body: bytes) -> tuple[int, str]:
        """处理一次 POST 请求体，返回 (状态码, 响应文本)。"""
        try:
            raw_state = decode_payload(body)
        except MalformedPayloadError as e:
            logger.warning("拒绝请求: %s", e)
            if self.debug:
                logger.debug("请求体解析失败", exc_info=e)
            self.events.publish(ERROR, e)
            return 500, f"Invalid JSON in request body: '{e}'.\n"

        self.events.publish(GAME_STATE, raw_state)
        self.dispatch(parse_payload(raw_state))
        return 200, ""

    def dispatch(self, event: GameStateEvent) -> None:
        topic = OBSERVER_STATE if event.mode == "observer" else PLAYER_STATE
        self.events.publish(topic, event)

    def create_app(self) -> FastAPI:
        app = FastAPI(title="Dota 2 GSI Server", version=__version__)

        @app.api_route(self.path, methods=["POST", "HEAD"], response_class=PlainTextResponse)
        async def receive(request: Request) -> PlainTextResponse:
            if request.method == "HEAD":
                status, text = 200, ""
            else:
                body = await request.body()
                # 订阅者是同步回调，放到线程池执行，不阻塞事件循环
                status, text = await run_in_threadpool(self.handle_body, body)
            logger.debug("%s %s %s", request.method, request.url.path, status)
            return PlainTextResponse(text, status_code=status)

        return app

    def listen(self, port: int = 9001, host: str = "127.0.0.1") -> None:
        """启动服务（阻塞）；地址需与客户端 gamestate_integration 配置一致。"""
        import uvicorn

        logger.info("Starting serving at http://%s:%s%s", host, port, self.path)
        config = uvicorn.Config(
            self.create_app(),
            host=host,
            port=port,
            log_level="debug" if self.debug else "warning",
        )
        self._uvicorn = uvicorn.Server(config)
        self._uvicorn.run()

    def close(self) -> None:
        if self._uvicorn is not None:
            self._uvicorn.should_exit = True
