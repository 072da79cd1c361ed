"""GSI 回放客户端：把录制的快照按顺序 POST 到接收服务，模拟游戏客户端上报。"""
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Iterable

import requests

from ..config import load_config


class GameStateClient:
    """向 GameStateServer 推送快照；相邻两次推送之间至少间隔 delay 秒。"""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        delay: float | None = None,
    ):
        cfg = load_config()
        cl = cfg.get("client", {})
        self.url = url or cl.get("url", "http://127.0.0.1:9001/")
        self.timeout = timeout if timeout is not None else cl.get("timeout", 10.0)
        self.delay = delay if delay is not None else cl.get("delay", 0.5)
        self._last_request_time = 0.0

    def _post(self, body: bytes) -> requests.Response:
        now = time.monotonic()
        wait = self.delay - (now - self._last_request_time)
        if wait > 0:
            time.sleep(wait)
        self._last_request_time = time.monotonic()
        return requests.post(
            self.url,
            data=body,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def send(self, payload: dict[str, Any]) -> int:
        """推送一个快照，返回 HTTP 状态码。"""
        return self._post(json.dumps(payload).encode("utf-8")).status_code

    def send_file(self, path: str | Path) -> int:
        """原样推送文件内容（不在本地校验 JSON）。"""
        return self._post(Path(path).read_bytes()).status_code

    def replay(self, paths: Iterable[str | Path]) -> list[tuple[Path, int | None]]:
        """依次推送多个快照文件；连接失败的文件状态记为 None 并继续。"""
        results: list[tuple[Path, int | None]] = []
        for p in paths:
            try:
                results.append((Path(p), self.send_file(p)))
            except requests.RequestException:
                results.append((Path(p), None))
                continue
        return results
