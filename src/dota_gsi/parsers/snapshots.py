"""录制快照加载：从目录或单个文件读取 GSI 原始 JSON，用于离线解析与回放。"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from .state import MalformedPayloadError, decode_payload

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """
    快照加载器。snapshot_dir 下每个 .json 文件是一次 POST 的完整请求体，
    按文件路径排序即为上报顺序。
    """

    def __init__(self, snapshot_dir: str | Path | None = None):
        from ..config import load_config
        cfg = load_config()
        self.snapshot_dir = Path(snapshot_dir or cfg.get("snapshot_dir", "snapshots"))

    def iter_snapshot_files(self) -> Iterator[Path]:
        """遍历 snapshot_dir 下所有 .json 文件（按路径排序）。"""
        if not self.snapshot_dir.is_dir():
            return
        yield from sorted(self.snapshot_dir.rglob("*.json"))

    def load_snapshot_file(self, path: str | Path) -> dict[str, Any]:
        """读取单个快照；内容不是 JSON 对象时抛 MalformedPayloadError。"""
        return decode_payload(Path(path).read_bytes())

    def load_all(self) -> list[tuple[Path, dict[str, Any]]]:
        """加载全部快照；无法读取或格式错误的文件记录警告后跳过。"""
        snapshots: list[tuple[Path, dict[str, Any]]] = []
        for p in self.iter_snapshot_files():
            try:
                snapshots.append((p, self.load_snapshot_file(p)))
            except (MalformedPayloadError, OSError) as e:
                logger.warning("跳过快照 %s: %s", p, e)
                continue
        return snapshots
