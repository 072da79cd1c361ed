"""GSI 快照解析：模式判断、slot 提取、各分区解析与状态组装。"""
from .snapshots import SnapshotLoader
from .state import MalformedPayloadError, build_state, decode_payload, detect_mode, parse_payload

__all__ = [
    "MalformedPayloadError",
    "SnapshotLoader",
    "build_state",
    "decode_payload",
    "detect_mode",
    "parse_payload",
]
