"""规范化状态导出为 JSON。"""
from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .config import get_output_dir
from .data.models import OPTIONAL_ITEM_PROPS, Item, WearableItem


def _key(name: str) -> str:
    # break_ -> break, class_ -> class
    return name.rstrip("_")


def to_jsonable(obj: Any) -> Any:
    """把状态记录递归转为普通 JSON 值；物品/饰品中未上报的可选字段不输出。"""
    if isinstance(obj, Item):
        out = {}
        for f in dataclasses.fields(obj):
            if f.name == "present":
                continue
            if f.name in OPTIONAL_ITEM_PROPS and f.name not in obj.present:
                continue
            out[_key(f.name)] = to_jsonable(getattr(obj, f.name))
        return out
    if isinstance(obj, WearableItem):
        out = {"wearable": to_jsonable(obj.wearable)}
        if obj.has_style:
            out["style"] = to_jsonable(obj.style)
        return out
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {_key(f.name): to_jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj


def export_state(obj: Any, output_path: str | Path | None = None) -> Path:
    """将 GameState / GameStateEvent 写入 JSON。"""
    if output_path is None:
        from .config import load_config
        cfg = load_config()
        out_dir = get_output_dir()
        out_path = out_dir / cfg["output"].get("state_file", "state.json")
    else:
        out_path = Path(output_path)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(to_jsonable(obj), f, ensure_ascii=False, indent=2)
    return out_path
