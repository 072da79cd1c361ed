"""原始 JSON 字段读取：缺失键取默认值，分区存在性判断。"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Field:
    """
    一个可选字段：原始键名 + 缺失时的默认值。
    只要键存在就取原值（包括 0、False、""），不做类型转换。
    """
    key: str
    default: Any = None

    def read(self, raw: Any) -> Any:
        if isinstance(raw, Mapping) and self.key in raw:
            return raw[self.key]
        return self.default


def read_field(raw: Any, key: str, default: Any = None) -> Any:
    return Field(key, default).read(raw)


def read_fields(raw: Any, fields: Mapping[str, Field]) -> dict[str, Any]:
    """按 {记录字段名: Field} 批量读取，返回可直接传给 dataclass 的关键字参数。"""
    return {name: f.read(raw) for name, f in fields.items()}


def has_section(raw: Any, key: str) -> bool:
    """分区存在且为非空对象才视为存在；空对象与缺失等价。"""
    if not isinstance(raw, Mapping) or key not in raw:
        return False
    section = raw[key]
    return isinstance(section, Mapping) and len(section) > 0
