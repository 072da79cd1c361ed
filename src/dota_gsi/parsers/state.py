"""状态组装：判断上报模式，解码请求体，并把整棵原始快照（及其 previously）组装成 GameState。"""
from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import Any

from ..data.models import GameState, GameStateEvent, Mode
from .fields import has_section
from .sections import (
    parse_abilities,
    parse_buildings,
    parse_draft,
    parse_hero,
    parse_items,
    parse_map,
    parse_player,
    parse_provider,
    parse_wearables,
)
from .slots import SlotScan, fill_slots


class MalformedPayloadError(ValueError):
    """请求体不是合法的 JSON 对象。"""


def decode_payload(body: bytes | str) -> dict[str, Any]:
    """把请求体解码为 JSON 对象；失败时抛 MalformedPayloadError，携带原始错误信息。"""
    try:
        text = body.decode("utf-8") if isinstance(body, bytes) else body
        payload = json.loads(text)
    except (ValueError, RecursionError) as e:
        # 含超长整数（ValueError）与过深嵌套（RecursionError）
        raise MalformedPayloadError(str(e)) from e
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def detect_mode(payload: Any) -> Mode:
    """player 下存在 team2 即为观战模式，否则为玩家模式。"""
    player = payload.get("player") if isinstance(payload, Mapping) else None
    if isinstance(player, Mapping) and "team2" in player:
        return "observer"
    return "player"


def _per_slot(raw: Mapping[str, Any], observer_mode: bool, parse: Callable[[Any], Any]) -> Any:
    # 观战模式下按 slot 展开为 10 元组，玩家模式下直接解析单条
    if observer_mode:
        return fill_slots((slot, parse(entity)) for slot, entity in SlotScan(raw) if isinstance(entity, Mapping))
    return parse(raw)


def build_state(raw: Any, mode: Mode) -> GameState:
    """
    按分区存在性逐一调用解析器。raw 为 None（例如没有 previously）时所有分区都为 None。
    mode 由调用方对整个请求只判断一次，previously 沿用同一模式。
    """
    if not isinstance(raw, Mapping):
        return GameState()
    observer_mode = mode == "observer"
    sections: dict[str, Any] = {}

    if has_section(raw, "buildings"):
        sections["buildings"] = parse_buildings(raw["buildings"])
    if has_section(raw, "provider"):
        sections["provider"] = parse_provider(raw["provider"])
    if has_section(raw, "map"):
        sections["map"] = parse_map(raw["map"], observer_mode)
    if has_section(raw, "player"):
        sections["player"] = _per_slot(raw["player"], observer_mode, lambda r: parse_player(r, observer_mode))
    if has_section(raw, "hero"):
        sections["hero"] = _per_slot(raw["hero"], observer_mode, parse_hero)
    if has_section(raw, "abilities"):
        sections["abilities"] = _per_slot(raw["abilities"], observer_mode, parse_abilities)
    if has_section(raw, "items"):
        sections["items"] = _per_slot(raw["items"], observer_mode, parse_items)
    if has_section(raw, "draft"):
        sections["draft"] = parse_draft(raw["draft"])
    if has_section(raw, "wearables"):
        sections["wearables"] = _per_slot(raw["wearables"], observer_mode, parse_wearables)

    return GameState(**sections)


def parse_payload(payload: Mapping[str, Any]) -> GameStateEvent:
    """完整快照 -> (模式, 当前状态, 变化)。"""
    mode = detect_mode(payload)
    return GameStateEvent(
        mode=mode,
        state=build_state(payload, mode),
        changes=build_state(payload.get("previously"), mode),
    )
