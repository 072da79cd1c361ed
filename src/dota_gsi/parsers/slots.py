"""按键名模式扫描原始对象，恢复 (序号, 值) 序列；观战模式下的 10 人 slot 提取。"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from ..data.models import SLOT_COUNT

logger = logging.getLogger(__name__)

PLAYER_KEY = re.compile(r"^player(\d+)$")
MAX_INDEX_DIGITS = 6


class KeyScan:
    """
    遍历 raw 中键名匹配 pattern 的条目，产出 (index, match, value)。
    index 取 pattern 的第 index_group 组并转为 int。
    每次 iter() 都是一次新的遍历，按源对象的插入顺序，不缓存、无副作用。
    """

    def __init__(self, raw: Any, pattern: re.Pattern[str], index_group: int | str = 1):
        self.raw = raw if isinstance(raw, Mapping) else {}
        self.pattern = pattern
        self.index_group = index_group

    def __iter__(self) -> Iterator[tuple[int, re.Match[str], Any]]:
        for key, value in self.raw.items():
            m = self.pattern.search(str(key))
            if m is None:
                continue
            digits = m.group(self.index_group)
            if len(digits) > MAX_INDEX_DIGITS:
                logger.debug("丢弃序号过长的键 %.32s...", key)
                continue
            yield int(digits), m, value

    def __bool__(self) -> bool:
        return any(True for _ in self)


class SlotScan:
    """
    观战模式的 {teamN: {playerN: raw}} 两层对象 -> (slot, raw)。
    slot 直接取 player 后的数字，不加队伍偏移；超出 0-9 或非对象的条目被丢弃。
    """

    def __init__(self, raw: Any, slot_count: int = SLOT_COUNT):
        self.raw = raw if isinstance(raw, Mapping) else {}
        self.slot_count = slot_count

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        for team, players in self.raw.items():
            if not isinstance(players, Mapping):
                logger.debug("跳过非对象的队伍条目 %r", team)
                continue
            for slot, _, raw_entity in KeyScan(players, PLAYER_KEY):
                if not 0 <= slot < self.slot_count:
                    logger.debug("丢弃越界 slot %s (%s)", slot, team)
                    continue
                yield slot, raw_entity


def fill_slots(pairs: Iterable[tuple[int, Any]], size: int = SLOT_COUNT) -> tuple[Any, ...]:
    """把 (slot, value) 写入长度为 size 的元组，未写入的位置为 None；越界的 slot 被丢弃。"""
    slots: list[Any] = [None] * size
    for slot, value in pairs:
        if 0 <= slot < size:
            slots[slot] = value
    return tuple(slots)


def sparse_to_tuple(pairs: Iterable[tuple[int, Any]], max_len: int) -> tuple[Any, ...]:
    """(index, value) -> 以最大 index 为长度的元组，中间空洞为 None；index 不小于 max_len 的条目被丢弃。"""
    indexed: dict[int, Any] = {}
    for index, value in pairs:
        if not 0 <= index < max_len:
            logger.debug("丢弃越界序号 %s (上限 %s)", index, max_len)
            continue
        indexed[index] = value
    if not indexed:
        return ()
    out: list[Any] = [None] * (max(indexed) + 1)
    for index, value in indexed.items():
        out[index] = value
    return tuple(out)
