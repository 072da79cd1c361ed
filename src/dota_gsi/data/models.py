"""通用数据模型：GSI 各分区（地图、选手、英雄、物品、选禁等）的规范化记录。"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

Mode = Literal["player", "observer"]

SLOT_COUNT = 10
ITEM_SLOT_COUNT = 9
STASH_SLOT_COUNT = 6
OPTIONAL_ITEM_PROPS = ("can_cast", "cooldown", "charges", "contains_rune")


@dataclass(frozen=True)
class Building:
    """单个建筑（塔、兵营、基地）血量。"""
    health: int | None = None
    max_health: int | None = None


@dataclass(frozen=True)
class Buildings:
    """两队建筑血量（只读映射）；某队本次未上报时为 None。"""
    radiant: Mapping[str, Building] | None = field(default=None, hash=False)
    dire: Mapping[str, Building] | None = field(default=None, hash=False)


@dataclass(frozen=True)
class Provider:
    name: str | None = None
    appid: int | None = None
    version: int | None = None
    timestamp: int | None = None


@dataclass(frozen=True)
class MapObserverExt:
    """仅观战模式下的地图字段。"""
    radiant_ward_purchase_cooldown: int | None = None
    dire_ward_purchase_cooldown: int | None = None
    roshan_state: str | None = None
    roshan_state_end_seconds: int | None = None


@dataclass(frozen=True)
class Map:
    """地图状态。win_team 在比赛未结束时为上游的 "none"。"""
    name: str | None = None
    match_id: str | None = None
    game_time: int | None = None
    clock_time: int | None = None
    daytime: bool | None = None
    nightstalker_night: bool | None = None
    radiant_score: int | None = None
    dire_score: int | None = None
    game_state: str | None = None
    paused: bool | None = None
    win_team: str | None = None
    custom_game_name: str | None = None
    observer: MapObserverExt | None = None


@dataclass(frozen=True)
class KillEntry:
    victim_slot: int
    kill_count: Any


@dataclass(frozen=True)
class PlayerObserverExt:
    """仅观战模式下的选手统计。"""
    net_worth: int | None = None
    hero_damage: int | None = None
    hero_healing: int | None = None
    tower_damage: int | None = None
    wards_purchased: int | None = None
    wards_placed: int | None = None
    wards_destroyed: int | None = None
    runes_activated: int | None = None
    camps_stacked: int | None = None
    support_gold_spent: int | None = None
    consumable_gold_spent: int | None = None
    item_gold_spent: int | None = None
    gold_lost_to_death: int | None = None
    gold_spent_on_buybacks: int | None = None


@dataclass(frozen=True)
class Player:
    steam_id: str | None = None
    account_id: str | None = None
    name: str | None = None
    activity: str | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    last_hits: int | None = None
    denies: int | None = None
    kill_streak: int | None = None
    commands_issued: int | None = None
    kill_list: tuple[KillEntry, ...] = ()
    team_name: str | None = None
    player_slot: int | None = None
    team_slot: int | None = None
    gold: int | None = None
    gold_reliable: int | None = None
    gold_unreliable: int | None = None
    gold_from_hero_kills: int | None = None
    gold_from_creep_kills: int | None = None
    gold_from_income: int | None = None
    gold_from_shared: int | None = None
    gpm: int | None = None
    xpm: int | None = None
    observer: PlayerObserverExt | None = None


@dataclass(frozen=True)
class Hero:
    x_pos: int | None = None
    y_pos: int | None = None
    id: int | None = None
    name: str | None = None
    level: int | None = None
    xp: int | None = None
    alive: bool | None = None
    respawn_seconds: int | None = None
    buyback_cost: int | None = None
    buyback_cooldown: int | None = None
    health: int | None = None
    max_health: int | None = None
    health_percent: int | None = None
    mana: int | None = None
    max_mana: int | None = None
    mana_percent: int | None = None
    silenced: bool | None = None
    stunned: bool | None = None
    disarmed: bool | None = None
    magic_immune: bool | None = None
    hexed: bool | None = None
    muted: bool | None = None
    break_: bool | None = None
    aghanims_scepter: bool | None = None
    aghanims_shard: bool | None = None
    smoked: bool | None = None
    has_debuff: bool | None = None
    selected_unit: bool | None = None
    talents: tuple[bool | None, ...] = ()  # talent_N -> talents[N-1]
    attributes_level: int | None = None


@dataclass(frozen=True)
class Ability:
    name: str | None = None
    level: int | None = None
    can_cast: bool | None = None
    passive: bool | None = None
    ability_active: bool | None = None
    cooldown: int | None = None
    ultimate: bool | None = None


@dataclass(frozen=True)
class Item:
    """
    单个物品。can_cast / cooldown / charges / contains_rune 只在上游给出时才有意义，
    present 记录实际出现过的可选字段，导出时未出现的字段不会输出。
    """
    name: str | None = None
    purchaser: int | None = None
    item_level: int | None = None
    passive: bool | None = None
    can_cast: bool | None = None
    cooldown: int | None = None
    charges: int | None = None
    contains_rune: str | None = None
    present: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ItemContainer:
    """物品栏与储藏处；"empty" 与缺失的格子都为 None。"""
    slot: tuple[Item | None, ...] = (None,) * ITEM_SLOT_COUNT
    stash: tuple[Item | None, ...] = (None,) * STASH_SLOT_COUNT


@dataclass(frozen=True)
class DraftSelection:
    id: int | None = None
    class_: str | None = None


@dataclass(frozen=True)
class PickBan:
    pick: DraftSelection | None = None
    ban: DraftSelection | None = None


@dataclass(frozen=True)
class Draft:
    active_team: int | None = None
    pick: bool | None = None
    active_team_time_remaining: int | None = None
    radiant_bonus_time: int | None = None
    dire_bonus_time: int | None = None
    pick_bans: tuple[PickBan | None, ...] = (None,) * SLOT_COUNT


@dataclass(frozen=True)
class WearableItem:
    wearable: Any
    style: Any = None
    has_style: bool = False


# 观战模式下按 slot（0-9）排列的 10 元组，空位为 None
Slotted = tuple[Optional[Any], ...]


@dataclass(frozen=True)
class GameState:
    """
    一次快照的规范化状态。玩家模式下各分区为单条记录；
    观战模式下 player / hero / abilities / items / wearables 为长度 10 的元组。
    分区缺失（或上游给出空对象）时为 None。
    """
    buildings: Buildings | None = None
    provider: Provider | None = None
    map: Map | None = None
    player: Union[Player, Slotted, None] = None
    hero: Union[Hero, Slotted, None] = None
    abilities: Union[tuple[Ability | None, ...], Slotted, None] = None
    items: Union[ItemContainer, Slotted, None] = None
    draft: Draft | None = None
    wearables: Union[tuple[WearableItem, ...], Slotted, None] = None


@dataclass(frozen=True)
class GameStateEvent:
    """派发给订阅者的一对状态：当前状态与相对上一快照的变化。"""
    mode: Mode
    state: GameState
    changes: GameState
