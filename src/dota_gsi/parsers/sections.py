"""GSI 各分区解析：原始 JSON 子树 -> 规范化记录。所有字段缺失时为 None，不抛异常。"""
from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ..data.models import (
    ITEM_SLOT_COUNT,
    OPTIONAL_ITEM_PROPS,
    SLOT_COUNT,
    STASH_SLOT_COUNT,
    Ability,
    Building,
    Buildings,
    Draft,
    DraftSelection,
    Hero,
    Item,
    ItemContainer,
    KillEntry,
    Map,
    MapObserverExt,
    PickBan,
    Player,
    PlayerObserverExt,
    Provider,
    WearableItem,
)
from .fields import Field, read_field, read_fields
from .slots import KeyScan, fill_slots, sparse_to_tuple

TRAILING_DIGITS = re.compile(r"(\d+)$")
TALENT_KEY = re.compile(r"^talent_(\d+)$")
ABILITY_KEY = re.compile(r"^ability(\d+)$")
ITEM_KEY = re.compile(r"^(slot|stash)(\d+)$")
DRAFT_KEY = re.compile(r"^(pick|ban)(\d+)_(id|class)$")
WEARABLE_KEY = re.compile(r"^(wearable|style)(\d+)$")

EMPTY_ITEM = "empty"
MAX_TALENTS = 8
MAX_ABILITIES = 32
DRAFT_TEAM_OFFSETS = {"team2": 0, "team3": 5}


def _fields(**mapping: str) -> dict[str, Field]:
    return {name: Field(key) for name, key in mapping.items()}


PROVIDER_FIELDS = _fields(name="name", appid="appid", version="version", timestamp="timestamp")

MAP_FIELDS = _fields(
    name="name",
    match_id="matchid",
    game_time="game_time",
    clock_time="clock_time",
    daytime="daytime",
    nightstalker_night="nightstalker_night",
    radiant_score="radiant_score",
    dire_score="dire_score",
    game_state="game_state",
    paused="paused",
    win_team="win_team",
    custom_game_name="customgamename",
)

MAP_OBSERVER_FIELDS = _fields(
    radiant_ward_purchase_cooldown="radiant_ward_purchase_cooldown",
    dire_ward_purchase_cooldown="dire_ward_purchase_cooldown",
    roshan_state="roshan_state",
    roshan_state_end_seconds="roshan_state_end_seconds",
)

PLAYER_FIELDS = _fields(
    steam_id="steamid",
    account_id="accountid",
    name="name",
    activity="activity",
    kills="kills",
    deaths="deaths",
    assists="assists",
    last_hits="last_hits",
    denies="denies",
    kill_streak="kill_streak",
    commands_issued="commands_issued",
    team_name="team_name",
    player_slot="player_slot",
    team_slot="team_slot",
    gold="gold",
    gold_reliable="gold_reliable",
    gold_unreliable="gold_unreliable",
    gold_from_hero_kills="gold_from_hero_kills",
    gold_from_creep_kills="gold_from_creep_kills",
    gold_from_income="gold_from_income",
    gold_from_shared="gold_from_shared",
    gpm="gpm",
    xpm="xpm",
)

PLAYER_OBSERVER_FIELDS = _fields(
    net_worth="net_worth",
    hero_damage="hero_damage",
    hero_healing="hero_healing",
    tower_damage="tower_damage",
    wards_purchased="wards_purchased",
    wards_placed="wards_placed",
    wards_destroyed="wards_destroyed",
    runes_activated="runes_activated",
    camps_stacked="camps_stacked",
    support_gold_spent="support_gold_spent",
    consumable_gold_spent="consumable_gold_spent",
    item_gold_spent="item_gold_spent",
    gold_lost_to_death="gold_lost_to_death",
    gold_spent_on_buybacks="gold_spent_on_buybacks",
)

HERO_FIELDS = _fields(
    x_pos="xpos",
    y_pos="ypos",
    id="id",
    name="name",
    level="level",
    xp="xp",
    alive="alive",
    respawn_seconds="respawn_seconds",
    buyback_cost="buyback_cost",
    buyback_cooldown="buyback_cooldown",
    health="health",
    max_health="max_health",
    health_percent="health_percent",
    mana="mana",
    max_mana="max_mana",
    mana_percent="mana_percent",
    silenced="silenced",
    stunned="stunned",
    disarmed="disarmed",
    magic_immune="magicimmune",
    hexed="hexed",
    muted="muted",
    break_="break",
    aghanims_scepter="aghanims_scepter",
    aghanims_shard="aghanims_shard",
    smoked="smoked",
    has_debuff="has_debuff",
    selected_unit="selected_unit",
    attributes_level="attributes_level",
)

ABILITY_FIELDS = _fields(
    name="name",
    level="level",
    can_cast="can_cast",
    passive="passive",
    ability_active="ability_active",
    cooldown="cooldown",
    ultimate="ultimate",
)

DRAFT_FIELDS = _fields(
    active_team="activeteam",
    pick="pick",
    active_team_time_remaining="activeteam_time_remaining",
    radiant_bonus_time="radiant_bonus_time",
    dire_bonus_time="dire_bonus_time",
)


def parse_building_map(raw: Any) -> Mapping[str, Building]:
    """{建筑 id: {health, max_health}} -> 只读的 {建筑 id: Building}。"""
    if not isinstance(raw, Mapping):
        return MappingProxyType({})
    return MappingProxyType({
        str(name): Building(
            health=read_field(value, "health"),
            max_health=read_field(value, "max_health"),
        )
        for name, value in raw.items()
    })


def parse_buildings(raw: Mapping[str, Any]) -> Buildings:
    radiant = raw.get("radiant")
    dire = raw.get("dire")
    return Buildings(
        radiant=parse_building_map(radiant) if radiant is not None else None,
        dire=parse_building_map(dire) if dire is not None else None,
    )


def parse_provider(raw: Mapping[str, Any]) -> Provider:
    return Provider(**read_fields(raw, PROVIDER_FIELDS))


def parse_map(raw: Mapping[str, Any], observer_mode: bool) -> Map:
    ext = MapObserverExt(**read_fields(raw, MAP_OBSERVER_FIELDS)) if observer_mode else None
    return Map(**read_fields(raw, MAP_FIELDS), observer=ext)


def parse_kill_list(raw: Any) -> tuple[KillEntry, ...]:
    """{"victimid_3": 2, ...} -> (KillEntry(3, 2), ...)；键名末尾没有数字的条目被丢弃。"""
    if not isinstance(raw, Mapping):
        return ()
    entries = []
    for victim_slot, _, count in KeyScan(raw, TRAILING_DIGITS):
        entries.append(KillEntry(victim_slot=victim_slot, kill_count=count))
    return tuple(entries)


def parse_player(raw: Mapping[str, Any], observer_mode: bool) -> Player:
    ext = PlayerObserverExt(**read_fields(raw, PLAYER_OBSERVER_FIELDS)) if observer_mode else None
    return Player(
        **read_fields(raw, PLAYER_FIELDS),
        kill_list=parse_kill_list(read_field(raw, "kill_list", {})),
        observer=ext,
    )


def parse_talents(raw: Mapping[str, Any]) -> tuple[bool | None, ...]:
    """talent_1..talent_N -> talents[0..N-1]；talent_0 等无法落位的键被忽略。"""
    return sparse_to_tuple(((n - 1, value) for n, _, value in KeyScan(raw, TALENT_KEY) if n >= 1), MAX_TALENTS)


def parse_hero(raw: Mapping[str, Any]) -> Hero:
    # 玩家模式与观战模式字段相同
    return Hero(**read_fields(raw, HERO_FIELDS), talents=parse_talents(raw))


def parse_ability(raw: Any) -> Ability:
    return Ability(**read_fields(raw, ABILITY_FIELDS))


def parse_abilities(raw: Mapping[str, Any]) -> tuple[Ability | None, ...]:
    return sparse_to_tuple(((n, parse_ability(value)) for n, _, value in KeyScan(raw, ABILITY_KEY)), MAX_ABILITIES)


def parse_item(raw: Any) -> Item | None:
    """物品名为 "empty" 时返回 None；可选字段只在原始数据中出现时才记录。"""
    name = read_field(raw, "name")
    if name == EMPTY_ITEM:
        return None
    optional = {prop: raw[prop] for prop in OPTIONAL_ITEM_PROPS if isinstance(raw, Mapping) and prop in raw}
    return Item(
        name=name,
        purchaser=read_field(raw, "purchaser"),
        item_level=read_field(raw, "item_level"),
        passive=read_field(raw, "passive"),
        present=frozenset(optional),
        **optional,
    )


def parse_items(raw: Mapping[str, Any]) -> ItemContainer:
    slot_items: list[tuple[int, Item | None]] = []
    stash_items: list[tuple[int, Item | None]] = []
    for index, m, value in KeyScan(raw, ITEM_KEY, index_group=2):
        target = slot_items if m.group(1) == "slot" else stash_items
        target.append((index, parse_item(value)))
    return ItemContainer(
        slot=fill_slots(slot_items, ITEM_SLOT_COUNT),
        stash=fill_slots(stash_items, STASH_SLOT_COUNT),
    )


def parse_draft(raw: Mapping[str, Any]) -> Draft:
    """
    选禁：team2 的 pickN/banN 落到 slot N，team3 落到 slot N+5。
    每个 slot 第一次出现时才创建，pick 与 ban 各自在看到 id/class 时填充。
    """
    picks: dict[int, dict[str, dict[str, Any]]] = {}
    for team, offset in DRAFT_TEAM_OFFSETS.items():
        for n, m, value in KeyScan(raw.get(team), DRAFT_KEY, index_group=2):
            slot = n + offset
            if not 0 <= slot < SLOT_COUNT:
                continue
            kind, attr = m.group(1), m.group(3)
            picks.setdefault(slot, {}).setdefault(kind, {})[attr] = value

    def _selection(values: dict[str, Any] | None) -> DraftSelection | None:
        if values is None:
            return None
        return DraftSelection(id=values.get("id"), class_=values.get("class"))

    pick_bans = fill_slots(
        (slot, PickBan(pick=_selection(entry.get("pick")), ban=_selection(entry.get("ban"))))
        for slot, entry in picks.items()
    )
    return Draft(**read_fields(raw, DRAFT_FIELDS), pick_bans=pick_bans)


def parse_wearables(raw: Mapping[str, Any]) -> tuple[WearableItem, ...]:
    """wearableN / styleN 配对后按 N 升序压紧；只有 style 没有 wearable 的 N 被丢弃。"""
    wearables: dict[int, Any] = {}
    styles: dict[int, Any] = {}
    for n, m, value in KeyScan(raw, WEARABLE_KEY, index_group=2):
        if m.group(1) == "wearable":
            wearables[n] = value
        else:
            styles[n] = value
    return tuple(
        WearableItem(wearable=wearables[n], style=styles.get(n), has_style=n in styles)
        for n in sorted(wearables)
    )
