from __future__ import annotations

import copy
from typing import Any

import pytest


PLAYER_PAYLOAD: dict[str, Any] = {
    "provider": {"name": "Dota 2", "appid": 570, "version": 47, "timestamp": 1700000000},
    "map": {
        "name": "start",
        "matchid": "7412345678",
        "game_time": 600,
        "clock_time": 510,
        "daytime": True,
        "nightstalker_night": False,
        "radiant_score": 0,
        "dire_score": 3,
        "game_state": "DOTA_GAMERULES_STATE_GAME_IN_PROGRESS",
        "paused": False,
        "win_team": "none",
        "customgamename": "",
    },
    "player": {
        "steamid": "76561198000000000",
        "accountid": "39812345",
        "name": "tester",
        "activity": "playing",
        "kills": 2,
        "deaths": 0,
        "assists": 4,
        "last_hits": 55,
        "denies": 7,
        "kill_list": {"victimid_6": 1, "victimid_9": 2},
        "team_name": "radiant",
        "gold": 500,
        "gold_reliable": 120,
        "gold_unreliable": 380,
        "gpm": 410,
        "xpm": 520,
    },
    "hero": {
        "xpos": -1500,
        "ypos": 2300,
        "id": 2,
        "name": "npc_dota_hero_axe",
        "level": 9,
        "alive": True,
        "respawn_seconds": 0,
        "health": 1100,
        "max_health": 1400,
        "break": False,
        "talent_1": True,
        "talent_2": False,
        "talent_3": False,
        "talent_4": True,
        "talented": True,
        "attributes_level": 0,
    },
    "abilities": {
        "ability0": {"name": "axe_berserkers_call", "level": 3, "can_cast": True, "passive": False,
                     "ability_active": True, "cooldown": 0, "ultimate": False},
        "ability3": {"name": "axe_culling_blade", "level": 1, "can_cast": False, "passive": False,
                     "ability_active": True, "cooldown": 42, "ultimate": True},
    },
    "items": {
        "slot0": {"name": "item_blink", "purchaser": 0, "item_level": 1, "can_cast": True, "cooldown": 0,
                  "passive": False},
        "slot1": {"name": "empty"},
        "slot2": {"name": "item_magic_wand", "purchaser": 0, "item_level": 1, "passive": False, "charges": 11},
        "stash0": {"name": "item_tango", "purchaser": 0, "item_level": 1, "passive": False, "charges": 3},
        "teleport0": {"name": "item_tpscroll", "purchaser": 0, "passive": False},
    },
    "wearables": {"wearable0": 7453, "wearable1": 7580, "style1": 1, "wearable2": 8000},
    "previously": {
        "player": {"gold": 480},
        "map": {"game_time": 599},
    },
}

OBSERVER_PAYLOAD: dict[str, Any] = {
    "map": {
        "name": "start",
        "game_time": 1200,
        "win_team": "none",
        "radiant_ward_purchase_cooldown": 0,
        "dire_ward_purchase_cooldown": 45,
        "roshan_state": "alive",
        "roshan_state_end_seconds": 0,
    },
    "player": {
        "team2": {
            "player0": {"name": "a", "gold": 500, "net_worth": 9000, "kill_list": {"victimid_7": 1}},
            "player1": {"name": "b", "gold": 300},
        },
        "team3": {
            "player8": {"name": "i", "gold": 700, "camps_stacked": 0},
        },
    },
    "hero": {
        "team2": {"player0": {"id": 2, "name": "npc_dota_hero_axe", "talent_1": True}},
        "team3": {"player8": {"id": 1, "name": "npc_dota_hero_antimage"}},
    },
    "abilities": {
        "team2": {"player0": {"ability0": {"name": "axe_berserkers_call", "level": 1}}},
    },
    "items": {
        "team2": {"player0": {"slot0": {"name": "item_blink", "purchaser": 0, "passive": False}}},
    },
    "wearables": {
        "team2": {"player0": {"wearable0": 1, "style0": 2}},
    },
    "draft": {
        "activeteam": 2,
        "pick": True,
        "activeteam_time_remaining": 25,
        "radiant_bonus_time": 130,
        "dire_bonus_time": 130,
        "team2": {"home_team": True, "pick0_id": 2, "pick0_class": "axe", "ban0_id": 8, "ban0_class": "juggernaut"},
        "team3": {"home_team": False, "pick2_id": 1, "pick2_class": "antimage"},
    },
    "buildings": {
        "radiant": {"dota_goodguys_tower1_top": {"health": 1800, "max_health": 1800}},
    },
    "previously": {
        "player": {"team2": {"player0": {"gold": 450}}},
    },
}


@pytest.fixture
def player_payload() -> dict[str, Any]:
    return copy.deepcopy(PLAYER_PAYLOAD)


@pytest.fixture
def observer_payload() -> dict[str, Any]:
    return copy.deepcopy(OBSERVER_PAYLOAD)
