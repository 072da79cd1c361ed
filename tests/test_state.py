import sys

import pytest

from dota_gsi.data.models import GameState, Hero, Player
from dota_gsi.parsers.state import (
    MalformedPayloadError,
    build_state,
    decode_payload,
    detect_mode,
    parse_payload,
)


def test_detect_mode() -> None:
    assert detect_mode({}) == "player"
    assert detect_mode({"player": {"gold": 1}}) == "player"
    assert detect_mode({"player": {"team2": {"player0": {}}}}) == "observer"
    assert detect_mode({"hero": {"team2": {}}}) == "player"


def test_player_mode_round_trip(player_payload) -> None:
    del player_payload["previously"]
    event = parse_payload(player_payload)
    assert event.mode == "player"
    assert event.state.map.game_time == 600
    assert event.state.player.gold == 500
    assert event.changes == GameState()


def test_player_mode_sections(player_payload) -> None:
    state = parse_payload(player_payload).state
    assert isinstance(state.player, Player)
    assert isinstance(state.hero, Hero)
    assert state.provider.appid == 570
    assert state.hero.talents == (True, False, False, True)
    assert state.abilities[3].ultimate is True
    assert state.items.slot[1] is None
    assert state.items.stash[0].charges == 3
    assert [w.wearable for w in state.wearables] == [7453, 7580, 8000]
    assert state.draft is None
    assert state.buildings is None


def test_player_mode_changes_from_previously(player_payload) -> None:
    changes = parse_payload(player_payload).changes
    assert changes.player.gold == 480
    assert changes.player.kills is None
    assert changes.map.game_time == 599
    assert changes.hero is None


def test_observer_mode_slots(observer_payload) -> None:
    event = parse_payload(observer_payload)
    state = event.state
    assert event.mode == "observer"
    assert len(state.player) == 10
    assert state.player[0].gold == 500
    assert state.player[8].gold == 700
    assert state.player[2] is None
    assert state.player[0].observer.net_worth == 9000
    assert state.player[8].observer.camps_stacked == 0
    assert state.hero[8].name == "npc_dota_hero_antimage"
    assert state.hero[0].talents == (True,)
    assert state.abilities[0][0].name == "axe_berserkers_call"
    assert state.items[0].slot[0].name == "item_blink"
    assert state.wearables[0][0].style == 2
    assert state.map.observer.dire_ward_purchase_cooldown == 45


def test_observer_mode_unslotted_sections(observer_payload) -> None:
    state = parse_payload(observer_payload).state
    assert state.draft.pick_bans[0].pick.class_ == "axe"
    assert state.draft.pick_bans[0].ban.class_ == "juggernaut"
    assert state.draft.pick_bans[7].pick.id == 1
    assert state.buildings.dire is None
    assert state.buildings.radiant["dota_goodguys_tower1_top"].health == 1800


def test_observer_changes_use_same_mode(observer_payload) -> None:
    changes = parse_payload(observer_payload).changes
    assert len(changes.player) == 10
    assert changes.player[0].gold == 450
    assert changes.player[0].observer is not None
    assert changes.map is None


def test_team3_player_code_is_read_literally() -> None:
    state = parse_payload({"player": {"team2": {}, "team3": {"player3": {"gold": 700}}}}).state
    assert state.player[3].gold == 700
    assert state.player[8] is None


def test_empty_sections_are_absent() -> None:
    state = build_state({"map": {}, "player": {}, "items": {}, "draft": {}}, "player")
    assert state == GameState()


def test_build_state_without_raw() -> None:
    assert build_state(None, "observer") == GameState()


def test_decode_payload() -> None:
    assert decode_payload(b'{"map": {"game_time": 1}}') == {"map": {"game_time": 1}}


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"{not json",
        b"\xff\xfe",
        b"[1, 2]",
        b"[" * 200000,
        pytest.param(
            b'{"map": {"game_time": ' + b"1" * 5000 + b"}}",
            marks=pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit"),
        ),
    ],
)
def test_decode_payload_rejects_malformed_input(body: bytes) -> None:
    with pytest.raises(MalformedPayloadError):
        decode_payload(body)


def test_huge_index_keys_do_not_break_parsing() -> None:
    payload = {
        "player": {"kill_list": {"victimid_" + "7" * 5000: 1, "victimid_3": 2}},
        "hero": {"talent_" + "1" * 21: True, "talent_2": True},
        "abilities": {"ability" + "5" * 5000: {"name": "x"}, "ability0": {"name": "a"}},
    }
    state = parse_payload(payload).state
    assert [entry.victim_slot for entry in state.player.kill_list] == [3]
    assert state.hero.talents == (None, True)
    assert [a.name for a in state.abilities] == ["a"]


def test_parsed_state_is_hashable(observer_payload) -> None:
    event = parse_payload(observer_payload)
    assert event.state.buildings.radiant is not None
    assert isinstance(hash(event.state), int)
