from dota_gsi.parsers.fields import Field, has_section, read_field


def test_field_defaults_when_key_missing() -> None:
    assert Field("gold").read({}) is None
    assert Field("gold", default=-1).read({"xp": 1}) == -1


def test_field_presence_wins_over_default_for_falsy_values() -> None:
    raw = {"gold": 0, "alive": False, "name": "", "cooldown": None}
    assert read_field(raw, "gold", default=99) == 0
    assert read_field(raw, "alive", default=True) is False
    assert read_field(raw, "name", default="x") == ""
    assert read_field(raw, "cooldown", default=5) is None


def test_field_on_non_mapping_returns_default() -> None:
    assert read_field(None, "gold") is None
    assert read_field("oops", "gold", default=1) == 1


def test_has_section_treats_empty_object_as_absent() -> None:
    assert has_section({"map": {"game_time": 1}}, "map")
    assert not has_section({"map": {}}, "map")
    assert not has_section({}, "map")
    assert not has_section(None, "map")
    assert not has_section({"map": "start"}, "map")
