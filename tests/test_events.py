import pytest

from dota_gsi.events import EventBus


def test_publish_calls_handlers_in_registration_order() -> None:
    bus = EventBus()
    calls: list[tuple[str, int]] = []
    bus.subscribe("t", lambda v: calls.append(("first", v)))
    bus.subscribe("t", lambda v: calls.append(("second", v)))
    bus.subscribe("other", lambda v: calls.append(("other", v)))

    assert bus.publish("t", 1) == 2
    assert calls == [("first", 1), ("second", 1)]


def test_publish_without_subscribers() -> None:
    assert EventBus().publish("nobody", object()) == 0


def test_unsubscribe() -> None:
    bus = EventBus()
    seen: list[int] = []
    handler = bus.subscribe("t", seen.append)
    assert bus.unsubscribe("t", handler)
    assert not bus.unsubscribe("t", handler)
    bus.publish("t", 1)
    assert seen == []
    assert bus.handler_count("t") == 0


def test_handler_exception_propagates() -> None:
    bus = EventBus()

    def boom(_: object) -> None:
        raise RuntimeError("handler failed")

    bus.subscribe("t", boom)
    with pytest.raises(RuntimeError, match="handler failed"):
        bus.publish("t", None)
