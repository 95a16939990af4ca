import pytest

from roomsdemo.events import EventBus


def test_emit_calls_handlers_in_order_and_collects_results():
    bus = EventBus()
    order = []
    bus.subscribe("evt", lambda **kw: order.append(("a", kw)) or 1)
    bus.subscribe("evt", lambda **kw: order.append(("b", kw)) or 2)
    assert bus.emit("evt", x=1) == [1, 2]
    assert order == [("a", {"x": 1}), ("b", {"x": 1})]


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    seen = []

    def boom(**_):
        raise RuntimeError("boom")

    bus.subscribe("evt", boom)
    bus.subscribe("evt", lambda **kw: seen.append(kw))
    bus.emit("evt", y=2)
    assert seen == [{"y": 2}]


def test_unsubscribe_and_clear():
    bus = EventBus()
    seen = []
    handler = lambda **kw: seen.append(kw)  # noqa: E731
    bus.subscribe("evt", handler)
    bus.subscribe("evt", handler)
    bus.emit("evt")
    assert len(seen) == 1
    bus.unsubscribe("evt", handler)
    bus.emit("evt")
    assert len(seen) == 1
    bus.subscribe("evt", handler)
    bus.clear()
    assert bus.emit("evt") == []


def test_subscribe_requires_callable():
    with pytest.raises(TypeError):
        EventBus().subscribe("evt", 3)
