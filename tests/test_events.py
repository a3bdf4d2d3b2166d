import pytest

from pokegesture.events import GestureEvent


def test_emit_calls_listeners_in_registration_order():
    event = GestureEvent("started")
    calls = []
    event.connect(lambda: calls.append("a"))
    event.connect(lambda: calls.append("b"))
    event.connect(lambda: calls.append("c"))

    event.emit()

    assert calls == ["a", "b", "c"]


def test_disconnect_by_token():
    event = GestureEvent()
    calls = []
    first = event.connect(lambda: calls.append(1))
    event.connect(lambda: calls.append(2))

    assert event.disconnect(first) is True
    assert event.disconnect(first) is False
    event.emit()

    assert calls == [2]
    assert len(event) == 1


def test_same_callback_connected_twice_gets_two_tokens():
    event = GestureEvent()
    calls = []

    def listener():
        calls.append(1)

    t1 = event.connect(listener)
    t2 = event.connect(listener)
    assert t1 != t2

    event.emit()
    assert calls == [1, 1]


def test_listener_may_disconnect_itself():
    event = GestureEvent()
    calls = []
    token = None

    def once():
        calls.append("once")
        event.disconnect(token)

    token = event.connect(once)
    event.connect(lambda: calls.append("always"))

    event.emit()
    event.emit()

    assert calls == ["once", "always", "always"]


def test_emit_without_listeners():
    GestureEvent().emit()


def test_connect_rejects_non_callable():
    with pytest.raises(TypeError):
        GestureEvent().connect("not callable")


def test_listener_exception_propagates():
    event = GestureEvent()

    def boom():
        raise RuntimeError("listener failed")

    event.connect(boom)
    with pytest.raises(RuntimeError):
        event.emit()


def test_clear():
    event = GestureEvent("ended")
    event.connect(lambda: None)
    event.clear()
    assert len(event) == 0
    assert "ended" in repr(event)
