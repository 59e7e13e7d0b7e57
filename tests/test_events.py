# tests/test_events.py

from __future__ import annotations

import pytest

from temporal.core.events import EventEmitter


def test_on_emit_in_registration_order() -> None:
    em = EventEmitter()
    seen: list[str] = []

    em.on("x", lambda v: seen.append(f"a{v}"))
    em.on("x", lambda v: seen.append(f"b{v}"))

    assert em.emit("x", 1) is True
    assert seen == ["a1", "b1"]
    assert em.emit("nothing") is False


def test_once_and_off() -> None:
    em = EventEmitter()
    calls: list[int] = []

    def listener(v: int) -> None:
        calls.append(v)

    em.once("x", listener)
    em.emit("x", 1)
    em.emit("x", 2)
    assert calls == [1]
    assert em.listener_count("x") == 0

    em.once("x", listener)
    em.off("x", listener)
    em.emit("x", 3)
    assert calls == [1]

    em.on("x", listener)
    em.off("x", listener)
    em.off("x", listener)  # no-op
    assert em.listener_count("x") == 0


def test_listener_errors_propagate() -> None:
    em = EventEmitter()

    def boom() -> None:
        raise RuntimeError("listener failed")

    em.on("x", boom)
    with pytest.raises(RuntimeError):
        em.emit("x")


def test_remove_all_listeners() -> None:
    em = EventEmitter()
    em.on("a", lambda: None)
    em.on("b", lambda: None)

    em.remove_all_listeners("a")
    assert em.listener_count("a") == 0
    assert em.listener_count("b") == 1

    em.remove_all_listeners()
    assert em.listener_count("b") == 0
