# src/temporal/core/events.py

"""
Simple publish/subscribe emitter for lifecycle signals.

Tasks, queues and the scheduler each own one of these (composition) instead of
inheriting from a generic emitter base.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

Listener = Callable[..., Any]

logger = logging.getLogger(__name__)


class _Once:
    """Wrapper that detaches itself before the first call."""

    __slots__ = ("emitter", "event", "listener")

    def __init__(self, emitter: EventEmitter, event: str, listener: Listener) -> None:
        self.emitter = emitter
        self.event = event
        self.listener = listener

    def __call__(self, *args: Any) -> Any:
        self.emitter.off(self.event, self)
        return self.listener(*args)


class EventEmitter:
    """A minimal topic-based emitter. Listener errors propagate to the emitter."""

    def __init__(self) -> None:
        # Map event -> listeners in registration order
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> Listener:
        """Subscribe *listener* to *event*. Returns the listener (usable as decorator)."""
        self._listeners[event].append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        self._listeners[event].append(_Once(self, event, listener))
        return listener

    def off(self, event: str, listener: Listener) -> None:
        """Remove the first registration of *listener* (plain or via once())."""
        listeners = self._listeners.get(event)
        if not listeners:
            return
        for i, fn in enumerate(listeners):
            if fn is listener or (isinstance(fn, _Once) and fn.listener is listener):
                del listeners[i]
                break
        if not listeners:
            del self._listeners[event]

    def emit(self, event: str, *args: Any) -> bool:
        """
        Call every listener of *event* with *args*.

        Returns True if there was at least one listener.
        """
        listeners = self._listeners.get(event)
        if not listeners:
            return False
        # Snapshot: once() wrappers mutate the list while we iterate.
        for fn in list(listeners):
            fn(*args)
        return True

    def remove_all_listeners(self, event: str | None = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
