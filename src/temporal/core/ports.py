# src/temporal/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the scheduler.

The dispatcher never talks to asyncio directly: it asks a TurnHost to run the
next poll pass "on the next cooperative turn". Tests swap in a manual host.
"""

from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task

TaskCallback = Callable[["Task"], Any]
TimeSource = Callable[[], int]
# Integer nanoseconds from a monotonic source (time.monotonic_ns-compatible).


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class TurnHost(Protocol):
    """Host-side port: run a callback on the next cooperative turn."""

    def call_soon(self, callback: Callable[[], None]) -> Cancellable: ...
