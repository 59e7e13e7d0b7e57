# src/temporal/tasks/task_queue.py

from __future__ import annotations

"""
Task sequencing.

A Queue schedules a chain of operations at cumulative offsets from the moment
they are added:

    scheduler.queue([
        Delay(100, a),   # fires at +100
        Delay(50, b),    # fires at +150
        Loop(25, c),     # first firing at +175, then every 25
    ])

The last entry is special:
- after its callback runs, the queue emits "end" (once per chain) and resets
  its cumulative offset, so a later add() starts a fresh timeline;
- a trailing Loop is started by a delay of (cumulative - ticks), keeping its
  first firing on the chain's timeline instead of restarting from zero.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..core.events import EventEmitter
from ..core.ports import TaskCallback
from .task_models import Task, TaskKind

if TYPE_CHECKING:
    from .task_scheduler import Scheduler


@dataclass(frozen=True, slots=True)
class Delay:
    ticks: float
    task: TaskCallback


@dataclass(frozen=True, slots=True)
class Loop:
    ticks: float
    task: TaskCallback


QueueEntry = Delay | Loop
QueueEntryLike = QueueEntry | Mapping[str, Any]

_ENTRY_TYPES: dict[str, type[Delay] | type[Loop]] = {
    TaskKind.DELAY: Delay,
    TaskKind.LOOP: Loop,
}


def parse_entry(raw: QueueEntryLike) -> QueueEntry:
    """
    Accept a Delay/Loop entry, or the mapping form {"delay": 100, "task": fn}.

    A mapping must carry "task" plus exactly one operation key.
    """
    if isinstance(raw, (Delay, Loop)):
        return raw

    if not isinstance(raw, Mapping):
        raise TypeError(f"queue entry must be Delay, Loop or a mapping, got {raw!r}")
    if "task" not in raw:
        raise ValueError(f"queue entry has no 'task': {raw!r}")

    ops = [k for k in raw if k != "task"]
    if len(ops) != 1:
        raise ValueError(f"queue entry needs exactly one of 'delay'/'loop': {raw!r}")

    entry_type = _ENTRY_TYPES.get(ops[0])
    if entry_type is None:
        raise ValueError(f"unknown queue operation {ops[0]!r}")
    return entry_type(raw[ops[0]], raw["task"])


class Queue:
    """
    Handle for a chain of scheduled operations.

    Events on `queue.events`:
    - "end": the last entry of a chain fired (payload: the firing Task)
    - "stop": stop() was called
    """

    def __init__(self, scheduler: Scheduler, entries: Iterable[QueueEntryLike]) -> None:
        self._scheduler = scheduler
        self.refs: list[Task] = []
        self.cumulative: float = 0
        self.events = EventEmitter()
        self.add(entries)

    def add(self, entries: Iterable[QueueEntryLike]) -> None:
        """
        Schedule *entries* in order, continuing from the current cumulative offset.

        A list argument is consumed: each entry is removed as it is scheduled.
        """
        pending = entries if isinstance(entries, list) else list(entries)
        scheduler = self._scheduler

        while pending:
            entry = parse_entry(pending.pop(0))
            self.cumulative += entry.ticks

            if pending:
                self.refs.append(scheduler.delay(self.cumulative, entry.task))
                continue

            callback = self._finishing(entry.task)
            if isinstance(entry, Loop):
                self.refs.append(self._aligned_loop(entry.ticks, callback))
            else:
                self.refs.append(scheduler.delay(self.cumulative, callback))

    def stop(self) -> None:
        for ref in self.refs:
            ref.stop()
        self.events.emit("stop", self)

    def _finishing(self, fn: TaskCallback) -> TaskCallback:
        ended = False

        def finish(context: Task) -> None:
            nonlocal ended
            fn(context)
            if not ended:
                ended = True
                self.events.emit("end", context)
            self.cumulative = 0

        return finish

    def _aligned_loop(self, ticks: float, callback: TaskCallback) -> Task:
        scheduler = self._scheduler

        def start(_context: Task) -> None:
            self.refs.append(scheduler.loop(ticks, callback))

        return scheduler.delay(self.cumulative - ticks, start)
