# src/temporal/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from ..core.events import EventEmitter
from ..core.ports import TaskCallback


class TaskKind(StrEnum):
    """
    How a task behaves after firing.

    Notes:
    - "delay" fires once.
    - "loop" is re-armed at (fire tick + interval) after every firing until stopped.
    """

    DELAY = "delay"
    LOOP = "loop"


@dataclass(slots=True, eq=False)
class Task:
    kind: TaskKind
    interval: int  # ticks, already scaled to the resolution active at creation
    callback: TaskCallback

    created_at: int
    later: int  # target tick
    called_at: int

    called: int = 0
    is_runnable: bool = True
    events: EventEmitter = field(default_factory=EventEmitter, repr=False)

    def stop(self) -> None:
        """Prevent any further firing. Emits "stop" the first time only."""
        if not self.is_runnable:
            return
        self.is_runnable = False
        self.events.emit("stop", self)
