"""
temporal: delay/loop task scheduling on a monotonic tick clock.

Typical use inside an asyncio program:

    from temporal import Scheduler

    scheduler = Scheduler()
    scheduler.delay(500, lambda task: print("half a second later"))
    scheduler.loop(100, lambda task: task.called == 5 and task.stop())
    await scheduler.wait_idle()
"""

from .config import Settings, get_settings
from .core.clock import DEFAULT_RESOLUTION, Clock
from .core.events import EventEmitter
from .tasks.task_models import Task, TaskKind
from .tasks.task_queue import Delay, Loop, Queue
from .tasks.task_scheduler import AsyncioHost, Scheduler

__all__ = [
    "DEFAULT_RESOLUTION",
    "AsyncioHost",
    "Clock",
    "Delay",
    "EventEmitter",
    "Loop",
    "Queue",
    "Scheduler",
    "Settings",
    "Task",
    "TaskKind",
    "get_settings",
]
