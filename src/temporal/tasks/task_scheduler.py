# src/temporal/tasks/task_scheduler.py

from __future__ import annotations

"""
Task scheduler.

A cooperative polling dispatcher that:
- keeps pending tasks in a tick-bucketed index,
- on every turn drains the buckets in [previous poll, now] and fires runnable tasks,
- re-arms loop tasks at (now + interval),
- keeps polling while work is pending and goes idle otherwise.

Passes never overlap: one pass runs to completion, then the next one is queued
on the host's "next turn" primitive (asyncio's call_soon by default).
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

from ..config import Settings, get_settings
from ..core.clock import Clock
from ..core.events import EventEmitter
from ..core.ports import Cancellable, TaskCallback, TurnHost
from .task_index import BucketIndex
from .task_models import Task, TaskKind
from .task_queue import Queue, QueueEntryLike

logger = logging.getLogger(__name__)


class AsyncioHost:
    """TurnHost backed by an asyncio event loop (the running one unless given)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_soon(self, callback: Callable[[], None]) -> Cancellable:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_soon(callback)


class Scheduler:
    """
    Delay/loop scheduler with lifecycle signals.

    Events on `scheduler.events`:
    - "busy": dispatcher went from idle to polling
    - "idle": a pass found nothing left to wait for
    """

    def __init__(
            self,
            *,
            clock: Clock | None = None,
            host: TurnHost | None = None,
            settings: Settings | None = None,
            default_interval: int | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings()

        self.clock = clock if clock is not None else Clock(resolution=settings.resolution)
        self.index = BucketIndex()
        self.events = EventEmitter()
        self.default_interval = (
            settings.default_interval if default_interval is None else default_interval
        )

        self._host: TurnHost = host if host is not None else AsyncioHost()
        self._busy = False
        self._handle: Cancellable | None = None
        self._idle_waiters: list[asyncio.Future[None]] = []
        # Bumped by reset(); a pass started under an older epoch stops touching state.
        self._epoch = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def pending(self) -> int:
        """Number of non-empty buckets still in the index."""
        return len(self.index)

    def delay(self, interval: float | TaskCallback, callback: TaskCallback | None = None) -> Task:
        """Run *callback* once, no earlier than *interval* ticks from now."""
        return self._schedule(TaskKind.DELAY, interval, callback)

    # Aliases kept for callers that prefer to name the intent.
    wait = delay
    defer = delay

    def loop(self, interval: float | TaskCallback, callback: TaskCallback | None = None) -> Task:
        """Run *callback* every *interval* ticks until the task is stopped."""
        return self._schedule(TaskKind.LOOP, interval, callback)

    def repeat(self, count: int, interval: float, callback: TaskCallback) -> Task:
        """Run *callback* *count* times, *interval* ticks apart, then stop the loop."""
        if count < 1:
            raise ValueError("count must be >= 1")

        def run(context: Task) -> None:
            callback(context)
            if context.called == count:
                context.stop()

        return self.loop(interval, run)

    def queue(self, entries: Iterable[QueueEntryLike]) -> Queue:
        """Chain delays/loops at cumulative offsets; see Queue."""
        q = Queue(self, entries)
        self._kick()
        return q

    def set_resolution(self, factor: float) -> None:
        """
        Switch the clock resolution (0.1 / 0.01; anything else = default 1 ms).

        Only tasks created afterwards are affected. Pending tasks keep the absolute
        tick computed under the old resolution; one that falls behind the new
        previous-poll tick is not drained (it stays parked until reset()).
        """
        self.clock.set_resolution(factor)

    def reset(self) -> None:
        """
        Hard reset: abandon every pending task without firing or signalling it,
        drop all listeners and stop polling.
        """
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        self._epoch += 1
        dropped = len(self.index)
        self._busy = False
        self.events.remove_all_listeners()
        self.index.clear()
        self.clock.reset_horizon()
        self._release_idle_waiters()
        logger.info("Scheduler reset (dropped %s pending buckets)", dropped)

    async def wait_idle(self) -> None:
        """Wait until the dispatcher goes idle (returns at once if it already is)."""
        if not self._busy:
            return
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._idle_waiters.append(fut)
        await fut

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _schedule(self, kind: TaskKind, interval: Any, callback: TaskCallback | None) -> Task:
        # Permissive overload: delay(fn) == delay(default_interval, fn)
        if callback is None and callable(interval):
            callback, interval = interval, self.default_interval

        if not callable(callback):
            raise TypeError(f"{kind} callback must be callable, got {callback!r}")
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            raise ValueError(f"{kind} interval must be a number, got {interval!r}")
        if interval < 0:
            raise ValueError(f"{kind} interval must be >= 0, got {interval!r}")

        now = self.clock.now()
        ticks = self.clock.scale(interval)
        task = Task(
            kind=kind,
            interval=ticks,
            callback=callback,
            created_at=now,
            later=now + ticks,
            called_at=now,
        )

        self.clock.extend_horizon(task.later)
        self.index.add(task.later, task)

        if not self._busy:
            self._kick()

        return task

    def _kick(self) -> None:
        if self._busy:
            return
        # Arm first: if the host cannot take the pass, stay idle and re-armable.
        self._handle = self._host.call_soon(self._poll)
        self._busy = True
        logger.debug("Dispatcher busy (horizon=%s)", self.clock.horizon)
        self.events.emit("busy")

    def _poll(self) -> None:
        """One pass: drain buckets in [previous, now], fire, re-arm loops, decide to continue."""
        self._handle = None
        clock = self.clock
        epoch = self._epoch

        now = clock.now()
        keep_polling = False

        try:
            due = self.index.pop_due(clock.previous, now)

            for task in due:
                # Runnable is checked at fire time: an earlier callback in this
                # same pass may have stopped this task.
                if task.is_runnable:
                    task.called += 1
                    task.called_at = now
                    task.callback(task)

                    if self._epoch != epoch:
                        # reset() ran inside the callback: the rest of this pass
                        # belongs to the abandoned schedule.
                        return

                if task.kind is TaskKind.LOOP and task.is_runnable:
                    keep_polling = True
                    task.later = now + task.interval
                    clock.extend_horizon(task.later)
                    self.index.add(task.later, task)
        except BaseException as exc:
            if self._epoch == epoch:
                # The pass is abandoned; whatever was drained is not retried.
                # Leave the dispatcher re-armable by the next scheduling call.
                self._busy = False
                logger.debug("Poll pass aborted by a callback error at tick %s", now)
                self._release_idle_waiters(exc if isinstance(exc, Exception) else None)
            raise

        clock.previous = now

        # Work queued during this pass for the current tick waits for the next
        # pass (which starts at this tick) instead of firing twice in this one.
        if clock.horizon > now or now in self.index:
            keep_polling = True

        if keep_polling:
            self._handle = self._host.call_soon(self._poll)
        else:
            self._busy = False
            logger.debug("Dispatcher idle at tick %s", now)
            self._release_idle_waiters()
            self.events.emit("idle")

    def _release_idle_waiters(self, error: Exception | None = None) -> None:
        waiters, self._idle_waiters = self._idle_waiters, []
        for fut in waiters:
            if fut.done():
                continue
            if error is not None:
                fut.set_exception(error)
            else:
                fut.set_result(None)
