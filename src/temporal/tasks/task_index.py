# src/temporal/tasks/task_index.py

"""
Time-bucketed index of pending tasks.

Keys are integer ticks; each bucket keeps tasks in insertion order, which is
also their firing order within that tick. A key exists only while its bucket
is non-empty.
"""

from __future__ import annotations

from .task_models import Task


class BucketIndex:
    def __init__(self) -> None:
        self._buckets: dict[int, list[Task]] = {}

    def add(self, tick: int, task: Task) -> None:
        bucket = self._buckets.get(tick)
        if bucket is None:
            bucket = self._buckets[tick] = []
        bucket.append(task)

    def pop_due(self, since: int, upto: int) -> list[Task]:
        """
        Remove and return every task whose tick is in the closed range [since, upto].

        Order: ascending tick, then insertion order within a tick.
        Buckets outside the range are left alone, and so are tasks added after
        this call (even for a tick inside the range): they wait for a later drain.
        """
        out: list[Task] = []
        for tick in self.ticks():
            if tick < since:
                continue
            if tick > upto:
                break
            out.extend(self._buckets.pop(tick))
        return out

    def ticks(self) -> list[int]:
        return sorted(self._buckets)

    def clear(self) -> None:
        self._buckets.clear()

    def __contains__(self, tick: object) -> bool:
        return tick in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
