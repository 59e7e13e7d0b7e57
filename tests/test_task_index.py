# tests/test_task_index.py

from __future__ import annotations

from temporal.tasks.task_index import BucketIndex
from temporal.tasks.task_models import Task, TaskKind


def _task(later: int) -> Task:
    return Task(
        kind=TaskKind.DELAY,
        interval=0,
        callback=lambda t: None,
        created_at=0,
        later=later,
        called_at=0,
    )


def test_pop_due_orders_by_tick_then_insertion() -> None:
    index = BucketIndex()
    a, b, c, d = _task(20), _task(10), _task(20), _task(30)
    for t in (a, b, c, d):
        index.add(t.later, t)

    assert index.ticks() == [10, 20, 30]
    assert index.pop_due(0, 25) == [b, a, c]

    # Drained keys are gone; later ones stay.
    assert 10 not in index and 20 not in index
    assert index.ticks() == [30]
    assert len(index) == 1


def test_pop_due_is_a_closed_range() -> None:
    index = BucketIndex()
    below, low, high, above = _task(4), _task(5), _task(9), _task(10)
    for t in (below, low, high, above):
        index.add(t.later, t)

    assert index.pop_due(5, 9) == [low, high]
    # Buckets behind the range are not drained.
    assert index.ticks() == [4, 10]
    assert index.pop_due(5, 9) == []


def test_work_added_after_drain_waits_for_next_drain() -> None:
    index = BucketIndex()
    first = _task(5)
    index.add(5, first)

    assert index.pop_due(5, 5) == [first]

    again = _task(5)
    index.add(5, again)
    assert 5 in index
    assert index.pop_due(5, 5) == [again]
    assert len(index) == 0


def test_clear_and_identity_semantics() -> None:
    index = BucketIndex()
    t1, t2 = _task(1), _task(1)
    index.add(1, t1)
    index.add(1, t2)

    # Tasks compare by identity, so duplicates stay distinct.
    assert t1 != t2
    assert index.pop_due(1, 1) == [t1, t2]

    index.add(1, t1)
    index.clear()
    assert len(index) == 0
    assert index.pop_due(0, 100) == []
