# tests/test_clock.py

from __future__ import annotations

from temporal.core.clock import DEFAULT_RESOLUTION, Clock, divisor_for

from .fakes import FakeTimeSource


def test_now_truncates_to_millisecond_ticks(time_source: FakeTimeSource) -> None:
    clock = Clock(time_source)
    assert clock.divisor == DEFAULT_RESOLUTION
    assert clock.now() == 1000

    time_source.ns += 999_999
    assert clock.now() == 1000
    time_source.ns += 1
    assert clock.now() == 1001


def test_horizon_and_previous_start_at_now(time_source: FakeTimeSource) -> None:
    clock = Clock(time_source)
    assert clock.horizon == 1000
    assert clock.previous == 1000

    clock.extend_horizon(1500)
    clock.extend_horizon(1200)
    assert clock.horizon == 1500


def test_supported_resolutions_and_fallback() -> None:
    assert divisor_for(0.1) == 100_000
    assert divisor_for(0.01) == 10_000
    assert divisor_for(1) == DEFAULT_RESOLUTION
    assert divisor_for(0.5) == DEFAULT_RESOLUTION
    assert divisor_for(0) == DEFAULT_RESOLUTION


def test_set_resolution_moves_previous_to_new_now(time_source: FakeTimeSource) -> None:
    clock = Clock(time_source)
    clock.extend_horizon(1100)

    assert clock.set_resolution(0.1) == 100_000
    assert clock.now() == 10_000
    assert clock.previous == 10_000
    # Stored ticks are not rescaled.
    assert clock.horizon == 1100

    # Invalid factor silently restores the default.
    assert clock.set_resolution(3) == DEFAULT_RESOLUTION
    assert clock.now() == 1000
    assert clock.previous == 1000


def test_scale_converts_intervals_to_ticks(time_source: FakeTimeSource) -> None:
    clock = Clock(time_source)
    assert clock.scale(10) == 10
    assert clock.scale(10.7) == 10

    clock.set_resolution(0.1)
    assert clock.scale(3) == 30

    clock.set_resolution(0.01)
    assert clock.scale(3) == 300
    assert clock.scale(0) == 0


def test_initial_resolution_from_constructor(time_source: FakeTimeSource) -> None:
    clock = Clock(time_source, resolution=0.01)
    assert clock.divisor == 10_000
    assert clock.now() == 100_000
