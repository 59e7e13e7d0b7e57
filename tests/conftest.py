# tests/conftest.py

from __future__ import annotations

import pytest

from temporal.config import Settings
from temporal.core.clock import Clock
from temporal.tasks.task_scheduler import Scheduler

from .fakes import FakeTimeSource, ManualHost


@pytest.fixture()
def settings() -> Settings:
    """
    Fixed settings for unit tests.

    We build Settings directly rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        app_name="temporal-test",
        log_level="DEBUG",
        log_dir=None,
        resolution=1.0,
        default_interval=10,
    )


@pytest.fixture()
def time_source() -> FakeTimeSource:
    return FakeTimeSource()


@pytest.fixture()
def host() -> ManualHost:
    return ManualHost()


@pytest.fixture()
def clock(time_source: FakeTimeSource) -> Clock:
    return Clock(time_source)


@pytest.fixture()
def scheduler(clock: Clock, host: ManualHost, settings: Settings) -> Scheduler:
    """Scheduler wired to a fake clock and a manually driven host."""
    return Scheduler(clock=clock, host=host, settings=settings)
