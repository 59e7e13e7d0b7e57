# src/temporal/core/clock.py

from __future__ import annotations

"""
Monotonic tick clock.

Host time (nanoseconds) is divided by a resolution divisor and truncated:
- default divisor 1_000_000  -> 1 tick = 1 ms
- factor 0.1                  -> 1 tick = 0.1 ms
- factor 0.01                 -> 1 tick = 0.01 ms

The clock also carries the dispatcher's bookkeeping ticks:
- horizon: furthest tick any pending task is scheduled for
- previous: last tick fully drained by a poll pass
"""

import logging
import time

from .ports import TimeSource

logger = logging.getLogger(__name__)

DEFAULT_RESOLUTION = 1_000_000

RESOLUTION_DIVISORS: dict[float, int] = {
    0.1: 100_000,
    0.01: 10_000,
}


def divisor_for(factor: float) -> int:
    """Map a resolution factor to a divisor; unsupported factors mean default."""
    return RESOLUTION_DIVISORS.get(factor, DEFAULT_RESOLUTION)


class Clock:
    def __init__(self, time_source: TimeSource | None = None, *, resolution: float = 1.0) -> None:
        self._time_source: TimeSource = time_source or time.monotonic_ns
        self.divisor: int = divisor_for(resolution)

        now = self.now()
        self.horizon: int = now
        self.previous: int = now

    def now(self) -> int:
        return self._time_source() // self.divisor

    def set_resolution(self, factor: float) -> int:
        """
        Switch resolution and return the new divisor.

        Only the supported factors are honoured; anything else silently restores
        the default. `previous` is moved to the new "now" so the next pass does not
        drain a spurious backlog. Ticks already stored elsewhere are left untouched.
        """
        divisor = divisor_for(factor)
        if divisor == DEFAULT_RESOLUTION and factor != 1:
            logger.debug("Unsupported resolution %r, using default", factor)

        self.divisor = divisor
        self.previous = self.now()
        logger.debug("Resolution divisor=%s previous=%s", divisor, self.previous)
        return divisor

    def scale(self, interval: float) -> int:
        """Convert a caller interval (default units) into ticks at the current resolution."""
        if self.divisor != DEFAULT_RESOLUTION:
            return int(interval * (DEFAULT_RESOLUTION / self.divisor))
        return int(interval)

    def extend_horizon(self, tick: int) -> None:
        if tick > self.horizon:
            self.horizon = tick

    def reset_horizon(self) -> None:
        # Only valid once nothing is pending (horizon must cover every bucket).
        self.horizon = self.now()
