"""Millisecond timeout measured from the moment it is created."""

from __future__ import annotations

import time
from collections.abc import Callable

__all__ = ["TimeOut"]


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class TimeOut:
    """Tracks elapsed and remaining time against a period in milliseconds."""

    def __init__(self, period_ms: int, clock: Callable[[], int] = _monotonic_ms) -> None:
        self._clock = clock
        self._start = clock()
        self.period_ms = period_ms

    def elapsed_time(self) -> int:
        """Milliseconds since the timeout was created."""
        return self._clock() - self._start

    def has_timed_out(self) -> bool:
        """Whether the period has fully elapsed."""
        return self.elapsed_time() >= self.period_ms

    def remaining_time(self) -> int:
        """Milliseconds left in the period, never negative."""
        elapsed = self.elapsed_time()
        if elapsed >= self.period_ms:
            return 0
        return self.period_ms - elapsed