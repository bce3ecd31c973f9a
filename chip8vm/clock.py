"""Fixed-rate tick source for driving the interpreter and its timers."""

import time
from typing import Callable


class Clock:
    """Reports when periods of ``1 / freq`` seconds have elapsed.

    The reference point advances by whole periods, so a late poll does not
    drift the schedule.
    """

    def __init__(self, freq: float, now: Callable[[], float] = time.perf_counter):
        if freq <= 0:
            raise ValueError(f"Clock frequency must be positive, got {freq}")
        self.period = 1.0 / freq
        self._now = now
        self.offset = now()

    def tick(self) -> bool:
        """Consume one elapsed period, if any."""
        if self._now() - self.offset >= self.period:
            self.offset += self.period
            return True
        return False

    def due(self, limit: int = None) -> int:
        """Consume and return every elapsed period, capped at ``limit``.

        When capped, the schedule is resynchronised to now so a stalled driver
        does not try to catch up indefinitely.
        """
        now = self._now()
        count = int((now - self.offset) // self.period)
        if limit is not None and count > limit:
            self.offset = now
            return limit
        self.offset += count * self.period
        return count
