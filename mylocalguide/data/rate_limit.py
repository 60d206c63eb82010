"""In-memory fixed-window rate limiter for external listing APIs.

One limiter per API per process. Windows are hourly by default and reset
on the first call after the window ends.
"""

import time
from threading import Lock
from typing import Callable


class RateLimiter:
    def __init__(self, points: int, window_seconds: float = 3600, clock: Callable[[], float] = time.monotonic):
        self.points = points
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = Lock()
        self._count = 0
        self._reset_at = clock() + window_seconds

    def consume(self, points: int = 1) -> bool:
        """Take `points` from the current window. False if the window is exhausted."""
        now = self._clock()
        with self._lock:
            if now >= self._reset_at:
                self._count = 0
                self._reset_at = now + self.window_seconds

            if self._count + points > self.points:
                return False

            self._count += points
            return True

    @property
    def remaining(self) -> int:
        with self._lock:
            if self._clock() >= self._reset_at:
                return self.points
            return max(0, self.points - self._count)

    def seconds_until_reset(self) -> float:
        return max(0.0, self._reset_at - self._clock())
