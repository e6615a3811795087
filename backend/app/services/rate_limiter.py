"""Local admission control for course assistant requests.

Requests are counted per user and across the process over a trailing
window. Limits are read from settings on every call so they can be tuned
at runtime.
"""

import time
from collections import deque
from typing import Callable

from app.config import settings


class _Window:
    """Timestamps of admitted requests inside a trailing window."""

    __slots__ = ("span", "stamps")

    def __init__(self, span: float) -> None:
        self.span = span
        self.stamps: deque[float] = deque()

    def size(self, now: float) -> int:
        horizon = now - self.span
        while self.stamps and self.stamps[0] <= horizon:
            self.stamps.popleft()
        return len(self.stamps)

    def add(self, now: float) -> None:
        self.stamps.append(now)


class RateLimiter:
    def __init__(
        self,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._span = window_seconds
        self._clock = clock
        self._per_user: dict[str, _Window] = {}
        self._overall = _Window(window_seconds)

    def try_acquire(self, user_id: str) -> bool:
        """Admit and count one request, or refuse it without counting."""
        now = self._clock()
        user_window = self._per_user.get(user_id)
        user_count = user_window.size(now) if user_window else 0

        if user_count >= settings.rate_limit_user_per_minute:
            return False
        if self._overall.size(now) >= settings.rate_limit_global_per_minute:
            return False

        if user_window is None:
            user_window = self._per_user[user_id] = _Window(self._span)
        user_window.add(now)
        self._overall.add(now)
        return True

    def in_flight(self, user_id: str) -> int:
        """Number of the user's requests still inside the window."""
        window = self._per_user.get(user_id)
        if window is None:
            return 0
        count = window.size(self._clock())
        if count == 0:
            del self._per_user[user_id]
        return count


rate_limiter = RateLimiter()
