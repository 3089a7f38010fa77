"""In-memory rate limiting for outgoing email."""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Tuple


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_in: float


class EmailRateLimiter:
    """Sliding-window limiter keyed by (recipient, action).

    Args:
        max_per_window: Sends allowed per recipient and action inside the window
        window_seconds: Window length
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        max_per_window: int = 3,
        window_seconds: float = 3600.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_per_window = max_per_window
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[Tuple[str, str], Deque[float]] = {}

    def check(self, recipient: str, action: str) -> RateLimitDecision:
        """Record an attempt and decide whether it may proceed."""
        now = self._clock()
        key = (recipient.lower(), action)
        self._prune(now)
        hits = self._hits.setdefault(key, deque())

        if len(hits) >= self.max_per_window:
            return RateLimitDecision(
                allowed=False,
                remaining=0,
                reset_in=hits[0] + self.window_seconds - now,
            )

        hits.append(now)
        return RateLimitDecision(
            allowed=True,
            remaining=self.max_per_window - len(hits),
            reset_in=hits[0] + self.window_seconds - now,
        )

    def _prune(self, now: float) -> None:
        """Drop expired hits, and keys whose window has emptied."""
        cutoff = now - self.window_seconds
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def reset(self, recipient: str, action: str) -> None:
        self._hits.pop((recipient.lower(), action), None)
