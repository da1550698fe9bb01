"""Shared rate limiting for direct profile probes."""

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class RateLimiter:
    """
    Sliding-window limiter shared by every direct probe.

    Allows at most `max_requests` recorded requests within any
    `window_seconds` span. `try_acquire` only checks and `record_success`
    charges a sent request, so cached or skipped lookups do not consume
    the budget. `acquire` does both under one lock for concurrent callers.
    """

    max_requests: int = 10
    window_seconds: float = 60.0
    clock: Callable[[], float] = time.monotonic
    _timestamps: deque = field(init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def __post_init__(self):
        self._timestamps = deque(maxlen=max(1, self.max_requests))

    def _prune(self, now: float) -> None:
        """Drop timestamps that have left the window."""
        cutoff = now - self.window_seconds
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

    def try_acquire(self) -> bool:
        """Check whether a request may be issued now."""
        with self._lock:
            self._prune(self.clock())
            return len(self._timestamps) < self.max_requests

    def record_success(self) -> None:
        """Charge one issued request against the window."""
        with self._lock:
            now = self.clock()
            self._prune(now)
            self._timestamps.append(now)

    def acquire(self) -> bool:
        """Check and record in one critical section."""
        with self._lock:
            now = self.clock()
            self._prune(now)
            if len(self._timestamps) >= self.max_requests:
                return False
            self._timestamps.append(now)
            return True

    def available_slots(self) -> int:
        """Number of requests still allowed in the current window."""
        with self._lock:
            self._prune(self.clock())
            return max(0, self.max_requests - len(self._timestamps))

    def in_window(self) -> int:
        with self._lock:
            self._prune(self.clock())
            return len(self._timestamps)

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._timestamps.clear()
