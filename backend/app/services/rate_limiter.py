"""
In-process sliding-window rate limiter for the AI reasoning endpoint.

One window per client key (the caller's IP). State lives in the process, so
limits are per worker.
"""

import threading
import time
from collections import deque
from typing import Deque, Dict, Tuple

from app.services.env import number_from_env


class SlidingWindowRateLimiter:
    def __init__(self, max_requests: int, window_seconds: float):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str) -> Tuple[bool, int]:
        """
        Record a hit for key if it is under the limit.

        Returns:
            (allowed, retry_after_seconds); retry_after is 0 when allowed
        """
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            hits = self._hits.setdefault(key, deque())

            if len(hits) >= self.max_requests:
                retry_after = max(1, int(self.window_seconds - (now - hits[0]) + 0.999))
                return False, retry_after

            hits.append(now)
            return True, 0

    def _prune(self, now: float) -> None:
        """Drop expired hits, and keys whose window is empty. Caller holds the lock."""
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and now - hits[0] >= self.window_seconds:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def tracked_keys(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


ai_rate_limiter = SlidingWindowRateLimiter(
    max_requests=number_from_env("AI_RATE_LIMIT_REQUESTS", 10, minimum=1),
    window_seconds=number_from_env("AI_RATE_LIMIT_WINDOW_SECONDS", 60, minimum=1),
)
