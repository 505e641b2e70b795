"""
Outbound Rate Limiting
Sliding-window limiter shared by every caller of the USDA client
"""

import threading
import time
from collections import deque
from typing import Callable, Optional

from config import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW


class RateLimiter:
    """
    Allows at most `max_requests` grants inside any trailing `window` seconds.

    Timestamps of granted requests are kept oldest first and evicted lazily
    on each check. Denied attempts are not recorded.
    """

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window: float = RATE_LIMIT_WINDOW,
        clock: Callable[[], float] = time.monotonic
    ):
        self.max_requests = max_requests
        self.window = window
        self.clock = clock
        self._requests: deque[float] = deque()
        self._lock = threading.Lock()

    def _evict_expired(self, now: float) -> None:
        cutoff = now - self.window
        while self._requests and self._requests[0] < cutoff:
            self._requests.popleft()

    def try_acquire(self, now: Optional[float] = None) -> bool:
        """Record a request at `now` if the window has room"""
        with self._lock:
            if now is None:
                now = self.clock()
            self._evict_expired(now)
            if len(self._requests) >= self.max_requests:
                return False
            self._requests.append(now)
            return True

    def remaining(self, now: Optional[float] = None) -> int:
        """Free slots left in the current window"""
        with self._lock:
            if now is None:
                now = self.clock()
            self._evict_expired(now)
            return self.max_requests - len(self._requests)

    def __len__(self) -> int:
        with self._lock:
            return len(self._requests)


__all__ = ["RateLimiter"]
