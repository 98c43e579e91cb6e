import math
import threading
from collections import defaultdict, deque
from datetime import UTC, datetime, timedelta


class SimpleRateLimiter:
    """Sliding-window counter keyed by client address.

    Handlers run in a threadpool, so bucket updates are serialized.
    """

    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window = timedelta(seconds=window_seconds)
        self._storage: dict[str, deque[datetime]] = defaultdict(deque)
        self._lock = threading.Lock()

    def _prune(self, bucket: deque[datetime], now: datetime) -> None:
        while bucket and now - bucket[0] > self.window:
            bucket.popleft()

    def hit(self, key: str) -> bool:
        now = datetime.now(UTC)
        with self._lock:
            bucket = self._storage[key]
            self._prune(bucket, now)
            if len(bucket) >= self.max_requests:
                return False
            bucket.append(now)
            return True

    def retry_after(self, key: str) -> int:
        """Seconds until the oldest hit of ``key`` leaves the window."""
        now = datetime.now(UTC)
        with self._lock:
            bucket = self._storage.get(key)
            if not bucket:
                return 0
            self._prune(bucket, now)
            if not bucket:
                return 0
            return max(1, math.ceil((bucket[0] + self.window - now).total_seconds()))

    def reset(self, key: str) -> None:
        with self._lock:
            self._storage.pop(key, None)
