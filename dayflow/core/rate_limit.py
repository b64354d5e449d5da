"""
Fixed-window request rate limiter

The limiter and its store live on the application instance (one per process),
so limits are not coordinated across processes or hosts. A shared store can be
plugged in through the RateLimitStore protocol.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from dayflow.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_REQUESTS = 100
DEFAULT_WINDOW_SECONDS = 60
DEFAULT_CLEANUP_THRESHOLD = 10_000


@dataclass
class RateLimitEntry:
    """Request count inside the current window of one key"""

    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    # Seconds a rejected caller should wait; 0 when allowed
    retry_after: int = 0


class RateLimitStore(Protocol):
    """Protocol for rate limit entry storage"""

    def get(self, key: str) -> Optional[RateLimitEntry]:
        ...

    def set(self, key: str, entry: RateLimitEntry) -> None:
        ...

    def purge_expired(self, now: float) -> int:
        """Drop entries whose window has ended, returning how many were removed"""
        ...

    def size(self) -> int:
        ...


class InMemoryRateLimitStore:
    """Dict-backed store for a single process"""

    def __init__(self):
        self._entries: Dict[str, RateLimitEntry] = {}

    def get(self, key: str) -> Optional[RateLimitEntry]:
        return self._entries.get(key)

    def set(self, key: str, entry: RateLimitEntry) -> None:
        self._entries[key] = entry

    def purge_expired(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if now >= entry.reset_at]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def size(self) -> int:
        return len(self._entries)


class RateLimiter:
    """Allow at most `max_requests` per key in each fixed window of `window_seconds`"""

    def __init__(
        self,
        store: Optional[RateLimitStore] = None,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        cleanup_threshold: int = DEFAULT_CLEANUP_THRESHOLD,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.cleanup_threshold = cleanup_threshold
        self._clock = clock
        self._lock = threading.Lock()

    def check(self, key: str) -> RateLimitResult:
        """Count one request for `key` and decide whether it may proceed"""
        with self._lock:
            now = self._clock()

            if self.store.size() > self.cleanup_threshold:
                purged = self.store.purge_expired(now)
                logger.debug(f"Rate limit store cleanup removed {purged} entries")

            entry = self.store.get(key)
            if entry is None or now >= entry.reset_at:
                self.store.set(key, RateLimitEntry(count=1, reset_at=now + self.window_seconds))
                return RateLimitResult(allowed=True, remaining=self.max_requests - 1)

            entry.count += 1
            self.store.set(key, entry)

            if entry.count > self.max_requests:
                return RateLimitResult(
                    allowed=False, remaining=0, retry_after=self.window_seconds
                )
            return RateLimitResult(allowed=True, remaining=self.max_requests - entry.count)


def client_key(forwarded_for: Optional[str]) -> str:
    """Rate limit key from an X-Forwarded-For header value"""
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return f"rate:{ip}"
    return "rate:unknown"
