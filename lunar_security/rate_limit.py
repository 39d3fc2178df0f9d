"""
Per-key request throttling over a fixed window.

Each key gets its own window, started at the first counted check. Within a
window at most max_requests checks are admitted. Once window_seconds have
elapsed since window_start, the counter starts over at zero.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from .exceptions import ClosedHandleError, ConfigurationError

logger = logging.getLogger(__name__)

Key = Union[str, bytes]


@dataclass
class WindowCounter:
    count: int = 0
    window_start: float = 0.0
    last_seen: float = 0.0
    throttled: bool = False


def _check_key(key: Key) -> Key:
    if not isinstance(key, (str, bytes)):
        raise TypeError("rate limit key must be str or bytes")
    return key


class RateLimiter:
    """
    Thread-safe fixed-window rate limiter keyed by caller identity.

    A single lock guards the key -> counter map, so the
    read-compare-increment-reset for one check is atomic. Keys never
    share counters.

    Args:
        max_requests: admitted checks per key per window, must be >= 1.
            A limiter that admits nothing is rejected with ConfigurationError.
        window_seconds: window length, must be > 0.
        evict_after_windows: keys idle this many windows are dropped on a
            later check. Eviction never changes admit/reject results.
        clock: monotonic time source in seconds.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        *,
        evict_after_windows: int = 4,
        clock: Callable[[], float] = time.monotonic,
    ):
        if isinstance(max_requests, bool) or not isinstance(max_requests, int):
            raise ConfigurationError("max_requests must be an integer.")
        if max_requests < 1:
            raise ConfigurationError(
                f"max_requests must be >= 1 (got {max_requests}); a limiter that admits nothing is not supported."
            )
        if isinstance(window_seconds, bool) or not isinstance(window_seconds, (int, float)):
            raise ConfigurationError("window_seconds must be a number.")
        if not window_seconds > 0:
            raise ConfigurationError(f"window_seconds must be > 0 (got {window_seconds}).")
        if isinstance(evict_after_windows, bool) or not isinstance(evict_after_windows, int) or evict_after_windows < 1:
            raise ConfigurationError("evict_after_windows must be an integer >= 1.")

        self.max_requests = max_requests
        self.window_seconds = float(window_seconds)
        self.evict_after_windows = evict_after_windows
        self._clock = clock
        self._lock = threading.Lock()
        self._counters: Dict[Key, WindowCounter] = {}
        self._next_sweep: Optional[float] = None
        self._closed = False

    @classmethod
    def from_settings(cls, settings, clock: Callable[[], float] = time.monotonic) -> "RateLimiter":
        return cls(
            settings.rate_limit_max_requests,
            settings.rate_limit_window_seconds,
            evict_after_windows=settings.rate_limit_evict_after_windows,
            clock=clock,
        )

    def __repr__(self) -> str:
        return (
            f"RateLimiter(max_requests={self.max_requests}, "
            f"window_seconds={self.window_seconds}, closed={self._closed})"
        )

    def __enter__(self) -> "RateLimiter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock:
            return len(self._counters)

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClosedHandleError("RateLimiter is closed.")

    def _expired(self, counter: WindowCounter, now: float) -> bool:
        return now - counter.window_start >= self.window_seconds

    def _maybe_evict(self, now: float) -> None:
        # Caller holds the lock.
        if self._next_sweep is not None and now < self._next_sweep:
            return
        self._next_sweep = now + self.window_seconds
        idle_limit = self.window_seconds * self.evict_after_windows
        stale = [k for k, c in self._counters.items() if now - c.last_seen >= idle_limit]
        for k in stale:
            del self._counters[k]
        if stale:
            logger.debug(f"Evicted {len(stale)} idle rate limit key(s)")

    def check(self, key: Key) -> bool:
        """Count one request for key. True admits it, False rejects it."""
        key = _check_key(key)
        with self._lock:
            self._ensure_open()
            now = self._clock()
            self._maybe_evict(now)

            counter = self._counters.get(key)
            if counter is None:
                counter = WindowCounter(window_start=now)
                self._counters[key] = counter
            elif self._expired(counter, now):
                logger.debug(f"Rate limit window reset for key {key!r}")
                counter.count = 0
                counter.window_start = now
                counter.throttled = False
            counter.last_seen = now

            if counter.count >= self.max_requests:
                if not counter.throttled:
                    counter.throttled = True
                    logger.warning(
                        f"Rate limit of {self.max_requests} per {self.window_seconds:g}s reached for key {key!r}"
                    )
                return False
            counter.count += 1
            return True

    def remaining(self, key: Key) -> int:
        """Checks key could still pass in its current window. Does not count as a request."""
        key = _check_key(key)
        with self._lock:
            self._ensure_open()
            counter = self._counters.get(key)
            if counter is None or self._expired(counter, self._clock()):
                return self.max_requests
            return self.max_requests - counter.count

    def reset(self, key: Key) -> None:
        """Forget key's counter, as if it had never been seen."""
        key = _check_key(key)
        with self._lock:
            self._ensure_open()
            self._counters.pop(key, None)

    def close(self) -> None:
        """Discard all counters. Further use raises ClosedHandleError."""
        with self._lock:
            self._counters.clear()
            self._closed = True
