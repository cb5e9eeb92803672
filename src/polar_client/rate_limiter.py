"""
Client-side throttling for Polar API calls.

Polar enforces a per-organization request quota. Every PolarClient owns one
TokenBucketRateLimiter, and each HTTP attempt (retries included) spends a
token from it before going out.
"""

import threading
import time
from dataclasses import dataclass


@dataclass
class RateLimiterStats:
    """Running totals reported by get_stats()."""
    requests_made: int = 0
    requests_throttled: int = 0
    total_wait_time: float = 0.0
    last_request_time: float = 0.0


class TokenBucketRateLimiter:
    """
    Token bucket that callers from several threads can share.

    The bucket starts full at `capacity` tokens and refills continuously at
    `requests_per_minute / 60` tokens per second. A short burst can go out
    back to back; after that, callers are spaced out to the sustained rate.

    Example:
        limiter = TokenBucketRateLimiter(requests_per_minute=300)

        if limiter.acquire(timeout=5.0):
            send_request()
    """

    def __init__(
        self,
        requests_per_minute: int = 300,
        burst_capacity: int | None = None,
    ):
        """
        Args:
            requests_per_minute: Sustained request rate, at least 1
            burst_capacity: Size of the bucket. Defaults to a tenth of the
                per-minute rate, at least 10 and at most the rate itself.
        """
        if requests_per_minute < 1:
            raise ValueError("requests_per_minute must be at least 1")

        self.rate = requests_per_minute / 60.0
        self.capacity = burst_capacity or min(requests_per_minute, max(10, requests_per_minute // 10))

        self._tokens = float(self.capacity)
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

        self.stats = RateLimiterStats()

    def _refill(self) -> None:
        # Caller holds self._lock
        now = time.monotonic()
        self._tokens = min(self.capacity, self._tokens + (now - self._last_refill) * self.rate)
        self._last_refill = now

    def _take(self) -> bool:
        # Caller holds self._lock
        self._refill()
        if self._tokens < 1.0:
            return False
        self._tokens -= 1.0
        self.stats.requests_made += 1
        self.stats.last_request_time = time.time()
        return True

    def acquire(self, timeout: float | None = None) -> bool:
        """
        Spend one token, sleeping until the bucket has one.

        With a `timeout`, gives up and returns False once that many seconds
        have passed without a token; None waits indefinitely.
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        while True:
            with self._lock:
                if self._take():
                    return True

                pause = (1.0 - self._tokens) / self.rate
                if deadline is not None:
                    left = deadline - time.monotonic()
                    if left <= 0:
                        return False
                    pause = min(pause, left)

                self.stats.requests_throttled += 1
                self.stats.total_wait_time += pause

            # Other threads may refill or read stats while this one sleeps
            time.sleep(pause)

    def try_acquire(self) -> bool:
        """Spend a token if one is available right now, never sleeping."""
        with self._lock:
            return self._take()

    def __enter__(self) -> "TokenBucketRateLimiter":
        self.acquire()
        return self

    def __exit__(self, *args) -> None:
        pass

    @property
    def available_tokens(self) -> float:
        with self._lock:
            self._refill()
            return self._tokens

    def reset(self) -> None:
        """Fill the bucket back up and zero the counters."""
        with self._lock:
            self._tokens = float(self.capacity)
            self._last_refill = time.monotonic()
            self.stats = RateLimiterStats()

    def get_stats(self) -> dict:
        with self._lock:
            self._refill()
            return {
                "requests_made": self.stats.requests_made,
                "requests_throttled": self.stats.requests_throttled,
                "total_wait_time_seconds": round(self.stats.total_wait_time, 2),
                "available_tokens": round(self._tokens, 1),
                "capacity": self.capacity,
                "rate_per_minute": round(self.rate * 60, 1),
            }
