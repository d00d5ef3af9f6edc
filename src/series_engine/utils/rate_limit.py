"""
rate_limit.py – SEC-compliant rate limiter (maximum 10 RPS per SEC policy).

Token bucket: requests are spread evenly over time, bursts are capped at
one second's worth of tokens. Thread-safe via threading.Lock.
"""

from __future__ import annotations

import threading
import time

from series_engine.utils.logging import get_logger

logger = get_logger(__name__)

SEC_MAX_RPS = 10.0


class TokenBucketRateLimiter:
    """
    Thread-safe token bucket rate limiter.

    Parameters
    ----------
    rate:
        Tokens (requests) replenished per second.
    burst:
        Maximum tokens that can accumulate. Defaults to ``rate``.
    """

    def __init__(self, rate: float, burst: float | None = None) -> None:
        if rate <= 0:
            raise ValueError(f"Rate must be positive, got {rate}")
        self._rate = rate
        self._burst = burst if burst is not None else rate
        self._tokens = self._burst
        self._last_refill = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self._burst, self._tokens + elapsed * self._rate)
        self._last_refill = now

    def acquire(self, n: float = 1.0) -> None:
        """Block until ``n`` tokens are available, then consume them."""
        while True:
            with self._lock:
                self._refill()
                if self._tokens >= n:
                    self._tokens -= n
                    return
                sleep_for = (n - self._tokens) / self._rate

            logger.debug("Rate limiter sleeping %.3fs to respect %s RPS limit", sleep_for, self._rate)
            time.sleep(sleep_for)


class SECRateLimiter(TokenBucketRateLimiter):
    """
    Rate limiter pre-configured for SEC EDGAR.

    Parameters
    ----------
    rps:
        Requests per second. Must be <= 10 (SEC hard limit); 8 leaves margin.
    """

    def __init__(self, rps: float = 8.0) -> None:
        if rps > SEC_MAX_RPS:
            raise ValueError(
                f"SEC EDGAR rate limit is 10 RPS maximum. Got {rps}. "
                "See: https://www.sec.gov/developer"
            )
        super().__init__(rate=rps, burst=rps)
        logger.debug("SEC rate limiter configured at %.1f RPS", rps)
