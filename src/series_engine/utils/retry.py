"""
retry.py – Exponential-backoff retry for SEC EDGAR requests.

Uses tenacity. Retries 429 (too many requests), transient 5xx responses,
and connection/timeouts; every other HTTP error surfaces immediately.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

RETRYABLE_STATUS: frozenset[int] = frozenset({429, 500, 502, 503, 504})


class RetryableHTTPError(Exception):
    """Signals tenacity that the response status warrants another attempt."""

    def __init__(self, response: requests.Response) -> None:
        self.response = response
        self.status_code = response.status_code
        super().__init__(f"HTTP {response.status_code}: {response.url}")


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, RetryableHTTPError):
        return exc.status_code in RETRYABLE_STATUS
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


def with_retry(
    max_attempts: int = 5,
    min_wait: float = 1.0,
    max_wait: float = 60.0,
) -> Callable[[F], F]:
    """
    Decorator factory that applies tenacity retry logic.

    The last exception is re-raised once ``max_attempts`` is exhausted.

    Usage
    -----
    >>> @with_retry(max_attempts=5)
    ... def fetch_something() -> dict:
    ...     ...
    """
    return retry(  # type: ignore[return-value]
        retry=retry_if_exception(_is_retryable),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def check_response(response: requests.Response) -> requests.Response:
    """
    Raise ``RetryableHTTPError`` for retryable status codes, raise
    ``requests.HTTPError`` for other failures, or return the response.

    Call this inside any function decorated with ``@with_retry``.
    """
    if response.status_code in RETRYABLE_STATUS:
        raise RetryableHTTPError(response)
    response.raise_for_status()
    return response
