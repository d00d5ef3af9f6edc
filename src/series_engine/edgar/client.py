"""
client.py – Low-level HTTP client for SEC EDGAR.

Wraps requests with:
- User-Agent injection (required by SEC)
- Rate limiting
- Retry with exponential backoff

Caching is deliberately absent here: the fact store decides what to cache
and for how long.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from series_engine.config import EngineConfig
from series_engine.exceptions import RateLimitError
from series_engine.utils.rate_limit import SECRateLimiter
from series_engine.utils.retry import RetryableHTTPError, check_response, with_retry

logger = logging.getLogger(__name__)

# Sessions are pooled per user_agent so distinct configs reuse connections
# but never share a session with a different User-Agent.
_SESSION_POOL: dict[str, requests.Session] = {}


def _get_session(user_agent: str) -> requests.Session:
    """Return a per-user-agent requests.Session (cached at module level)."""
    if user_agent not in _SESSION_POOL:
        session = requests.Session()
        session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept-Encoding": "gzip, deflate",
            }
        )
        _SESSION_POOL[user_agent] = session
        logger.debug("Created new HTTP session for user_agent=%r", user_agent)
    return _SESSION_POOL[user_agent]


class EdgarClient:
    """
    SEC EDGAR HTTP client with rate limiting and retry logic.

    Parameters
    ----------
    config:
        Engine configuration.
    session:
        Optional pre-built session (tests inject a mock here).
    """

    def __init__(self, config: EngineConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._rate_limiter = SECRateLimiter(rps=config.sec_rate_limit_rps)
        self._session = session if session is not None else _get_session(config.user_agent)

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """
        Fetch a JSON endpoint from EDGAR, returning the parsed object.

        Raises
        ------
        RateLimitError: when SEC keeps answering 429 after all retries.
        requests.RequestException: on any other HTTP or network failure.
        """

        @with_retry(max_attempts=5, min_wait=2.0, max_wait=60.0)
        def _fetch() -> Any:
            self._rate_limiter.acquire()
            resp = self._session.get(url, params=params, timeout=30)
            check_response(resp)
            return resp.json()

        try:
            data = _fetch()
        except RetryableHTTPError as exc:
            if exc.status_code == 429:
                raise RateLimitError(f"SEC rate limit exhausted for {url}") from exc
            raise requests.HTTPError(str(exc), response=exc.response) from exc

        logger.debug("Fetched: %s", url)
        return data
