"""
cik_map.py – Ticker → CIK resolution using the SEC's company_tickers.json endpoint.

Resolutions and the full ticker list are cached through the injected
``Cache`` (7 days by default). CIKs are zero-padded to 10 digits as required
by SEC API endpoints.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from series_engine.constants import (
    CIK_CACHE_KEY,
    CIK_TTL_SECONDS,
    EDGAR_TICKER_CIK_URL,
    TICKERS_CACHE_KEY,
)
from series_engine.edgar.client import EdgarClient
from series_engine.exceptions import CIKLookupError, FactsFetchError, RateLimitError
from series_engine.types import TickerEntry
from series_engine.utils.cache import Cache

logger = logging.getLogger(__name__)


def _normalize_ticker(ticker: str) -> str:
    return ticker.strip().upper()


class CIKMapper:
    """
    Resolves equity tickers to their SEC CIK numbers.

    Parameters
    ----------
    client:
        Configured EdgarClient instance.
    cache:
        Cache for resolved CIKs and the ticker list.
    ttl:
        Lifetime of cached entries in seconds.
    """

    def __init__(self, client: EdgarClient, cache: Cache, ttl: int = CIK_TTL_SECONDS) -> None:
        self._client = client
        self._cache = cache
        self._ttl = ttl
        self._raw: dict[str, Any] | None = None  # company_tickers.json, once per mapper

    def _load_raw(self) -> dict[str, Any]:
        if self._raw is None:
            try:
                raw = self._client.get_json(EDGAR_TICKER_CIK_URL)
            except (requests.RequestException, RateLimitError, ValueError) as exc:
                raise FactsFetchError("company_tickers.json", f"HTTP failure: {exc}") from exc
            if not isinstance(raw, dict):
                raise FactsFetchError("company_tickers.json", "unexpected payload")
            self._raw = raw
            logger.info("Ticker map downloaded: %d entries", len(raw))
        return self._raw

    def _entries(self) -> list[TickerEntry]:
        # The JSON is a dict of integer index → {cik_str, ticker, title}
        entries: list[TickerEntry] = []
        for _idx, row in self._load_raw().items():
            ticker = str(row.get("ticker", "")).strip()
            cik_raw = str(row.get("cik_str", "")).strip()
            if ticker and cik_raw:
                entries.append(
                    TickerEntry(
                        ticker=ticker,
                        name=str(row.get("title", "")).strip(),
                        cik=cik_raw.zfill(10),
                    )
                )
        return entries

    def resolve(self, ticker: str) -> str:
        """
        Resolve a ticker to a zero-padded 10-digit CIK string.

        Parameters
        ----------
        ticker:
            Equity ticker (case-insensitive).

        Raises
        ------
        CIKLookupError: if the ticker is not found.
        """
        key = _normalize_ticker(ticker)
        cache_key = CIK_CACHE_KEY.format(ticker=key)

        cached = self._cache.get(cache_key)
        if cached:
            logger.debug("Cache hit: %s", cache_key)
            return str(cached)

        for entry in self._entries():
            if entry.ticker.upper() == key:
                self._cache.put(cache_key, entry.cik, self._ttl)
                return entry.cik

        raise CIKLookupError(ticker)

    def list_tickers(self) -> list[TickerEntry]:
        """
        Return every ticker SEC publishes, with registrant name and CIK.

        Used for client-side autocomplete; cached as plain dicts.
        """
        cached = self._cache.get(TICKERS_CACHE_KEY)
        if cached:
            logger.debug("Cache hit: %s", TICKERS_CACHE_KEY)
            return [TickerEntry(**row) for row in cached]

        entries = self._entries()
        self._cache.put(
            TICKERS_CACHE_KEY,
            [{"ticker": e.ticker, "name": e.name, "cik": e.cik} for e in entries],
            self._ttl,
        )
        return entries
