"""
facts.py – Cache-or-fetch access to SEC EDGAR companyfacts documents.

The companyfacts endpoint returns ALL historical XBRL data for a company
in a single JSON blob. This is the only place that fetches it; every metric
and series kind for a ticker is computed from the same cached document.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from series_engine.constants import EDGAR_COMPANY_FACTS_URL, FACTS_CACHE_KEY, FACTS_TTL_SECONDS
from series_engine.edgar.cik_map import CIKMapper
from series_engine.edgar.client import EdgarClient
from series_engine.exceptions import FactsFetchError, RateLimitError
from series_engine.utils.cache import Cache

logger = logging.getLogger(__name__)


class FactStore:
    """
    Serves raw companyfacts documents, from cache when fresh.

    Parameters
    ----------
    client:
        Configured EdgarClient instance.
    cache:
        Cache holding raw documents keyed by ticker.
    cik_mapper:
        Resolver used on a cache miss.
    ttl:
        Lifetime of a cached document in seconds.
    """

    def __init__(
        self,
        client: EdgarClient,
        cache: Cache,
        cik_mapper: CIKMapper,
        ttl: int = FACTS_TTL_SECONDS,
    ) -> None:
        self._client = client
        self._cache = cache
        self._cik_mapper = cik_mapper
        self._ttl = ttl

    def get_company_facts(self, ticker: str) -> dict[str, Any]:
        """
        Return the raw companyfacts document for a ticker.

        Parameters
        ----------
        ticker:
            Equity ticker (case-insensitive).

        Raises
        ------
        CIKLookupError: if the ticker is not in SEC's ticker map.
        FactsFetchError: on HTTP failure or a malformed response.
        """
        symbol = ticker.strip().upper()
        cache_key = FACTS_CACHE_KEY.format(ticker=symbol)

        cached = self._cache.get(cache_key)
        if cached:
            logger.debug("Cache hit: %s", cache_key)
            return cached

        cik = self._cik_mapper.resolve(symbol)
        facts = self.fetch_by_cik(cik, label=symbol)
        self._cache.put(cache_key, facts, self._ttl)
        logger.info(
            "Fetched company facts for %s (CIK=%s, %d namespaces)",
            symbol, cik, len(facts.get("facts", {})),
        )
        return facts

    def fetch_by_cik(self, cik: str, label: str | None = None) -> dict[str, Any]:
        """
        Fetch a companyfacts document directly by CIK, bypassing the cache.

        Parameters
        ----------
        cik:
            CIK, padded or not.
        label:
            Name used in error messages (defaults to the CIK).
        """
        url = EDGAR_COMPANY_FACTS_URL.format(cik=str(cik).zfill(10))
        try:
            raw = self._client.get_json(url)
        except (requests.RequestException, RateLimitError, ValueError) as exc:
            raise FactsFetchError(label or cik, f"HTTP failure: {exc}") from exc

        if not isinstance(raw, dict):
            raise FactsFetchError(label or cik, f"unexpected payload type {type(raw).__name__}")
        return raw
