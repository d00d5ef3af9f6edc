"""
test_fact_store.py – Cache-or-fetch behaviour of FactStore, and EdgarClient
response handling against a mocked HTTP session.
"""

from __future__ import annotations

import time
from unittest.mock import MagicMock

import pytest
import requests

from series_engine.constants import CIK_TTL_SECONDS, FACTS_TTL_SECONDS
from series_engine.edgar.cik_map import CIKMapper
from series_engine.edgar.client import EdgarClient
from series_engine.edgar.facts import FactStore
from series_engine.exceptions import CIKLookupError, FactsFetchError, RateLimitError
from series_engine.utils.cache import DiskCache

from conftest import company_facts, quarter_entry

TICKERS_JSON = {
    "0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."},
    "1": {"cik_str": 789019, "ticker": "MSFT", "title": "MICROSOFT CORP"},
}
AAPL_FACTS = company_facts({"Revenues": [quarter_entry(2024, 3, 100.0)]})


def _client(facts: object = AAPL_FACTS) -> MagicMock:
    client = MagicMock()

    def get_json(url, params=None):
        if url.endswith("company_tickers.json"):
            return TICKERS_JSON
        return facts

    client.get_json.side_effect = get_json
    return client


def _store(client: MagicMock, cache) -> FactStore:
    return FactStore(client, cache, CIKMapper(client, cache))


class TestFactStore:
    def test_miss_fetches_and_caches(self, memory_cache) -> None:
        client = _client()
        facts = _store(client, memory_cache).get_company_facts("aapl")
        assert facts == AAPL_FACTS
        assert memory_cache.data["companyfacts:AAPL"] == AAPL_FACTS
        assert memory_cache.ttls["companyfacts:AAPL"] == FACTS_TTL_SECONDS
        assert memory_cache.ttls["cik:AAPL"] == CIK_TTL_SECONDS

    def test_fetches_padded_cik_url(self, memory_cache) -> None:
        client = _client()
        _store(client, memory_cache).get_company_facts("AAPL")
        urls = [call.args[0] for call in client.get_json.call_args_list]
        assert urls[-1] == "https://data.sec.gov/api/xbrl/companyfacts/CIK0000320193.json"

    def test_second_call_served_from_cache(self, memory_cache) -> None:
        client = _client()
        store = _store(client, memory_cache)
        store.get_company_facts("AAPL")
        calls = client.get_json.call_count
        assert store.get_company_facts("AAPL") == AAPL_FACTS
        assert client.get_json.call_count == calls

    def test_prefilled_cache_never_hits_network(self, memory_cache) -> None:
        memory_cache.put("companyfacts:MSFT", {"facts": {}}, FACTS_TTL_SECONDS)
        client = _client()
        assert _store(client, memory_cache).get_company_facts("msft") == {"facts": {}}
        client.get_json.assert_not_called()

    def test_unknown_ticker(self, memory_cache) -> None:
        with pytest.raises(CIKLookupError):
            _store(_client(), memory_cache).get_company_facts("ZZZZ")
        assert "companyfacts:ZZZZ" not in memory_cache.data

    def test_http_failure_wrapped(self, memory_cache) -> None:
        client = MagicMock()
        client.get_json.side_effect = requests.ConnectionError("boom")
        store = FactStore(client, memory_cache, MagicMock(resolve=MagicMock(return_value="0000320193")))
        with pytest.raises(FactsFetchError) as exc_info:
            store.get_company_facts("AAPL")
        assert exc_info.value.ticker == "AAPL"
        assert memory_cache.data == {}

    def test_rate_limit_wrapped(self, memory_cache) -> None:
        client = MagicMock()
        client.get_json.side_effect = RateLimitError("slow down")
        store = FactStore(client, memory_cache, MagicMock())
        with pytest.raises(FactsFetchError):
            store.fetch_by_cik("320193")

    def test_malformed_payload(self, memory_cache) -> None:
        client = _client(facts=["not", "a", "document"])
        with pytest.raises(FactsFetchError):
            _store(client, memory_cache).get_company_facts("AAPL")


class TestDiskCache:
    def test_put_get(self, tmp_path) -> None:
        with DiskCache(tmp_path / "c") as cache:
            cache.put("companyfacts:AAPL", AAPL_FACTS, 60)
            assert cache.get("companyfacts:AAPL") == AAPL_FACTS
            assert cache.get("missing") is None

    def test_usable_by_fact_store(self, tmp_path) -> None:
        with DiskCache(tmp_path / "c") as cache:
            client = _client()
            store = _store(client, cache)
            store.get_company_facts("AAPL")
            calls = client.get_json.call_count
            store.get_company_facts("AAPL")
            assert client.get_json.call_count == calls


def _response(status: int, payload: object = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.url = "https://data.sec.gov/test"
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


class TestEdgarClient:
    def test_returns_parsed_json(self, config) -> None:
        session = MagicMock()
        session.get.return_value = _response(200, {"ok": True})
        client = EdgarClient(config, session=session)
        assert client.get_json("https://data.sec.gov/test") == {"ok": True}
        assert session.get.call_count == 1

    def test_not_found_is_not_retried(self, config) -> None:
        session = MagicMock()
        session.get.return_value = _response(404)
        client = EdgarClient(config, session=session)
        with pytest.raises(requests.HTTPError):
            client.get_json("https://data.sec.gov/missing")
        assert session.get.call_count == 1

    def test_persistent_429_becomes_rate_limit_error(self, config, monkeypatch) -> None:
        monkeypatch.setattr(time, "sleep", lambda _seconds: None)
        session = MagicMock()
        session.get.return_value = _response(429)
        client = EdgarClient(config, session=session)
        with pytest.raises(RateLimitError):
            client.get_json("https://data.sec.gov/busy")
        assert session.get.call_count == 5

    def test_transient_5xx_recovers(self, config, monkeypatch) -> None:
        monkeypatch.setattr(time, "sleep", lambda _seconds: None)
        session = MagicMock()
        session.get.side_effect = [_response(503), _response(200, {"ok": 1})]
        client = EdgarClient(config, session=session)
        assert client.get_json("https://data.sec.gov/flaky") == {"ok": 1}
        assert session.get.call_count == 2
