"""
tests/conftest.py – Shared fixtures and companyfacts builders for all tests.
"""
from __future__ import annotations

import datetime
import logging
from typing import Any

import pytest

from series_engine.config import EngineConfig

_QUARTER_BOUNDS = {
    1: ("01-01", "03-31"),
    2: ("04-01", "06-30"),
    3: ("07-01", "09-30"),
    4: ("10-01", "12-31"),
}


class MemoryCache:
    """In-memory stand-in for the Cache capability; remembers TTLs it was given."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int | None] = {}

    def get(self, key: str) -> Any | None:
        return self.data.get(key)

    def put(self, key: str, value: Any, ttl: int | None) -> None:
        self.data[key] = value
        self.ttls[key] = ttl


def entry(
    val: float | None,
    start: str | None,
    end: str | None,
    filed: str = "2024-11-01",
    form: str = "10-Q",
    frame: str | None = None,
) -> dict[str, Any]:
    """One companyfacts unit entry, shaped like SEC's JSON."""
    item: dict[str, Any] = {"val": val, "filed": filed, "form": form}
    if start is not None:
        item["start"] = start
    if end is not None:
        item["end"] = end
    if frame is not None:
        item["frame"] = frame
    return item


def span(start: str, days: int) -> tuple[str, str]:
    """(start, end) ISO strings exactly ``days`` calendar days apart."""
    begin = datetime.date.fromisoformat(start)
    return start, (begin + datetime.timedelta(days=days)).isoformat()


def quarter_entry(year: int, quarter: int, val: float, **kwargs: Any) -> dict[str, Any]:
    """A calendar-quarter entry with a CY frame, e.g. CY2024Q3."""
    start, end = _QUARTER_BOUNDS[quarter]
    kwargs.setdefault("frame", f"CY{year}Q{quarter}")
    return entry(val, f"{year}-{start}", f"{year}-{end}", **kwargs)


def quarter_entries(count: int, latest_year: int = 2024, base: float = 1_000.0) -> list[dict[str, Any]]:
    """``count`` consecutive calendar quarters ending at Q4 of ``latest_year``."""
    entries = []
    year, quarter = latest_year, 4
    for i in range(count):
        entries.append(quarter_entry(year, quarter, base + i))
        quarter -= 1
        if quarter == 0:
            year, quarter = year - 1, 4
    return entries


def company_facts(concepts: dict[str, list[dict[str, Any]]], unit: str = "USD") -> dict[str, Any]:
    """Wrap concept → entries into a full companyfacts document."""
    return {
        "cik": 320193,
        "entityName": "Test Corp",
        "facts": {
            "us-gaap": {
                name: {"label": name, "units": {unit: entries}}
                for name, entries in concepts.items()
            }
        },
    }


@pytest.fixture()
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture()
def config(tmp_path) -> EngineConfig:
    return EngineConfig(user_agent="Test/1.0 test@test.com", cache_dir=tmp_path / "cache")


@pytest.fixture(autouse=True)
def _reset_engine_logger():
    """CLI tests call configure_logging, which detaches the engine logger from root."""
    yield
    engine_logger = logging.getLogger("series_engine")
    engine_logger.handlers.clear()
    engine_logger.propagate = True
    engine_logger.setLevel(logging.NOTSET)
