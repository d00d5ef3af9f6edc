"""
service.py – Ticker-level entry points over the fact store and pipeline.

``SeriesService`` answers "quarterly revenue for AAPL" style questions:
it pulls the (cached) companyfacts document once and runs the metric
pipeline on it. ``open_service`` wires the production stack from an
EngineConfig; tests build a SeriesService around a fake store instead.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterable, Iterator, Protocol

from series_engine.config import EngineConfig
from series_engine.data.schema import QUARTERLY_SCHEMA, TTM_SCHEMA
from series_engine.data.outputs import series_to_frame
from series_engine.edgar.cik_map import CIKMapper
from series_engine.edgar.client import EdgarClient
from series_engine.edgar.facts import FactStore
from series_engine.exceptions import CIKLookupError, FactsFetchError
from series_engine.series.concepts import METRICS, MetricDefinition, get_metric
from series_engine.series.pipeline import run_pipeline
from series_engine.types import MetricSeries, PeriodPoint, PullResult, SeriesKind, TickerEntry
from series_engine.utils.cache import DiskCache

logger = logging.getLogger(__name__)


class FactsSource(Protocol):
    def get_company_facts(self, ticker: str) -> dict[str, Any]: ...


class SeriesService:
    """
    Serves metric series for tickers.

    Parameters
    ----------
    store:
        Anything exposing ``get_company_facts(ticker)``; normally a FactStore.
    cik_mapper:
        Optional mapper backing ``tickers()``.
    config:
        Supplies retention windows. Defaults to environment config.
    """

    def __init__(
        self,
        store: FactsSource,
        cik_mapper: CIKMapper | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._store = store
        self._cik_mapper = cik_mapper
        self._config = config or EngineConfig.from_env()

    def series(self, ticker: str, metric: str | MetricDefinition) -> MetricSeries:
        """
        Quarterly and TTM series of one metric for a ticker.

        Raises
        ------
        UnknownMetricError: for an unknown metric (checked before any fetch).
        CIKLookupError, FactsFetchError: from the fact store.
        """
        definition = get_metric(metric)
        symbol = ticker.strip().upper()
        facts = self._store.get_company_facts(symbol)
        return run_pipeline(
            facts,
            definition,
            ticker=symbol,
            max_quarters=self._config.max_quarters,
            max_ttm=self._config.max_ttm,
        )

    def quarterly(self, ticker: str, metric: str | MetricDefinition) -> list[PeriodPoint]:
        return self.series(ticker, metric).quarterly

    def ttm(self, ticker: str, metric: str | MetricDefinition) -> list[PeriodPoint]:
        return self.series(ticker, metric).ttm

    def tickers(self) -> list[TickerEntry]:
        """Every SEC-listed ticker with name and CIK."""
        if self._cik_mapper is None:
            raise RuntimeError("SeriesService was built without a CIKMapper")
        return self._cik_mapper.list_tickers()

    def pull(
        self,
        tickers: Iterable[str],
        metrics: Iterable[str | MetricDefinition] | None = None,
    ) -> PullResult:
        """
        Compute every requested metric for every ticker into long-form tables.

        A ticker that cannot be resolved or fetched is recorded in
        ``PullResult.failed`` and the pull carries on with the rest.
        """
        definitions = [get_metric(m) for m in (metrics or METRICS.values())]
        collected: list[MetricSeries] = []
        result = PullResult(tables={})

        for ticker in tickers:
            symbol = ticker.strip().upper()
            try:
                facts = self._store.get_company_facts(symbol)
            except (CIKLookupError, FactsFetchError) as exc:
                logger.warning("Skipping %s: %s", symbol, exc)
                result.failed[symbol] = str(exc)
                continue

            for definition in definitions:
                series = run_pipeline(
                    facts,
                    definition,
                    ticker=symbol,
                    max_quarters=self._config.max_quarters,
                    max_ttm=self._config.max_ttm,
                )
                if series.is_empty:
                    result.empty.setdefault(symbol, []).append(definition.name)
                collected.append(series)

        result.tables = {
            QUARTERLY_SCHEMA.table_name: series_to_frame(collected, SeriesKind.QUARTERLY),
            TTM_SCHEMA.table_name: series_to_frame(collected, SeriesKind.TTM),
        }
        logger.info(
            "Pulled %d series; %d tickers failed, %d with empty metrics",
            len(collected), len(result.failed), len(result.empty),
        )
        return result


@contextlib.contextmanager
def open_service(config: EngineConfig | None = None) -> Iterator[SeriesService]:
    """
    Build a SeriesService on the production stack (HTTP client, disk cache).

    The disk cache is closed on exit.
    """
    cfg = config or EngineConfig.from_env()
    client = EdgarClient(cfg)
    with DiskCache(cfg.cache_dir / "edgar") as cache:
        cik_mapper = CIKMapper(client, cache, ttl=cfg.cik_ttl_seconds)
        store = FactStore(client, cache, cik_mapper, ttl=cfg.facts_ttl_seconds)
        yield SeriesService(store, cik_mapper=cik_mapper, config=cfg)
