"""
pipeline.py – One parametrized extraction pipeline for every metric.

    raw facts ─► merge_concepts ─┬─► dedupe_quarterly ───────────┐
                                 └─► calculate_missing_quarters ─┴─► finalize ─► compute_ttm

The pipeline is pure: same document in, same series out. It never raises
for data problems; a metric with no usable facts yields empty series.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from series_engine.constants import MAX_QUARTERS, MAX_TTM_POINTS
from series_engine.series.concepts import MetricDefinition, get_metric
from series_engine.series.dedupe import dedupe_quarterly
from series_engine.series.finalize import compute_ttm, finalize
from series_engine.series.gap_fill import calculate_missing_quarters
from series_engine.series.merge import merge_concepts
from series_engine.types import MetricSeries, PeriodPoint

logger = logging.getLogger(__name__)


def run_pipeline(
    facts: Mapping[str, Any],
    metric: str | MetricDefinition,
    ticker: str = "",
    max_quarters: int = MAX_QUARTERS,
    max_ttm: int = MAX_TTM_POINTS,
) -> MetricSeries:
    """
    Build the quarterly and TTM series of one metric from a facts document.

    Parameters
    ----------
    facts:
        Raw companyfacts document.
    metric:
        Metric name (or definition) selecting the concept table and policies.
    ticker:
        Label carried into the result.
    max_quarters, max_ttm:
        Retention windows.

    Raises
    ------
    UnknownMetricError: if ``metric`` is not a known name.
    """
    definition = get_metric(metric)

    pools = merge_concepts(
        facts,
        definition.concepts,
        unit=definition.unit,
        reject_non_positive=definition.reject_non_positive,
    )
    if pools.is_empty:
        logger.info("No %s data found%s", definition.name, f" for {ticker}" if ticker else "")
        return MetricSeries(ticker=ticker, metric=definition.name, field=definition.field,
                            quarterly=[], ttm=[])

    direct = dedupe_quarterly(pools.quarterly)
    calculated = calculate_missing_quarters(
        pools.cumulative,
        covered_periods={p.period for p in direct},
        positive_only=definition.positive_gap_fill,
    )
    quarterly = finalize(direct, calculated, limit=max_quarters)
    ttm = compute_ttm(quarterly, limit=max_ttm)

    logger.debug(
        "%s %s: %d direct + %d derived quarters → %d kept, %d TTM points",
        ticker or "<doc>", definition.name, len(direct), len(calculated), len(quarterly), len(ttm),
    )
    return MetricSeries(
        ticker=ticker,
        metric=definition.name,
        field=definition.field,
        quarterly=quarterly,
        ttm=ttm,
        direct_count=len(direct),
        calculated_count=len(calculated),
    )


def extract_quarterly(facts: Mapping[str, Any], metric: str | MetricDefinition) -> list[PeriodPoint]:
    """Quarterly series (most recent first, at most 40 points) for a metric."""
    return run_pipeline(facts, metric).quarterly


def extract_ttm(facts: Mapping[str, Any], metric: str | MetricDefinition) -> list[PeriodPoint]:
    """TTM series (most recent first, at most 37 points) for a metric."""
    return run_pipeline(facts, metric).ttm
