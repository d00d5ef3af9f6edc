"""
types.py – Shared domain types and dataclasses.
All data flowing through the engine uses these types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pandas as pd


# ── Enumerations ──────────────────────────────────────────────────────────────

class DurationClass(str, Enum):
    """Reporting-period class of a fact, derived from its start/end span."""
    QUARTERLY = "quarterly"
    CUMULATIVE = "cumulative"
    IRRELEVANT = "irrelevant"


class SeriesKind(str, Enum):
    """Which finalized series a caller wants."""
    QUARTERLY = "quarterly"
    TTM = "ttm"


# ── Fact types ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RawFactItem:
    """
    One reported value from a filing, as found in the companyfacts document.

    Dates are kept as zero-padded ISO strings (YYYY-MM-DD) so that string
    order equals chronological order.

    Attributes
    ----------
    value:
        Reported numeric value (``val``). None when absent.
    start:
        Period start date (``start``); None for instant facts.
    end:
        Period end date (``end``).
    filed:
        Date the containing filing was made (``filed``).
    form:
        Form type, e.g. '10-Q' or '10-Q/A'.
    frame:
        Optional frame label, e.g. 'CY2023Q2'.
    concept:
        The XBRL concept the item was read from.
    """

    value: float | None
    start: str | None
    end: str | None
    filed: str = ""
    form: str = ""
    frame: str | None = None
    concept: str = ""


@dataclass
class ConceptPools:
    """
    Candidate items for one metric, split by duration class.

    Attributes
    ----------
    quarterly:
        Items spanning roughly one quarter (70–120 days).
    cumulative:
        Year-to-date items spanning 150–380 days (6, 9, 12 months).
    """

    quarterly: list[RawFactItem] = field(default_factory=list)
    cumulative: list[RawFactItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.quarterly and not self.cumulative


# ── Output types ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PeriodPoint:
    """A resolved series entry: period end date and its value."""

    period: str
    value: float


@dataclass
class MetricSeries:
    """
    Result of one pipeline run for a ticker and metric.

    Attributes
    ----------
    ticker:
        Equity ticker the facts belong to (empty when run on a bare document).
    metric:
        Metric name, e.g. 'revenue'.
    field:
        Serialization field name, e.g. 'operatingIncome'.
    quarterly:
        Finalized quarterly series, most recent first.
    ttm:
        Trailing-twelve-month series derived from ``quarterly``.
    direct_count:
        Number of quarters taken directly from quarter-framed facts.
    calculated_count:
        Number of Q4 values derived as annual minus nine-month.
    """

    ticker: str
    metric: str
    field: str
    quarterly: list[PeriodPoint]
    ttm: list[PeriodPoint]
    direct_count: int = 0
    calculated_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.quarterly


@dataclass
class PullResult:
    """
    Output of a bulk series pull over many tickers.

    Attributes
    ----------
    tables:
        Long-form DataFrames keyed by table name
        ('series_quarterly', 'series_ttm').
    empty:
        {ticker: [metric, ...]} for metrics that produced no data.
    failed:
        {ticker: reason} for tickers whose facts could not be fetched.
    """

    tables: dict[str, pd.DataFrame]
    empty: dict[str, list[str]] = field(default_factory=dict)
    failed: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TickerEntry:
    """One row of the SEC ticker list: symbol, registrant name, 10-digit CIK."""

    ticker: str
    name: str
    cik: str
