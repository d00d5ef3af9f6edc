"""
concepts.py – Per-metric XBRL concept tables.

Issuers switch tags over the years (SalesRevenueNet gave way to
RevenueFromContractWithCustomerExcludingAssessedTax after ASC 606), so each
metric lists every concept that may carry it, in priority order. All listed
concepts are pooled; priority only fixes the pool order.

To extend: add a MetricDefinition to METRICS below.
"""

from __future__ import annotations

from typing import NamedTuple

from series_engine.constants import DEFAULT_UNIT
from series_engine.exceptions import UnknownMetricError


class MetricDefinition(NamedTuple):
    """
    Parameters of one metric pipeline.

    Attributes
    ----------
    name:
        Metric identifier, e.g. 'revenue'.
    field:
        Field name used when serializing points for clients.
    concepts:
        us-gaap concept names in priority order.
    unit:
        Unit key inside each concept's ``units`` mapping.
    reject_non_positive:
        If True, items with value <= 0 are dropped at classification.
    positive_gap_fill:
        If True, derived Q4 values must be > 0 to be kept. Net income may
        legitimately go negative; revenue may not.
    """

    name: str
    field: str
    concepts: tuple[str, ...]
    unit: str = DEFAULT_UNIT
    reject_non_positive: bool = False
    positive_gap_fill: bool = False


REVENUE = MetricDefinition(
    "revenue",
    "revenue",
    (
        "RevenueFromContractWithCustomerExcludingAssessedTax",  # 2017-present
        "RevenueFromContractWithCustomer",
        "SalesRevenueNet",                                      # 2008-2018
        "Revenues",
    ),
    reject_non_positive=True,
    positive_gap_fill=True,
)

EARNINGS = MetricDefinition(
    "earnings",
    "earnings",
    (
        "NetIncomeLoss",
        "ProfitLoss",
        "NetIncomeLossAvailableToCommonStockholdersBasic",
    ),
)

OPERATING_INCOME = MetricDefinition(
    "operating_income",
    "operatingIncome",
    (
        "OperatingIncomeLoss",
        "IncomeLossFromContinuingOperationsBeforeIncomeTaxesExtraordinaryItemsNoncontrollingInterest",
    ),
    positive_gap_fill=True,
)

METRICS: dict[str, MetricDefinition] = {
    m.name: m for m in (REVENUE, EARNINGS, OPERATING_INCOME)
}

# Client-facing spellings (URL segments, field names) → metric name
_ALIASES: dict[str, str] = {
    "operating-income": "operating_income",
    "operatingincome": "operating_income",
    "net_income": "earnings",
    "net-income": "earnings",
}


def get_metric(name: str | MetricDefinition) -> MetricDefinition:
    """
    Resolve a metric by name or alias.

    Raises
    ------
    UnknownMetricError: if no metric matches.
    """
    if isinstance(name, MetricDefinition):
        return name
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return METRICS[key]
    except KeyError:
        raise UnknownMetricError(name) from None
