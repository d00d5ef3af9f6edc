"""
gap_fill.py – Derive missing fourth quarters from cumulative figures.

Many issuers never file a discrete Q4: the 10-K carries only the full-year
total. Q4 is then the annual figure minus the nine-month year-to-date figure
that shares its start date.
"""

from __future__ import annotations

import logging
from typing import Collection, Sequence

from series_engine.types import PeriodPoint, RawFactItem
from series_engine.utils.dates import is_annual_span, is_nine_month_span, span_days

logger = logging.getLogger(__name__)


def find_nine_month(annual: RawFactItem, pool: Sequence[RawFactItem]) -> RawFactItem | None:
    """
    Return the first pool item covering the first nine months of ``annual``'s
    fiscal year: same start, earlier end, ~270-day span.
    """
    for item in pool:
        if (
            item.start == annual.start
            and item.end < annual.end
            and is_nine_month_span(span_days(item.start, item.end))
        ):
            return item
    return None


def calculate_missing_quarters(
    cumulative_pool: Sequence[RawFactItem],
    covered_periods: Collection[str],
    positive_only: bool = True,
) -> list[PeriodPoint]:
    """
    Compute Q4 = annual − nine-month for every fiscal year in the pool.

    Parameters
    ----------
    cumulative_pool:
        Cumulative-duration items from the concept merger, in pool order.
    covered_periods:
        Period ends already supplied by direct quarterly facts. Direct data
        always wins; those periods are never derived.
    positive_only:
        Discard derived values <= 0 (revenue, operating income).

    Returns
    -------
    list[PeriodPoint], at most one per period end, in pool order.
    """
    covered = set(covered_periods)
    derived: list[PeriodPoint] = []
    emitted: set[str] = set()

    for annual in cumulative_pool:
        if not is_annual_span(span_days(annual.start, annual.end)):
            continue
        if annual.end in covered or annual.end in emitted:
            continue

        nine_month = find_nine_month(annual, cumulative_pool)
        if nine_month is None:
            continue

        q4_value = annual.value - nine_month.value
        if positive_only and q4_value <= 0:
            logger.debug(
                "Discarding non-positive derived Q4 for %s: %s - %s",
                annual.end, annual.value, nine_month.value,
            )
            continue

        emitted.add(annual.end)
        derived.append(PeriodPoint(period=annual.end, value=q4_value))

    logger.debug("Derived %d fourth quarters from cumulative data", len(derived))
    return derived
