"""
classify.py – Period-duration classification of raw facts.

A fact's span (end - start, in calendar days) decides whether it is a
discrete quarter, a year-to-date cumulative figure, or noise:

    quarterly    70 <= days <= 120
    cumulative  150 <= days <= 380   (6, 9 and 12 month YTD figures)
    irrelevant  everything else, including the 121–149 gap

Both intervals are closed.
"""

from __future__ import annotations

import logging
import math

from series_engine.constants import (
    CUMULATIVE_MAX_DAYS,
    CUMULATIVE_MIN_DAYS,
    QUARTERLY_MAX_DAYS,
    QUARTERLY_MIN_DAYS,
)
from series_engine.types import DurationClass, RawFactItem
from series_engine.utils.dates import span_days

logger = logging.getLogger(__name__)


def classify_days(days: int | None) -> DurationClass:
    """Classify a span length in days."""
    if days is None:
        return DurationClass.IRRELEVANT
    if QUARTERLY_MIN_DAYS <= days <= QUARTERLY_MAX_DAYS:
        return DurationClass.QUARTERLY
    if CUMULATIVE_MIN_DAYS <= days <= CUMULATIVE_MAX_DAYS:
        return DurationClass.CUMULATIVE
    return DurationClass.IRRELEVANT


def has_usable_value(value: float | None, reject_non_positive: bool = False) -> bool:
    """False for missing, NaN or zero values, and for negatives when rejected."""
    if value is None or math.isnan(value) or value == 0:
        return False
    return not (reject_non_positive and value < 0)


def classify(item: RawFactItem, reject_non_positive: bool = False) -> DurationClass:
    """
    Classify a fact by its reporting-period duration.

    Parameters
    ----------
    item:
        The fact to classify.
    reject_non_positive:
        Treat values <= 0 as irrelevant (revenue).

    Returns
    -------
    DurationClass. Never raises; malformed items are IRRELEVANT.
    """
    if not has_usable_value(item.value, reject_non_positive):
        return DurationClass.IRRELEVANT
    if not item.start or not item.end:
        return DurationClass.IRRELEVANT

    days = span_days(item.start, item.end)
    if days is None:
        logger.debug(
            "Unparseable period on %s: start=%r end=%r", item.concept, item.start, item.end
        )
    return classify_days(days)
