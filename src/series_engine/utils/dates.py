"""
dates.py – Period date utilities.

Facts carry their dates as zero-padded ISO strings. Ordering comparisons
stay on those strings (lexicographic == chronological); any day arithmetic
goes through ``datetime.date`` here so leap years are handled correctly.
"""

from __future__ import annotations

import datetime

from series_engine.constants import (
    ANNUAL_MAX_DAYS,
    ANNUAL_MIN_DAYS,
    NINE_MONTH_DAYS,
    NINE_MONTH_TOLERANCE_DAYS,
)


def parse_date(value: str) -> datetime.date:
    """
    Parse a companyfacts ISO date string ('YYYY-MM-DD').

    Raises
    ------
    ValueError: for any other format.
    """
    return datetime.datetime.strptime(value.strip(), "%Y-%m-%d").date()


def period_duration_days(start: datetime.date, end: datetime.date) -> int:
    """Return the number of calendar days in a period."""
    return (end - start).days


def span_days(start: str | None, end: str | None) -> int | None:
    """
    Return the calendar-day span between two ISO date strings.

    Returns None when either date is missing or unparseable.
    """
    if not start or not end:
        return None
    try:
        start_date = parse_date(start)
        end_date = parse_date(end)
    except ValueError:
        return None
    return period_duration_days(start_date, end_date)


def is_annual_span(days: int | None) -> bool:
    """A cumulative span counts as a full fiscal year at 330–380 days."""
    return days is not None and ANNUAL_MIN_DAYS <= days <= ANNUAL_MAX_DAYS


def is_nine_month_span(days: int | None) -> bool:
    """A cumulative span counts as nine months when strictly within 30 days of 270."""
    return days is not None and abs(days - NINE_MONTH_DAYS) < NINE_MONTH_TOLERANCE_DAYS

