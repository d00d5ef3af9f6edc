"""
test_period_classifier.py – Duration classification of raw facts.
"""

from __future__ import annotations

import pytest

from series_engine.series.classify import classify, classify_days
from series_engine.types import DurationClass, RawFactItem
from series_engine.utils.dates import is_annual_span, is_nine_month_span, span_days

from conftest import span


def _item(days: int, value: float | None = 100.0, start: str = "2023-01-01") -> RawFactItem:
    begin, end = span(start, days)
    return RawFactItem(value=value, start=begin, end=end, filed="2024-01-01", form="10-Q")


class TestDurationBoundaries:
    """Both windows are closed intervals."""

    @pytest.mark.parametrize(
        "days, expected",
        [
            (69, DurationClass.IRRELEVANT),
            (70, DurationClass.QUARTERLY),
            (91, DurationClass.QUARTERLY),
            (120, DurationClass.QUARTERLY),
            (121, DurationClass.IRRELEVANT),
            (149, DurationClass.IRRELEVANT),
            (150, DurationClass.CUMULATIVE),
            (272, DurationClass.CUMULATIVE),
            (364, DurationClass.CUMULATIVE),
            (380, DurationClass.CUMULATIVE),
            (381, DurationClass.IRRELEVANT),
            (0, DurationClass.IRRELEVANT),
        ],
    )
    def test_boundary(self, days: int, expected: DurationClass) -> None:
        assert classify(_item(days)) is expected
        assert classify_days(days) is expected

    def test_leap_year_span_counts_real_days(self) -> None:
        # 2024-01-01 → 2024-12-31 is 365 days (leap year), still cumulative
        assert span_days("2024-01-01", "2024-12-31") == 365
        assert classify(_item(365, start="2024-01-01")) is DurationClass.CUMULATIVE

    def test_end_before_start_is_irrelevant(self) -> None:
        item = RawFactItem(value=5.0, start="2023-06-30", end="2023-04-01")
        assert classify(item) is DurationClass.IRRELEVANT


class TestValueRejection:
    def test_zero_value_is_irrelevant(self) -> None:
        assert classify(_item(90, value=0.0)) is DurationClass.IRRELEVANT

    def test_missing_value_is_irrelevant(self) -> None:
        assert classify(_item(90, value=None)) is DurationClass.IRRELEVANT

    def test_negative_value_kept_by_default(self) -> None:
        """Net losses are real figures."""
        assert classify(_item(90, value=-50.0)) is DurationClass.QUARTERLY

    def test_negative_value_rejected_for_revenue(self) -> None:
        item = _item(90, value=-50.0)
        assert classify(item, reject_non_positive=True) is DurationClass.IRRELEVANT

    def test_missing_start_is_irrelevant(self) -> None:
        item = RawFactItem(value=10.0, start=None, end="2023-12-31")
        assert classify(item) is DurationClass.IRRELEVANT

    def test_missing_end_is_irrelevant(self) -> None:
        item = RawFactItem(value=10.0, start="2023-01-01", end=None)
        assert classify(item) is DurationClass.IRRELEVANT

    def test_garbage_date_is_irrelevant(self) -> None:
        item = RawFactItem(value=10.0, start="Q1-2023", end="2023-03-31")
        assert classify(item) is DurationClass.IRRELEVANT

    def test_compact_dates_are_irrelevant(self) -> None:
        assert span_days("20230101", "20231231") is None
        item = RawFactItem(value=10.0, start="20230101", end="20230331")
        assert classify(item) is DurationClass.IRRELEVANT


class TestCumulativeSpans:
    def test_annual_span_window(self) -> None:
        assert is_annual_span(329) is False
        assert is_annual_span(330) is True
        assert is_annual_span(380) is True
        assert is_annual_span(381) is False
        assert is_annual_span(None) is False

    def test_nine_month_tolerance_is_strict(self) -> None:
        assert is_nine_month_span(270) is True
        assert is_nine_month_span(241) is True
        assert is_nine_month_span(240) is False
        assert is_nine_month_span(299) is True
        assert is_nine_month_span(300) is False
