"""
test_concept_merge.py – Pooling facts across alternative concepts, and the
per-metric concept tables.
"""

from __future__ import annotations

import pytest

from series_engine.exceptions import UnknownMetricError
from series_engine.series.concepts import METRICS, get_metric
from series_engine.series.merge import merge_concepts, parse_fact_item

from conftest import company_facts, entry, quarter_entry

REVENUE_CONCEPTS = METRICS["revenue"].concepts


class TestMergeConcepts:
    def test_pools_split_by_duration(self) -> None:
        facts = company_facts({
            "Revenues": [
                quarter_entry(2024, 3, 100.0),
                entry(360.0, "2023-01-01", "2023-12-31", form="10-K"),
                entry(50.0, "2023-01-01", "2023-02-15"),  # 45 days – dropped
            ],
        })
        pools = merge_concepts(facts, REVENUE_CONCEPTS)
        assert [i.value for i in pools.quarterly] == [100.0]
        assert [i.value for i in pools.cumulative] == [360.0]

    def test_items_from_every_concept_are_pooled(self) -> None:
        facts = company_facts({
            "SalesRevenueNet": [quarter_entry(2016, 1, 10.0)],
            "Revenues": [quarter_entry(2016, 1, 11.0)],
            "RevenueFromContractWithCustomerExcludingAssessedTax": [quarter_entry(2024, 1, 12.0)],
        })
        pools = merge_concepts(facts, REVENUE_CONCEPTS)
        assert sorted(i.value for i in pools.quarterly) == [10.0, 11.0, 12.0]
        # priority order decides pool order
        assert [i.concept for i in pools.quarterly] == [
            "RevenueFromContractWithCustomerExcludingAssessedTax",
            "SalesRevenueNet",
            "Revenues",
        ]

    def test_absent_concepts_are_skipped(self) -> None:
        facts = company_facts({"SalesRevenueNet": [quarter_entry(2017, 2, 42.0)]})
        pools = merge_concepts(facts, REVENUE_CONCEPTS)
        assert len(pools.quarterly) == 1
        assert pools.quarterly[0].concept == "SalesRevenueNet"

    def test_no_data_gives_empty_pools(self) -> None:
        pools = merge_concepts(company_facts({"Assets": [quarter_entry(2024, 1, 1.0)]}), REVENUE_CONCEPTS)
        assert pools.is_empty

    def test_other_units_ignored(self) -> None:
        facts = company_facts({"Revenues": [quarter_entry(2024, 1, 1.0)]}, unit="EUR")
        assert merge_concepts(facts, REVENUE_CONCEPTS).is_empty

    def test_accepts_bare_facts_mapping(self) -> None:
        doc = company_facts({"Revenues": [quarter_entry(2024, 1, 5.0)]})
        pools = merge_concepts(doc["facts"], REVENUE_CONCEPTS)
        assert len(pools.quarterly) == 1

    def test_empty_document(self) -> None:
        assert merge_concepts({}, REVENUE_CONCEPTS).is_empty

    def test_revenue_rejects_negative_items(self) -> None:
        facts = company_facts({"Revenues": [quarter_entry(2024, 1, -5.0)]})
        assert merge_concepts(facts, REVENUE_CONCEPTS, reject_non_positive=True).is_empty
        assert len(merge_concepts(facts, REVENUE_CONCEPTS).quarterly) == 1

    def test_malformed_entries_skipped(self) -> None:
        facts = company_facts({
            "Revenues": [
                "not-a-dict",
                entry("n/a", "2024-01-01", "2024-03-31", frame="CY2024Q1"),  # type: ignore[arg-type]
                entry(7.0, None, "2024-03-31", frame="CY2024Q1"),
                quarter_entry(2024, 2, 8.0),
            ],
        })
        pools = merge_concepts(facts, REVENUE_CONCEPTS)
        assert [i.value for i in pools.quarterly] == [8.0]


class TestParseFactItem:
    def test_fields_copied(self) -> None:
        item = parse_fact_item(
            entry(1.5e9, "2024-04-01", "2024-06-30", filed="2024-08-01", form="10-Q/A", frame="CY2024Q2"),
            "Revenues",
        )
        assert item is not None
        assert item.value == 1.5e9
        assert item.start == "2024-04-01"
        assert item.end == "2024-06-30"
        assert item.filed == "2024-08-01"
        assert item.form == "10-Q/A"
        assert item.frame == "CY2024Q2"
        assert item.concept == "Revenues"

    def test_missing_frame_is_none(self) -> None:
        item = parse_fact_item(entry(1.0, "2024-01-01", "2024-03-31"))
        assert item is not None and item.frame is None

    def test_integral_values_stay_int(self) -> None:
        whole = parse_fact_item(entry(94_930_000_000, "2024-07-01", "2024-09-30"))
        assert whole is not None
        assert isinstance(whole.value, int) and whole.value == 94_930_000_000

        written_as_float = parse_fact_item(entry(100.0, "2024-07-01", "2024-09-30"))
        assert written_as_float is not None and isinstance(written_as_float.value, int)

        fractional = parse_fact_item(entry(0.25, "2024-07-01", "2024-09-30"))
        assert fractional is not None and fractional.value == 0.25


class TestMetricTables:
    def test_three_metrics(self) -> None:
        assert set(METRICS) == {"revenue", "earnings", "operating_income"}

    def test_revenue_concept_priority(self) -> None:
        assert REVENUE_CONCEPTS[0] == "RevenueFromContractWithCustomerExcludingAssessedTax"
        assert "SalesRevenueNet" in REVENUE_CONCEPTS
        assert REVENUE_CONCEPTS[-1] == "Revenues"

    def test_gap_fill_policies(self) -> None:
        assert METRICS["revenue"].positive_gap_fill is True
        assert METRICS["operating_income"].positive_gap_fill is True
        assert METRICS["earnings"].positive_gap_fill is False

    def test_only_revenue_rejects_negative_items(self) -> None:
        assert METRICS["revenue"].reject_non_positive is True
        assert METRICS["earnings"].reject_non_positive is False
        assert METRICS["operating_income"].reject_non_positive is False

    def test_field_names_match_client(self) -> None:
        assert [METRICS[m].field for m in ("revenue", "earnings", "operating_income")] == [
            "revenue", "earnings", "operatingIncome",
        ]

    def test_aliases(self) -> None:
        assert get_metric("operating-income") is METRICS["operating_income"]
        assert get_metric("operatingIncome") is METRICS["operating_income"]
        assert get_metric(" Revenue ") is METRICS["revenue"]

    def test_unknown_metric_raises(self) -> None:
        with pytest.raises(UnknownMetricError) as exc_info:
            get_metric("ebitda")
        assert "ebitda" in str(exc_info.value)
