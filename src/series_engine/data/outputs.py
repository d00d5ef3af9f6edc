"""
outputs.py – Shapes finalized series for clients and for disk.

``to_records`` produces the client wire shape,
``[{"period": "2024-09-30", "revenue": 94930000000.0}, ...]``, where the
value key is the metric's field name. ``series_to_frame`` and
``write_tables`` handle the tabular export.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd

from series_engine.data.schema import SCHEMA_BY_KIND, SchemaDefinition
from series_engine.data.validation import assert_valid_table
from series_engine.types import MetricSeries, PeriodPoint, PullResult, SeriesKind
from series_engine.utils.io import write_dataframe

logger = logging.getLogger(__name__)


def to_records(points: Sequence[PeriodPoint], field: str) -> list[dict[str, Any]]:
    """Render a series as client-compatible dicts, most recent first."""
    return [{"period": p.period, field: p.value} for p in points]


def series_records(series: MetricSeries, kind: SeriesKind = SeriesKind.QUARTERLY) -> list[dict[str, Any]]:
    """Client records for the quarterly or TTM half of a MetricSeries."""
    points = series.ttm if kind is SeriesKind.TTM else series.quarterly
    return to_records(points, series.field)


def series_to_frame(series_list: Iterable[MetricSeries], kind: SeriesKind) -> pd.DataFrame:
    """
    Stack many series into one long-form table.

    Rows keep each series' most-recent-first order.
    """
    schema: SchemaDefinition = SCHEMA_BY_KIND[kind]
    rows: list[dict[str, Any]] = []
    for series in series_list:
        points = series.ttm if kind is SeriesKind.TTM else series.quarterly
        for p in points:
            rows.append({
                "ticker": series.ticker,
                "metric": series.metric,
                "period": p.period,
                "value": float(p.value),
            })

    if not rows:
        return schema.empty_dataframe()
    return pd.DataFrame(rows, columns=schema.all_column_names)


def write_tables(
    result: PullResult,
    output_dir: Path,
    fmt: str = "parquet",
    validate: bool = True,
) -> dict[str, Path]:
    """
    Write every non-empty table of a PullResult, plus a JSON pull report.

    Parameters
    ----------
    result:
        The pull to persist.
    output_dir:
        Directory to write into.
    fmt:
        'parquet' or 'csv'.
    validate:
        If True, refuse to write tables that break series invariants.

    Returns
    -------
    dict mapping table_name → written file path.

    Raises
    ------
    SchemaValidationError: if ``validate`` and a table is invalid.
    """
    written: dict[str, Path] = {}

    for table_name, df in result.tables.items():
        if df is None or df.empty:
            logger.warning("Table '%s' is empty, skipping write.", table_name)
            continue

        if validate:
            assert_valid_table(df, table_name)

        path = write_dataframe(df, output_dir, table_name, fmt=fmt)
        written[table_name] = path
        logger.info("Wrote table '%s': %d rows → %s", table_name, len(df), path)

    _write_pull_report(result, output_dir)
    return written


def _write_pull_report(result: PullResult, out_dir: Path) -> None:
    data = {
        "rows": {name: len(df) for name, df in result.tables.items()},
        "empty": result.empty,
        "failed": result.failed,
    }
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / "pull_report.json"
    with path.open("w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, default=str)
    logger.info("Pull report written → %s", path)

