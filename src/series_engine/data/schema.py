"""
schema.py – DataFrame schemas for exported series tables.

Series are exported in long form, one row per (ticker, metric, period):

    ticker | metric | period | value

The quarterly and TTM tables share columns but differ in their per-series
length cap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd

from series_engine.constants import MAX_QUARTERS, MAX_TTM_POINTS
from series_engine.types import SeriesKind


@dataclass
class ColumnSpec:
    """
    Specification for a single DataFrame column.

    Attributes
    ----------
    name:
        Column name.
    dtype:
        Expected dtype ('str' or 'float').
    nullable:
        If True, NaN/None values are permitted.
    """

    name: str
    dtype: str
    nullable: bool = False


@dataclass
class SchemaDefinition:
    """
    Full schema for a named series table.

    Attributes
    ----------
    table_name:
        Canonical name ('series_quarterly' or 'series_ttm').
    key_columns:
        Columns that together form a unique row identifier.
    series_columns:
        Columns identifying one series within the table.
    columns:
        All column specifications.
    max_points:
        Maximum rows per series.
    """

    table_name: str
    key_columns: list[str]
    series_columns: list[str]
    columns: list[ColumnSpec]
    max_points: int

    @property
    def all_column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def empty_dataframe(self) -> pd.DataFrame:
        """Return an empty DataFrame with the correct column types."""
        dtype_map: dict[str, Any] = {c.name: _pandas_dtype(c.dtype) for c in self.columns}
        return pd.DataFrame(columns=list(dtype_map.keys())).astype(dtype_map)


def _pandas_dtype(dtype_str: str) -> Any:
    return {"str": "object", "float": "float64"}.get(dtype_str, dtype_str)


_SERIES_COLUMNS = [
    ColumnSpec("ticker", "str"),
    ColumnSpec("metric", "str"),
    ColumnSpec("period", "str"),
    ColumnSpec("value", "float"),
]

QUARTERLY_SCHEMA = SchemaDefinition(
    table_name="series_quarterly",
    key_columns=["ticker", "metric", "period"],
    series_columns=["ticker", "metric"],
    columns=list(_SERIES_COLUMNS),
    max_points=MAX_QUARTERS,
)

TTM_SCHEMA = SchemaDefinition(
    table_name="series_ttm",
    key_columns=["ticker", "metric", "period"],
    series_columns=["ticker", "metric"],
    columns=list(_SERIES_COLUMNS),
    max_points=MAX_TTM_POINTS,
)

SCHEMA_BY_KIND: dict[SeriesKind, SchemaDefinition] = {
    SeriesKind.QUARTERLY: QUARTERLY_SCHEMA,
    SeriesKind.TTM: TTM_SCHEMA,
}

ALL_SCHEMAS: dict[str, SchemaDefinition] = {
    s.table_name: s for s in (QUARTERLY_SCHEMA, TTM_SCHEMA)
}
