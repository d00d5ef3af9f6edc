"""
validation.py – Invariant checks for exported series tables.

Every series must have unique, zero-padded ISO periods in strictly
descending order, and stay within its retention window.
"""

from __future__ import annotations

import logging

import pandas as pd

from series_engine.data.schema import ALL_SCHEMAS, SchemaDefinition
from series_engine.exceptions import SchemaValidationError

logger = logging.getLogger(__name__)

_ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"


def validate_table(df: pd.DataFrame, table_name: str) -> list[str]:
    """
    Validate a DataFrame against its registered schema.

    Returns
    -------
    List of violation strings. Empty list means valid.

    Raises
    ------
    KeyError: if ``table_name`` is not in ALL_SCHEMAS.
    """
    schema: SchemaDefinition = ALL_SCHEMAS[table_name]
    violations: list[str] = []

    missing = [c for c in schema.all_column_names if c not in df.columns]
    for col in missing:
        violations.append(f"Missing required column: '{col}'")
    if missing:
        return violations

    for spec in schema.columns:
        if not spec.nullable:
            null_count = int(df[spec.name].isna().sum())
            if null_count > 0:
                violations.append(
                    f"Column '{spec.name}' is non-nullable but has {null_count} null values"
                )

    if df.duplicated(subset=schema.key_columns).any():
        dup_count = int(df.duplicated(subset=schema.key_columns).sum())
        violations.append(
            f"Key columns {schema.key_columns} are not unique: {dup_count} duplicate rows"
        )

    bad_periods = ~df["period"].astype(str).str.match(_ISO_DATE)
    if bad_periods.any():
        violations.append(f"{int(bad_periods.sum())} periods are not YYYY-MM-DD strings")

    for key, group in df.groupby(schema.series_columns, sort=False):
        label = "/".join(str(k) for k in (key if isinstance(key, tuple) else (key,)))
        if len(group) > schema.max_points:
            violations.append(
                f"Series {label} has {len(group)} points, limit is {schema.max_points}"
            )
        periods = group["period"].astype(str).tolist()
        if any(a <= b for a, b in zip(periods, periods[1:])):
            violations.append(f"Series {label} is not strictly descending by period")

    return violations


def assert_valid_table(df: pd.DataFrame, table_name: str) -> None:
    """
    Validate a table and raise SchemaValidationError if there are violations.
    """
    violations = validate_table(df, table_name)
    if violations:
        raise SchemaValidationError(table_name, violations)
    logger.debug("Table '%s' passed schema validation (%d rows)", table_name, len(df))
