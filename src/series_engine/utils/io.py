"""
io.py – File I/O helpers for exported series tables.

Supports Parquet (preferred) and CSV output.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("parquet", "csv")


def write_dataframe(
    df: pd.DataFrame,
    output_dir: Path,
    table_name: str,
    fmt: str = "parquet",
) -> Path:
    """
    Write a DataFrame to disk in the specified format.

    Parameters
    ----------
    df:
        DataFrame to write.
    output_dir:
        Directory to write into (created if necessary).
    table_name:
        Filename stem (e.g. 'revenue_quarterly').
    fmt:
        'parquet' or 'csv'.

    Returns
    -------
    Path to the written file.
    """
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported output format: {fmt!r}")
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{table_name}.{fmt}"
    if fmt == "parquet":
        df.to_parquet(path, index=False, engine="pyarrow")
    else:
        df.to_csv(path, index=False)
    logger.debug("Wrote %d rows → %s", len(df), path)
    return path


def read_dataframe(path: Path) -> pd.DataFrame:
    """Read a DataFrame from disk. Auto-detects Parquet vs CSV."""
    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pd.read_parquet(path, engine="pyarrow")
    if suffix == ".csv":
        # periods must stay strings, not be parsed into timestamps
        return pd.read_csv(path, dtype={"period": str, "ticker": str})
    raise ValueError(f"Unsupported file type: {suffix!r}")


def read_json(path: Path) -> Any:
    """Read a JSON file and return the parsed object."""
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)
