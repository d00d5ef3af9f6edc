"""
run_series_pull.py – Example: quarterly and TTM series for a few tickers.

Usage:
  python examples/run_series_pull.py

Note: Requires SEC_USER_AGENT to be set in environment or .env file.
"""

from __future__ import annotations

import json
from pathlib import Path

from series_engine.config import EngineConfig
from series_engine.data.outputs import series_records, write_tables
from series_engine.service import open_service
from series_engine.types import SeriesKind
from series_engine.utils.logging import configure_logging

# ── Configuration ─────────────────────────────────────────────────────────────
TICKERS = ["AAPL", "MSFT", "GOOGL"]
METRICS = ["revenue", "earnings", "operating_income"]
OUTPUT_DIR = Path("out/series_example")
FORMAT = "parquet"  # or "csv"

configure_logging("INFO")


def main() -> None:
    config = EngineConfig(
        user_agent="ResearchProject/1.0 researcher@example.com",
        cache_dir=Path(".cache"),
    )

    with open_service(config) as service:
        # Single series, shaped the way the mobile client consumes it
        apple_ttm = service.series("AAPL", "revenue")
        print("AAPL TTM revenue (latest 4):")
        print(json.dumps(series_records(apple_ttm, SeriesKind.TTM)[:4], indent=2))

        # Bulk pull; companyfacts are fetched once per ticker and cached 24h
        result = service.pull(TICKERS, METRICS)

    if result.failed:
        print(f"\nFailed tickers: {result.failed}")

    written = write_tables(result, OUTPUT_DIR, fmt=FORMAT, validate=True)
    print(f"\nTables written to: {OUTPUT_DIR}/")
    for table, path in written.items():
        print(f"   {table}: {path.name}")


if __name__ == "__main__":
    main()
