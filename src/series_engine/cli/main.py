"""
main.py – CLI entry points for the series engine.

Commands:
  series_show   Print one metric series for a ticker as JSON records.
  series_pull   Export quarterly and TTM tables for a list of tickers.
  ticker_list   Print every SEC ticker with name and CIK as JSON.

Usage:
  series_show AAPL --metric revenue --kind ttm
  series_show AAPL --metric earnings --facts-file CIK0000320193.json
  series_pull --tickers tickers.csv --out out/ --metric revenue --metric earnings
  ticker_list --user-agent "Proj/1.0 a@b.com"
"""

from __future__ import annotations

import csv
import json
import sys
from pathlib import Path

import click

from series_engine.config import EngineConfig
from series_engine.data.outputs import series_records, write_tables
from series_engine.exceptions import SeriesEngineError
from series_engine.series.concepts import METRICS
from series_engine.series.pipeline import run_pipeline
from series_engine.service import open_service
from series_engine.types import SeriesKind
from series_engine.utils.io import read_json
from series_engine.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

_METRIC_CHOICE = click.Choice(sorted(METRICS), case_sensitive=False)


def _build_config(user_agent: str | None, cache_dir: Path | None, log_level: str) -> EngineConfig:
    overrides: dict[str, object] = {"log_level": log_level}
    if user_agent:
        overrides["user_agent"] = user_agent
    if cache_dir is not None:
        overrides["cache_dir"] = cache_dir
    try:
        return EngineConfig(**overrides)  # type: ignore[arg-type]
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--user-agent")


# ── series_show ───────────────────────────────────────────────────────────────

@click.command("series_show")
@click.argument("ticker")
@click.option("--metric", default="revenue", type=_METRIC_CHOICE, show_default=True)
@click.option(
    "--kind",
    default="quarterly",
    type=click.Choice([k.value for k in SeriesKind]),
    show_default=True,
    help="Quarterly series or trailing-twelve-month sums.",
)
@click.option(
    "--facts-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read a saved companyfacts JSON instead of calling SEC.",
)
@click.option("--user-agent", envvar="SEC_USER_AGENT", default=None,
              help='SEC User-Agent header. Format: "Name/1.0 email@example.com"')
@click.option("--cache-dir", type=click.Path(path_type=Path), default=None)
@click.option("--log-level", default="WARNING", show_default=True)
def series_show(
    ticker: str,
    metric: str,
    kind: str,
    facts_file: Path | None,
    user_agent: str | None,
    cache_dir: Path | None,
    log_level: str,
) -> None:
    """Print one metric series for TICKER as client-shaped JSON."""
    configure_logging(log_level)
    series_kind = SeriesKind(kind)

    try:
        if facts_file is not None:
            series = run_pipeline(read_json(facts_file), metric, ticker=ticker.upper())
        else:
            config = _build_config(user_agent, cache_dir, log_level)
            with open_service(config) as service:
                series = service.series(ticker, metric)
    except SeriesEngineError as exc:
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(series_records(series, series_kind), indent=2))


# ── series_pull ───────────────────────────────────────────────────────────────

@click.command("series_pull")
@click.option(
    "--tickers",
    required=True,
    type=click.Path(exists=True, path_type=Path),
    help="Path to a CSV file with a 'ticker' column.",
)
@click.option(
    "--out",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory. Defaults to OUTPUT_DIR from the environment.",
)
@click.option(
    "--metric",
    "metrics",
    multiple=True,
    type=_METRIC_CHOICE,
    help="Metric to export (repeatable). Defaults to all metrics.",
)
@click.option("--user-agent", envvar="SEC_USER_AGENT", default=None,
              help='SEC User-Agent header. Format: "Name/1.0 email@example.com"')
@click.option("--cache-dir", type=click.Path(path_type=Path), default=None)
@click.option(
    "--fmt",
    default="parquet",
    type=click.Choice(["parquet", "csv"]),
    show_default=True,
    help="Output file format.",
)
@click.option("--log-level", default="INFO", show_default=True)
def series_pull(
    tickers: Path,
    out: Path | None,
    metrics: tuple[str, ...],
    user_agent: str | None,
    cache_dir: Path | None,
    fmt: str,
    log_level: str,
) -> None:
    """Export quarterly and TTM series tables for a list of tickers."""
    configure_logging(log_level)

    ticker_list = _load_tickers(tickers)
    if not ticker_list:
        click.echo("ERROR: No tickers found in the provided CSV.", err=True)
        sys.exit(1)

    selected = list(metrics) or sorted(METRICS)
    click.echo(f"series_pull: {len(ticker_list)} tickers | metrics={','.join(selected)} | fmt={fmt}")

    config = _build_config(user_agent, cache_dir, log_level)
    out = out or config.output_dir
    try:
        with open_service(config) as service:
            result = service.pull(ticker_list, selected)
        paths = write_tables(result, out, fmt=fmt, validate=True)
    except SeriesEngineError as exc:
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(f"\nTables written to: {out}/")
    for table, path in paths.items():
        click.echo(f"  {table}: {path.name}")

    if result.failed:
        click.echo(f"\nFailed: {', '.join(sorted(result.failed)[:10])}")
    if result.empty:
        click.echo(f"No data: {', '.join(f'{t}({m})' for t, ms in result.empty.items() for m in ms)}")


# ── ticker_list ───────────────────────────────────────────────────────────────

@click.command("ticker_list")
@click.option("--user-agent", envvar="SEC_USER_AGENT", default=None)
@click.option("--cache-dir", type=click.Path(path_type=Path), default=None)
@click.option("--log-level", default="WARNING", show_default=True)
def ticker_list(user_agent: str | None, cache_dir: Path | None, log_level: str) -> None:
    """Print all SEC tickers with company name and CIK as JSON."""
    configure_logging(log_level)
    config = _build_config(user_agent, cache_dir, log_level)
    try:
        with open_service(config) as service:
            entries = service.tickers()
    except SeriesEngineError as exc:
        click.echo(f"ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps([{"ticker": e.ticker, "name": e.name, "cik": e.cik} for e in entries]))


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_tickers(csv_path: Path) -> list[str]:
    """Load ticker symbols from a CSV file with a 'ticker' column."""
    tickers: list[str] = []
    with csv_path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        if reader.fieldnames is None:
            return []
        col = next(
            (c for c in reader.fieldnames if c.lower() == "ticker"),
            reader.fieldnames[0],
        )
        for row in reader:
            val = (row.get(col) or "").strip().upper()
            if val:
                tickers.append(val)
    return tickers


if __name__ == "__main__":
    series_show()
