"""
exceptions.py – Custom exception hierarchy for the series engine.

The normalization core never raises for data problems (it degrades to an
empty series). These exceptions belong to the edges: fetching, lookup,
metric selection, and table export.
"""

from __future__ import annotations


class SeriesEngineError(Exception):
    """Base exception for the series engine. All engine errors inherit from this."""


class CIKLookupError(SeriesEngineError):
    """
    Raised when a ticker cannot be resolved to a CIK number.

    Attributes
    ----------
    ticker:
        The ticker that was looked up.
    """

    def __init__(self, ticker: str) -> None:
        self.ticker = ticker
        super().__init__(f"CIK resolution failed for ticker='{ticker}'")


class FactsFetchError(SeriesEngineError):
    """
    Raised when company facts cannot be fetched from SEC EDGAR.

    Attributes
    ----------
    ticker:
        The ticker (or CIK) whose facts were requested.
    detail:
        Additional diagnostic information.
    """

    def __init__(self, ticker: str, detail: str) -> None:
        self.ticker = ticker
        self.detail = detail
        super().__init__(f"Failed to fetch company facts for ticker='{ticker}': {detail}")


class RateLimitError(SeriesEngineError):
    """Raised when SEC rate limit is exceeded and retries are exhausted."""


class UnknownMetricError(SeriesEngineError):
    """
    Raised when a metric name has no concept table.

    Attributes
    ----------
    metric:
        The metric name that was requested.
    """

    def __init__(self, metric: str) -> None:
        self.metric = metric
        super().__init__(f"Unknown metric '{metric}'")


class SchemaValidationError(SeriesEngineError):
    """
    Raised when an exported series table breaks its invariants.

    Attributes
    ----------
    table_name:
        Name of the table that failed validation.
    violations:
        List of human-readable violation descriptions.
    """

    def __init__(self, table_name: str, violations: list[str]) -> None:
        self.table_name = table_name
        self.violations = violations
        joined = "; ".join(violations)
        super().__init__(f"Schema validation failed for table='{table_name}': {joined}")
