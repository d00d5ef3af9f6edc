"""
Series Engine
=============
Quarterly and trailing-twelve-month financial series from SEC EDGAR
XBRL company facts.
"""

from series_engine.config import EngineConfig
from series_engine.exceptions import (
    CIKLookupError,
    FactsFetchError,
    SchemaValidationError,
    SeriesEngineError,
    UnknownMetricError,
)
from series_engine.series.pipeline import extract_quarterly, extract_ttm, run_pipeline
from series_engine.types import MetricSeries, PeriodPoint

__version__ = "0.1.0"
__all__ = [
    "EngineConfig",
    "CIKLookupError",
    "FactsFetchError",
    "SchemaValidationError",
    "SeriesEngineError",
    "UnknownMetricError",
    "MetricSeries",
    "PeriodPoint",
    "extract_quarterly",
    "extract_ttm",
    "run_pipeline",
]
