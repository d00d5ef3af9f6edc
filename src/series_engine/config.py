"""
config.py – Central configuration using environment variables and/or explicit overrides.
All settings are immutable after construction (frozen dataclass).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from series_engine.constants import (
    CIK_TTL_SECONDS,
    FACTS_TTL_SECONDS,
    MAX_QUARTERS,
    MAX_TTM_POINTS,
)

load_dotenv()


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable engine configuration.

    Parameters
    ----------
    user_agent:
        HTTP header value required by SEC EDGAR. Format: "Name/Version email".
    cache_dir:
        Directory for the raw company-facts and ticker caches.
    output_dir:
        Default output directory for exported series tables.
    sec_rate_limit_rps:
        Maximum requests per second to SEC EDGAR (default 8, max 10).
    facts_ttl_seconds:
        Lifetime of a cached company-facts document.
    cik_ttl_seconds:
        Lifetime of cached ticker→CIK resolutions and the ticker list.
    max_quarters:
        Retention window of a quarterly series.
    max_ttm:
        Retention window of a TTM series.
    log_level:
        Python logging level string.
    """

    user_agent: str = field(
        default_factory=lambda: os.getenv("SEC_USER_AGENT", "SeriesEngine/1.0 researcher@example.com")
    )
    cache_dir: Path = field(
        default_factory=lambda: Path(os.getenv("CACHE_DIR", ".cache"))
    )
    output_dir: Path = field(
        default_factory=lambda: Path(os.getenv("OUTPUT_DIR", "out"))
    )
    sec_rate_limit_rps: float = field(
        default_factory=lambda: float(os.getenv("SEC_RATE_LIMIT_RPS", "8"))
    )
    facts_ttl_seconds: int = field(
        default_factory=lambda: int(os.getenv("FACTS_TTL_SECONDS", str(FACTS_TTL_SECONDS)))
    )
    cik_ttl_seconds: int = field(
        default_factory=lambda: int(os.getenv("CIK_TTL_SECONDS", str(CIK_TTL_SECONDS)))
    )
    max_quarters: int = MAX_QUARTERS
    max_ttm: int = MAX_TTM_POINTS
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO")
    )

    def __post_init__(self) -> None:
        if not self.user_agent or " " not in self.user_agent:
            raise ValueError(
                "SEC_USER_AGENT must be set and follow format: 'Name/Version email'"
            )
        if self.sec_rate_limit_rps > 10:
            raise ValueError("SEC rate limit cannot exceed 10 RPS (SEC policy).")
        if self.facts_ttl_seconds <= 0 or self.cik_ttl_seconds <= 0:
            raise ValueError("Cache TTLs must be positive.")
        if self.max_quarters < 1 or self.max_ttm < 0:
            raise ValueError("Retention windows must be non-negative (max_quarters >= 1).")
        if self.max_quarters > MAX_QUARTERS or self.max_ttm > MAX_TTM_POINTS:
            raise ValueError(
                f"Retention windows are capped at {MAX_QUARTERS} quarters and "
                f"{MAX_TTM_POINTS} TTM points."
            )

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Construct config entirely from environment variables."""
        return cls(
            max_quarters=int(os.getenv("MAX_QUARTERS", str(MAX_QUARTERS))),
            max_ttm=int(os.getenv("MAX_TTM", str(MAX_TTM_POINTS))),
        )
