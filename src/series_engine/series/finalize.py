"""
finalize.py – Final quarterly series and trailing-twelve-month sums.
"""

from __future__ import annotations

from typing import Sequence

from series_engine.constants import MAX_QUARTERS, MAX_TTM_POINTS, TTM_WINDOW
from series_engine.types import PeriodPoint


def finalize(
    direct: Sequence[PeriodPoint],
    calculated: Sequence[PeriodPoint],
    limit: int = MAX_QUARTERS,
) -> list[PeriodPoint]:
    """
    Merge direct and derived quarters into one series.

    Direct points come first in the concatenation so that, on a shared
    period, the stable sort keeps the direct value.

    Returns
    -------
    list[PeriodPoint] most recent first, unique periods, at most ``limit``.
    """
    combined = sorted([*direct, *calculated], key=lambda p: p.period, reverse=True)

    series: list[PeriodPoint] = []
    seen: set[str] = set()
    for point in combined:
        if point.period in seen:
            continue
        seen.add(point.period)
        series.append(point)
    return series[:limit]


def compute_ttm(
    quarterly: Sequence[PeriodPoint],
    limit: int = MAX_TTM_POINTS,
) -> list[PeriodPoint]:
    """
    Rolling four-quarter sums over a most-recent-first quarterly series.

    Each window ``quarterly[i-3 .. i]`` is labeled with ``quarterly[i-3]``,
    the newest quarter it contains, so the first TTM point carries the
    latest quarter's period.

    Returns
    -------
    list[PeriodPoint], empty when fewer than four quarters exist.
    """
    if len(quarterly) < TTM_WINDOW:
        return []

    ttm: list[PeriodPoint] = []
    for i in range(TTM_WINDOW - 1, len(quarterly)):
        window = quarterly[i - (TTM_WINDOW - 1): i + 1]
        ttm.append(
            PeriodPoint(
                period=quarterly[i - (TTM_WINDOW - 1)].period,
                value=sum(p.value for p in window),
            )
        )
    return ttm[:limit]
