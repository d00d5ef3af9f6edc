"""
dedupe.py – One value per quarter from the quarterly-duration pool.

Issuers restate. The same quarter shows up in the original 10-Q, as a
comparative column in next year's filing, and sometimes in a 10-Q/A. For
each period end the winner is:

  1. an amended filing (form contains '/A') over an original;
  2. otherwise the most recently filed.

Only quarter-framed facts (frame matching ``Q[1-4]``) take part: a 90-day
span without a quarter frame is usually a cumulative figure mis-tagged or a
non-calendar-aligned duplicate.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from series_engine.constants import AMENDMENT_MARKER
from series_engine.types import PeriodPoint, RawFactItem

logger = logging.getLogger(__name__)

_QUARTER_FRAME = re.compile(r"Q[1-4]")


def is_quarter_framed(item: RawFactItem) -> bool:
    """True if the fact carries a frame such as 'CY2023Q2'."""
    return bool(item.frame) and _QUARTER_FRAME.search(item.frame) is not None


def is_amended(item: RawFactItem) -> bool:
    return AMENDMENT_MARKER in (item.form or "")


def rank_candidates(items: Iterable[RawFactItem]) -> list[RawFactItem]:
    """
    Order candidates: end descending, amended first, latest filed first.

    Applied as successive stable sorts, least significant key first, so
    items tied on every key keep their pool order.
    """
    ranked = sorted(items, key=lambda i: i.filed or "", reverse=True)
    ranked.sort(key=lambda i: not is_amended(i))
    ranked.sort(key=lambda i: i.end or "", reverse=True)
    return ranked


def dedupe_quarterly(pool: Iterable[RawFactItem]) -> list[PeriodPoint]:
    """
    Select exactly one value per reporting end date.

    Parameters
    ----------
    pool:
        Quarterly-duration items from the concept merger.

    Returns
    -------
    list[PeriodPoint] sorted by period descending, unique periods.
    """
    framed = [i for i in pool if i.end and is_quarter_framed(i)]

    points: list[PeriodPoint] = []
    seen: set[str] = set()
    for item in rank_candidates(framed):
        if item.end in seen:
            continue
        seen.add(item.end)
        points.append(PeriodPoint(period=item.end, value=item.value))

    logger.debug("Deduplicated %d framed quarterly items into %d periods", len(framed), len(points))
    return points
