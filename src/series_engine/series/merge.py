"""
merge.py – Pools a metric's facts across all of its alternative concepts.

Nothing is deduplicated here. The same quarter reported under two concepts
(or in two filings) lands in the pool twice; the deduplicator resolves it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from series_engine.constants import DEFAULT_NAMESPACE, DEFAULT_UNIT
from series_engine.series.classify import classify
from series_engine.types import ConceptPools, DurationClass, RawFactItem

logger = logging.getLogger(__name__)


def _facts_root(facts: Mapping[str, Any]) -> Mapping[str, Any]:
    """Accept either the whole companyfacts document or its ``facts`` mapping."""
    inner = facts.get("facts")
    if isinstance(inner, Mapping):
        return inner
    return facts


def parse_fact_item(entry: Mapping[str, Any], concept: str = "") -> RawFactItem | None:
    """
    Build a RawFactItem from one companyfacts unit entry.

    Returns None for entries that are not mappings or whose ``val`` is not
    numeric. Integral values stay ``int`` so they serialize without a
    trailing '.0'. Missing dates are kept as None; classification rejects them.
    """
    if not isinstance(entry, Mapping):
        return None

    val_raw = entry.get("val")
    value: float | None
    if val_raw is None:
        value = None
    elif isinstance(val_raw, int) and not isinstance(val_raw, bool):
        value = val_raw
    else:
        try:
            value = float(val_raw)
        except (TypeError, ValueError):
            logger.debug("Skipping non-numeric fact concept=%s val=%r", concept, val_raw)
            return None
        if value.is_integer():
            value = int(value)

    start = entry.get("start")
    end = entry.get("end")
    frame = entry.get("frame")
    return RawFactItem(
        value=value,
        start=str(start) if start else None,
        end=str(end) if end else None,
        filed=str(entry.get("filed") or ""),
        form=str(entry.get("form") or ""),
        frame=str(frame) if frame else None,
        concept=concept,
    )


def merge_concepts(
    facts: Mapping[str, Any],
    concepts: Iterable[str],
    unit: str = DEFAULT_UNIT,
    reject_non_positive: bool = False,
    namespace: str = DEFAULT_NAMESPACE,
) -> ConceptPools:
    """
    Collect and classify every item filed under any of ``concepts``.

    Parameters
    ----------
    facts:
        Raw companyfacts document (or its ``facts`` mapping).
    concepts:
        Concept names in priority order. Absent concepts are skipped.
    unit:
        Unit key to read under each concept (e.g. 'USD').
    reject_non_positive:
        Passed through to the classifier (revenue semantics).
    namespace:
        Taxonomy namespace holding the concepts.

    Returns
    -------
    ConceptPools; both pools empty when no concept yields data.
    """
    pools = ConceptPools()
    ns_data = _facts_root(facts).get(namespace) or {}

    for concept in concepts:
        concept_data = ns_data.get(concept)
        if not concept_data:
            continue
        entries = (concept_data.get("units") or {}).get(unit)
        if not entries:
            continue

        for entry in entries:
            item = parse_fact_item(entry, concept)
            if item is None:
                continue
            duration = classify(item, reject_non_positive=reject_non_positive)
            if duration is DurationClass.QUARTERLY:
                pools.quarterly.append(item)
            elif duration is DurationClass.CUMULATIVE:
                pools.cumulative.append(item)

    logger.debug(
        "Merged %s: %d quarterly, %d cumulative items",
        namespace, len(pools.quarterly), len(pools.cumulative),
    )
    return pools
