# src/joblens/pipeline/facets.py
"""
Option sets for the exact-match filters, derived from the data itself
(employment types and categories are open-ended labels, not enums).
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from rapidfuzz import fuzz, process

from joblens.models import Job


def unique_values(jobs: Iterable[Job], key: str) -> List[str]:
    """Sorted distinct non-empty values of `key`, stringified."""
    values = {str(j.get(key)) for j in jobs if j.get(key) not in (None, "")}
    return sorted(values)


def closest_value(value: str, choices: List[str], score_cutoff: int = 80) -> Optional[str]:
    """
    Best fuzzy match for `value` among `choices`, or None.
    Used to say "did you mean ...?" when an exact-match filter matches nothing.
    """
    if not value or not choices:
        return None
    best = process.extractOne(value, choices, scorer=fuzz.WRatio, score_cutoff=score_cutoff)
    if not best:
        return None
    matched, _score, _idx = best
    return matched
