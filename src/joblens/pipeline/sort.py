# src/joblens/pipeline/sort.py
"""
Sort engine. Python's sort is stable (also with reverse=True), so jobs with
equal keys keep their input order; there is never a secondary key.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Tuple

from joblens.models import Job
from joblens.pipeline.normalize import parse_timestamp

# Unparseable dates sort as the oldest possible instant
_EPOCH_FLOOR = datetime.min.replace(tzinfo=timezone.utc)


def _posted_at(job: Job) -> datetime:
    raw = job.get("created_at") or job.get("application_deadline")
    return parse_timestamp(raw) or _EPOCH_FLOOR


def _openings(job: Job) -> int:
    return job.get("openings") or 1


# key -> (sort key function, descending?)
_ORDERS: Dict[str, Tuple[Callable[[Job], object], bool]] = {
    "newest": (_posted_at, True),
    "oldest": (_posted_at, False),
    "salary_high": (lambda j: j.get("salary_to") or 0, True),
    "salary_low": (lambda j: j.get("salary_from") or 0, False),
    "most_openings": (_openings, True),
}


def apply_sort(jobs: Iterable[Job], sort: str) -> List[Job]:
    """Return a new, sorted list; the input is left untouched."""
    try:
        key, descending = _ORDERS[sort]
    except KeyError:
        raise ValueError(f"Unknown sort option: {sort!r}") from None
    return sorted(jobs, key=key, reverse=descending)
