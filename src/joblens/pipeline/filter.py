# src/joblens/pipeline/filter.py
"""
Filter engine: keep the jobs that satisfy every active predicate (AND).

Inactive predicates always pass. Output keeps the input's relative order and
depends only on (jobs, spec, now), so calling it twice is harmless.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from joblens.formatting import format_salary_full
from joblens.models import SALARY_CEILING, FilterSpec, Job
from joblens.pipeline.normalize import parse_timestamp


def _matches_search(job: Job, query: str) -> bool:
    query = query.lower()
    return any(
        query in (job.get(key) or "").lower()
        for key in ("title", "company", "description")
    )


def _within_salary(job: Job, spec: FilterSpec) -> bool:
    # Containment, not overlap: the job's whole range must sit inside the bounds.
    # A missing bound never disqualifies the job.
    low, high = job.get("salary_from"), job.get("salary_to")
    if low is not None and low < spec.salary_min:
        return False
    if high is not None and high > spec.salary_max:
        return False
    return True


def _created_after(job: Job, cutoff: datetime) -> bool:
    created = parse_timestamp(job.get("created_at"))
    if created is None:
        return True  # unparseable or missing: don't disqualify
    return created > cutoff


def job_matches(job: Job, spec: FilterSpec, *, now: datetime) -> bool:
    if spec.search and not _matches_search(job, spec.search):
        return False
    if spec.location and job.get("location") != spec.location:
        return False
    if spec.employment_types and job.get("employment_type") not in spec.employment_types:
        return False
    if spec.job_category and job.get("job_category") != spec.job_category:
        return False
    if spec.remote_only and job.get("is_remote_work") != 1:
        return False
    if not _within_salary(job, spec):
        return False
    if spec.min_openings > 0 and (job.get("openings") or 1) < spec.min_openings:
        return False
    if spec.created_within is not None:
        cutoff = now - timedelta(days=spec.created_within)
        if not _created_after(job, cutoff):
            return False
    return True


def apply_filters(jobs: Iterable[Job], spec: FilterSpec, *, now: Optional[datetime] = None) -> List[Job]:
    """
    Keep only jobs passing `spec`. `now` anchors the created-within window
    (defaults to the current UTC time).
    """
    now = now or datetime.now(timezone.utc)
    out: List[Job] = []
    for j in jobs:
        if job_matches(j, spec, now=now):
            out.append(j)
    return out


# ---- Describing a spec ----------------------------------------------------------

def salary_filter_active(spec: FilterSpec) -> bool:
    return spec.salary_min > 0 or spec.salary_max < SALARY_CEILING


def active_filter_count(spec: FilterSpec) -> int:
    return len(active_filter_labels(spec))


def active_filter_labels(spec: FilterSpec) -> List[str]:
    """
    One human-readable line per active filter, e.g.
      ['Search: "python"', 'Remote Only: Yes', 'Salary: $50,000 - $120,000']
    Used for the PDF header and the CLI summary.
    """
    labels: List[str] = []
    if spec.search:
        labels.append(f'Search: "{spec.search}"')
    if spec.location:
        labels.append(f"Location: {spec.location}")
    if spec.employment_types:
        labels.append(f"Employment Types: {', '.join(sorted(spec.employment_types))}")
    if spec.job_category:
        labels.append(f"Category: {spec.job_category}")
    if spec.remote_only:
        labels.append("Remote Only: Yes")
    if salary_filter_active(spec):
        labels.append(f"Salary: {format_salary_full(spec.salary_min)} - {format_salary_full(spec.salary_max)}")
    if spec.min_openings > 0:
        labels.append(f"Min Openings: {spec.min_openings}")
    if spec.created_within is not None:
        labels.append(f"Created Within: {spec.created_within} days")
    return labels
