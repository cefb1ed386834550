# src/joblens/io/csv_export.py
"""
Delimited-text export of the filtered+sorted jobs.

Text fields are wrapped in double quotes but embedded quotes are NOT escaped,
so a title containing `"` yields a malformed row. This is a known limitation
kept for output compatibility; do not swap in the csv module here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from joblens.io.gate import ExportGate
from joblens.models import Job

CSV_HEADERS: List[str] = [
    "Title",
    "Company",
    "Location",
    "Salary From",
    "Salary To",
    "Employment Type",
    "Job Category",
    "Remote",
    "Openings",
    "Created At",
]


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    media_type: str


def _quoted(value) -> str:
    return f'"{"" if value is None else value}"'


def _plain(value) -> str:
    return "" if value is None else str(value)


def csv_row(job: Job) -> List[str]:
    return [
        _quoted(job.get("title")),
        _quoted(job.get("company")),
        _quoted(job.get("location")),
        _plain(job.get("salary_from")),
        _plain(job.get("salary_to")),
        _quoted(job.get("employment_type")),
        _quoted(job.get("job_category")),
        "Yes" if job.get("is_remote_work") == 1 else "No",
        str(job.get("openings") or 1),
        job.get("created_at") or "",
    ]


def to_csv(jobs: Iterable[Job]) -> str:
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(csv_row(j)) for j in jobs)
    return "\n".join(lines)


def export_csv(jobs: Iterable[Job], basename: str = "filtered-jobs", *, gate: Optional[ExportGate] = None) -> ExportFile:
    """Build `<basename>.csv` in memory. Saving it is up to the caller."""
    gate = gate or ExportGate()
    with gate.hold("csv"):
        content = to_csv(jobs).encode("utf-8")
    return ExportFile(f"{basename}.csv", content, "text/csv;charset=utf-8")
