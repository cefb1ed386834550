# src/joblens/io/pdf_export.py
"""
Tabular PDF export of the filtered+sorted jobs (landscape A4).

Layout:
- title, then an "Applied Filters" block (one bullet per active filter)
- one table row per job; headings repeat on every page
- footer on every page: generation time, total results, "Page i of N"

Uses fpdf2's built-in Helvetica, which only covers latin-1, so text is
squeezed into latin-1 before it's written.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.fonts import FontFace

from joblens.formatting import format_salary_full
from joblens.io.csv_export import ExportFile
from joblens.io.gate import ExportGate
from joblens.models import FilterSpec, Job
from joblens.pipeline.filter import active_filter_labels

TABLE_HEADINGS = ("Title", "Company", "Location", "Salary Range", "Type", "Category", "Remote", "Openings")
COLUMN_WIDTHS = (45, 35, 30, 40, 25, 30, 18, 18)  # mm, scaled to the page width by fpdf

DARK = (15, 23, 42)
MUTED = (71, 85, 105)
FAINT = (148, 163, 184)
ACCENT = (16, 185, 129)
STRIPE = (248, 250, 252)


def _latin1(text) -> str:
    return str(text).encode("latin-1", "replace").decode("latin-1")


def pdf_filename(generated_at: datetime) -> str:
    return f"job-results-{int(generated_at.timestamp() * 1000)}.pdf"


def filter_lines(spec: FilterSpec) -> List[str]:
    """Lines of the header block under the title."""
    labels = active_filter_labels(spec)
    if not labels:
        return ["No active filters applied."]
    return ["Applied Filters:"] + [f"- {label}" for label in labels]


def table_row(job: Job) -> List[str]:
    salary = f"{format_salary_full(job.get('salary_from') or 0)} - {format_salary_full(job.get('salary_to') or 0)}"
    return [
        job.get("title") or "",
        job.get("company") or "",
        job.get("location") or "",
        salary,
        job.get("employment_type") or "",
        job.get("job_category") or "",
        "Yes" if job.get("is_remote_work") == 1 else "No",
        str(job.get("openings") or 1),
    ]


class JobsDocument(FPDF):
    def __init__(self, generated_at: datetime, total: int):
        super().__init__(orientation="landscape", unit="mm", format="A4")
        self.generated_at = generated_at
        self.total = total
        self.set_auto_page_break(auto=True, margin=15)
        self.set_margins(14, 14, 14)

    def footer(self) -> None:
        self.set_y(-12)
        self.set_font("helvetica", size=8)
        self.set_text_color(*FAINT)
        stamp = self.generated_at.strftime("%Y-%m-%d %H:%M:%S")
        # {nb} is replaced by the final page count when the document is closed
        self.cell(0, 5, f"Generated: {stamp}  |  Total Results: {self.total}  |  Page {self.page_no()} of {{nb}}")
        self.set_x(self.l_margin)
        self.cell(0, 5, "JobLens", align="R")


def render_pdf(jobs: Sequence[Job], spec: FilterSpec, *, generated_at: Optional[datetime] = None) -> bytes:
    generated_at = generated_at or datetime.now().astimezone()
    doc = JobsDocument(generated_at, len(jobs))
    doc.add_page()

    doc.set_font("helvetica", style="B", size=20)
    doc.set_text_color(*DARK)
    doc.cell(0, 10, "Filtered Job Results", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    doc.set_font("helvetica", size=10)
    for i, line in enumerate(filter_lines(spec)):
        heading = i == 0 and line.endswith(":")
        doc.set_font("helvetica", style="B" if heading else "", size=10)
        doc.set_text_color(*(DARK if heading else MUTED))
        doc.set_x(doc.l_margin + (0 if i == 0 else 4))
        doc.cell(0, 5, _latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    doc.ln(4)

    doc.set_font("helvetica", size=8)
    doc.set_text_color(*DARK)
    headings = FontFace(emphasis="BOLD", color=(255, 255, 255), fill_color=ACCENT)
    with doc.table(
        col_widths=COLUMN_WIDTHS,
        headings_style=headings,
        cell_fill_color=STRIPE,
        cell_fill_mode="ROWS",
        text_align="LEFT",
        line_height=5,
    ) as table:
        header = table.row()
        for title in TABLE_HEADINGS:
            header.cell(title)
        for job in jobs:
            row = table.row()
            for value in table_row(job):
                row.cell(_latin1(value))

    return bytes(doc.output())


def export_pdf(
    jobs: Sequence[Job],
    spec: FilterSpec,
    *,
    gate: Optional[ExportGate] = None,
    generated_at: Optional[datetime] = None,
) -> ExportFile:
    """Build the PDF in memory under the export gate. Saving it is up to the caller."""
    gate = gate or ExportGate()
    generated_at = generated_at or datetime.now().astimezone()
    with gate.hold("pdf"):
        content = render_pdf(jobs, spec, generated_at=generated_at)
    return ExportFile(pdf_filename(generated_at), content, "application/pdf")
