# src/joblens/cli.py
"""
Command-line interface for joblens.

Commands:
- fetch: pull every page from the listings API and report counts
- search: filter/sort the jobs and print one page (or an infinite-scroll window)
- facets: list the observed locations, employment types and categories
- export-csv / export-pdf: write the full filtered+sorted set to a file
"""

from dotenv import load_dotenv
load_dotenv(override=True)  # picks up a .env in the working directory

from pathlib import Path
from typing import Annotated, List, Optional

import pandas as pd
import typer
from pydantic import ValidationError

from joblens.config import configure_logging, get_settings
from joblens.errors import ExportInProgressError, NetworkError
from joblens.formatting import contact_kind, format_number, format_salary
from joblens.io.csv_export import ExportFile, export_csv
from joblens.io.gate import ExportGate
from joblens.io.pdf_export import export_pdf
from joblens.models import SALARY_CEILING, SORT_OPTIONS, FilterSpec, Job
from joblens.pipeline.cache import JobsCache, fetch_all_jobs
from joblens.pipeline.facets import closest_value, unique_values
from joblens.pipeline.filter import active_filter_labels
from joblens.pipeline.normalize import parse_qualifications
from joblens.pipeline.query import Explorer, process
from joblens.pipeline.window import page_links

app = typer.Typer(help="Explore, filter and export job listings")

# One cache and one export gate per process
_cache: Optional[JobsCache] = None
_gate = ExportGate()


def get_cache() -> JobsCache:
    global _cache
    if _cache is None:
        settings = get_settings()
        _cache = JobsCache(lambda: fetch_all_jobs(settings), ttl=settings.cache_ttl_seconds)
    return _cache


def _load_jobs() -> List[Job]:
    try:
        return get_cache().get_all()
    except NetworkError as e:
        typer.echo(f"Failed to load jobs: {e}", err=True)
        typer.echo("Run the command again to retry.", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main():
    try:
        settings = get_settings()
    except ValidationError as e:
        typer.echo(f"Invalid configuration:\n{e}", err=True)
        raise typer.Exit(code=1)
    configure_logging(settings.log_level)


# ---- shared filter options ------------------------------------------------------

SearchOpt = Annotated[str, typer.Option("--search", "-q", help="Text to find in title, company or description")]
LocationOpt = Annotated[str, typer.Option("--location", help="Exact location")]
TypeOpt = Annotated[Optional[List[str]], typer.Option("--type", help="Employment type (repeatable)")]
CategoryOpt = Annotated[str, typer.Option("--category", help="Exact job category")]
RemoteOpt = Annotated[bool, typer.Option("--remote", help="Remote jobs only")]
SalaryMinOpt = Annotated[int, typer.Option("--salary-min", min=0)]
SalaryMaxOpt = Annotated[int, typer.Option("--salary-max", min=0)]
OpeningsOpt = Annotated[int, typer.Option("--min-openings", min=0)]
CreatedOpt = Annotated[Optional[int], typer.Option("--created-within", min=1, help="Days, e.g. 7 or 30")]
SortOpt = Annotated[str, typer.Option("--sort", help=f"One of: {', '.join(SORT_OPTIONS)}")]


def _build_filters(search, location, types, category, remote, salary_min, salary_max, min_openings, created_within) -> FilterSpec:
    return FilterSpec(
        search=search,
        location=location,
        employment_types=frozenset(types or ()),
        job_category=category,
        remote_only=remote,
        salary_min=salary_min,
        salary_max=salary_max,
        min_openings=min_openings,
        created_within=created_within,
    )


def _check_sort(sort: str) -> None:
    if sort not in SORT_OPTIONS:
        raise typer.BadParameter(f"choose from {', '.join(SORT_OPTIONS)}", param_hint="--sort")


def _suggest(jobs: List[Job], spec: FilterSpec) -> None:
    """Hint at the closest observed value when an exact-match filter has no match."""
    for label, key, value in (("location", "location", spec.location), ("category", "job_category", spec.job_category)):
        if not value:
            continue
        choices = unique_values(jobs, key)
        if value in choices:
            continue
        guess = closest_value(value, choices)
        if guess:
            typer.echo(f"No {label} named {value!r}. Did you mean {guess!r}?", err=True)


def _table(jobs: List[Job]) -> str:
    df = pd.DataFrame([
        {
            "Title": j.get("title", ""),
            "Company": j.get("company", ""),
            "Location": j.get("location", ""),
            "Salary": f"{format_salary(j.get('salary_from') or 0)} - {format_salary(j.get('salary_to') or 0)}",
            "Type": j.get("employment_type", ""),
            "Remote": "Yes" if j.get("is_remote_work") == 1 else "No",
            "Openings": j.get("openings") or 1,
        }
        for j in jobs
    ])
    return df.to_string(index=False)


def _details(jobs: List[Job]) -> str:
    lines = []
    for j in jobs:
        quals = j.get("parsed_qualifications") or parse_qualifications(j.get("qualifications"))
        contact = j.get("contact") or ""
        lines.append(f"{j.get('title', '')} @ {j.get('company', '')}")
        if contact:
            lines.append(f"  Contact ({contact_kind(contact)}): {contact}")
        for item in quals.items:
            lines.append(f"  - {item}")
    return "\n".join(lines)


def _write(export: ExportFile, out: Path) -> Path:
    out.mkdir(parents=True, exist_ok=True)
    path = out / export.filename
    path.write_bytes(export.content)
    return path


# ---- commands -------------------------------------------------------------------

@app.command()
def fetch():
    """Fetch every page of the listings API and report what came back."""
    jobs = _load_jobs()
    remote = sum(1 for j in jobs if j.get("is_remote_work") == 1)
    typer.echo(f"Loaded {format_number(len(jobs))} jobs ({remote} remote).")


@app.command()
def facets():
    """List the values the exact-match filters accept."""
    jobs = _load_jobs()
    for title, key in (("Locations", "location"), ("Employment types", "employment_type"), ("Categories", "job_category")):
        values = unique_values(jobs, key)
        typer.echo(f"{title} ({len(values)}):")
        for v in values:
            typer.echo(f"  {v}")


@app.command()
def search(
    search: SearchOpt = "",
    location: LocationOpt = "",
    types: TypeOpt = None,
    category: CategoryOpt = "",
    remote: RemoteOpt = False,
    salary_min: SalaryMinOpt = 0,
    salary_max: SalaryMaxOpt = SALARY_CEILING,
    min_openings: OpeningsOpt = 0,
    created_within: CreatedOpt = None,
    sort: SortOpt = "newest",
    page: Annotated[int, typer.Option("--page", min=1)] = 1,
    infinite: Annotated[Optional[int], typer.Option("--infinite", min=0, help="Infinite-scroll mode: number of extra batches to load")] = None,
    details: Annotated[bool, typer.Option("--details", help="Also print contact and qualifications per job")] = False,
):
    """
    Filter and sort the jobs, then print one page.
    With --infinite N, print the infinite-scroll window after N extra batches.
    """
    _check_sort(sort)
    settings = get_settings()
    jobs = _load_jobs()
    spec = _build_filters(search, location, types, category, remote, salary_min, salary_max, min_openings, created_within)

    explorer = Explorer(jobs, page_size=settings.page_size, batch=settings.infinite_batch)
    explorer.set_filters(spec)
    explorer.set_sort(sort)
    if infinite is not None:
        explorer.set_view_mode("infinite")
        for _ in range(infinite):
            if not explorer.load_more():
                break
    else:
        explorer.go_to_page(page)
    result = explorer.view()

    labels = active_filter_labels(spec)
    typer.echo(f"Active filters ({len(labels)}): {'; '.join(labels) or 'none'}")

    if not result.total:
        _suggest(jobs, spec)
        typer.echo("No jobs match these filters.")
        return

    typer.echo(_table(result.visible))
    if details:
        typer.echo("")
        typer.echo(_details(result.visible))
    typer.echo("")
    if infinite is not None:
        more = "more available" if result.has_more else "end of results"
        typer.echo(f"Showing {len(result.visible)} of {format_number(result.total)} jobs ({more}).")
    else:
        links = " ".join(f"[{p}]" if p == page else str(p) for p in page_links(page, result.total_pages))
        typer.echo(f"Page {page} of {result.total_pages} - {format_number(result.total)} jobs  {links}".rstrip())


@app.command("export-csv")
def export_csv_cmd(
    search: SearchOpt = "",
    location: LocationOpt = "",
    types: TypeOpt = None,
    category: CategoryOpt = "",
    remote: RemoteOpt = False,
    salary_min: SalaryMinOpt = 0,
    salary_max: SalaryMaxOpt = SALARY_CEILING,
    min_openings: OpeningsOpt = 0,
    created_within: CreatedOpt = None,
    sort: SortOpt = "newest",
    out: Annotated[Path, typer.Option("--out", help="Output directory")] = Path("."),
    basename: Annotated[str, typer.Option("--basename")] = "filtered-jobs",
):
    """Write the filtered+sorted jobs to <basename>.csv."""
    _check_sort(sort)
    spec = _build_filters(search, location, types, category, remote, salary_min, salary_max, min_openings, created_within)
    jobs = process(_load_jobs(), spec, sort)
    if not jobs:
        typer.echo("Nothing to export: no jobs match these filters.", err=True)
        raise typer.Exit(code=1)
    try:
        path = _write(export_csv(jobs, basename, gate=_gate), out)
    except ExportInProgressError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {len(jobs)} jobs to {path}")


@app.command("export-pdf")
def export_pdf_cmd(
    search: SearchOpt = "",
    location: LocationOpt = "",
    types: TypeOpt = None,
    category: CategoryOpt = "",
    remote: RemoteOpt = False,
    salary_min: SalaryMinOpt = 0,
    salary_max: SalaryMaxOpt = SALARY_CEILING,
    min_openings: OpeningsOpt = 0,
    created_within: CreatedOpt = None,
    sort: SortOpt = "newest",
    out: Annotated[Path, typer.Option("--out", help="Output directory")] = Path("."),
):
    """Write the filtered+sorted jobs to a timestamped PDF report."""
    _check_sort(sort)
    spec = _build_filters(search, location, types, category, remote, salary_min, salary_max, min_openings, created_within)
    jobs = process(_load_jobs(), spec, sort)
    if not jobs:
        typer.echo("Nothing to export: no jobs match these filters.", err=True)
        raise typer.Exit(code=1)
    try:
        path = _write(export_pdf(jobs, spec, gate=_gate), out)
    except ExportInProgressError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Wrote {len(jobs)} jobs to {path}")


if __name__ == "__main__":
    app()
