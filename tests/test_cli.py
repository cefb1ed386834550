import pytest
from typer.testing import CliRunner

from joblens import cli
from joblens.errors import NetworkError
from joblens.pipeline.cache import JobsCache

runner = CliRunner()


@pytest.fixture
def jobs(make_job):
    return [
        make_job(n, location="Berlin" if n % 2 else "Paris", is_remote_work=1 if n < 3 else 0,
                 salary_to=60_000 + n * 1_000, created_at="2025-06-10T09:00:00.000Z")
        for n in range(12)
    ]


@pytest.fixture
def loaded(monkeypatch, jobs):
    monkeypatch.setattr(cli, "_cache", JobsCache(lambda: list(jobs)))
    return jobs


def test_fetch_reports_counts(loaded):
    result = runner.invoke(cli.app, ["fetch"])
    assert result.exit_code == 0
    assert "Loaded 12 jobs (3 remote)." in result.output


def test_fetch_network_error(monkeypatch):
    def failing():
        raise NetworkError("Failed to fetch jobs: 503")

    monkeypatch.setattr(cli, "_cache", JobsCache(failing))
    result = runner.invoke(cli.app, ["fetch"])
    assert result.exit_code == 1
    assert "Failed to load jobs" in result.output


def test_search_pagination(loaded):
    result = runner.invoke(cli.app, ["search", "--page", "2"])
    assert result.exit_code == 0
    assert "Page 2 of 2 - 12 jobs" in result.output


def test_search_infinite(loaded):
    result = runner.invoke(cli.app, ["search", "--infinite", "1"])
    assert result.exit_code == 0
    assert "Showing 12 of 12 jobs (end of results)." in result.output


def test_search_suggests_close_location(loaded):
    result = runner.invoke(cli.app, ["search", "--location", "Berln"])
    assert result.exit_code == 0
    assert "Did you mean 'Berlin'?" in result.output


def test_search_rejects_unknown_sort(loaded):
    result = runner.invoke(cli.app, ["search", "--sort", "alphabetical"])
    assert result.exit_code != 0


def test_facets(loaded):
    result = runner.invoke(cli.app, ["facets"])
    assert result.exit_code == 0
    assert "Locations (2):" in result.output


def test_export_csv_writes_file(loaded, tmp_path):
    result = runner.invoke(cli.app, ["export-csv", "--remote", "--out", str(tmp_path)])
    assert result.exit_code == 0
    lines = (tmp_path / "filtered-jobs.csv").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 4


def test_export_pdf_writes_file(loaded, tmp_path):
    result = runner.invoke(cli.app, ["export-pdf", "--out", str(tmp_path)])
    assert result.exit_code == 0
    written = list(tmp_path.glob("job-results-*.pdf"))
    assert len(written) == 1
    assert written[0].read_bytes().startswith(b"%PDF-")


def test_export_with_no_matches_fails(loaded, tmp_path):
    result = runner.invoke(cli.app, ["export-csv", "--category", "Nope", "--out", str(tmp_path)])
    assert result.exit_code == 1


def test_search_details_shows_contact_and_qualifications(loaded):
    result = runner.invoke(cli.app, ["search", "--details"])
    assert result.exit_code == 0
    assert "Contact (email): jobs@example.com" in result.output
    assert "  - BSc" in result.output


def test_search_infinite_past_the_end_is_clamped(loaded):
    result = runner.invoke(cli.app, ["search", "--infinite", "5"])
    assert result.exit_code == 0
    assert "Showing 12 of 12 jobs (end of results)." in result.output
