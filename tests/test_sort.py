import pytest

from joblens.models import SORT_OPTIONS
from joblens.pipeline.sort import apply_sort


def ids(jobs):
    return [j["id"] for j in jobs]


def test_salary_high_is_stable(make_job):
    jobs = [
        make_job(1, salary_to=90_000),
        make_job(2, salary_to=120_000),
        make_job(3, salary_to=90_000),
        make_job(4, salary_to=90_000),
    ]
    assert ids(apply_sort(jobs, "salary_high")) == ["job-2", "job-1", "job-3", "job-4"]


def test_salary_low_uses_salary_from(make_job):
    jobs = [make_job(1, salary_from=30_000), make_job(2, salary_from=10_000), make_job(3, salary_from=30_000)]
    assert ids(apply_sort(jobs, "salary_low")) == ["job-2", "job-1", "job-3"]


def test_newest_and_oldest(make_job):
    jobs = [
        make_job(1, created_at="2025-06-01T00:00:00Z"),
        make_job(2, created_at="2025-06-10T00:00:00Z"),
        make_job(3, created_at="2025-05-20T00:00:00Z"),
    ]
    assert ids(apply_sort(jobs, "newest")) == ["job-2", "job-1", "job-3"]
    assert ids(apply_sort(jobs, "oldest")) == ["job-3", "job-1", "job-2"]


def test_falls_back_to_application_deadline(make_job):
    jobs = [
        make_job(1, created_at=None, application_deadline="2025-06-05"),
        make_job(2, created_at="2025-06-01T00:00:00Z"),
    ]
    assert ids(apply_sort(jobs, "newest")) == ["job-1", "job-2"]


def test_unparseable_dates_sort_as_oldest(make_job):
    jobs = [make_job(1, created_at="??"), make_job(2, created_at="2025-01-01T00:00:00Z")]
    assert ids(apply_sort(jobs, "newest")) == ["job-2", "job-1"]
    assert ids(apply_sort(jobs, "oldest")) == ["job-1", "job-2"]


def test_most_openings_treats_missing_as_one(make_job):
    jobs = [make_job(1, openings=None), make_job(2, openings=4), make_job(3, openings=1)]
    assert ids(apply_sort(jobs, "most_openings")) == ["job-2", "job-1", "job-3"]


@pytest.mark.parametrize("sort", SORT_OPTIONS)
def test_returns_new_list(make_job, sort):
    jobs = [make_job(1, salary_to=1), make_job(2, salary_to=2)]
    before = list(jobs)
    result = apply_sort(jobs, sort)
    assert result is not jobs
    assert jobs == before


def test_unknown_sort():
    with pytest.raises(ValueError):
        apply_sort([], "alphabetical")
