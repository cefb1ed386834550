import pytest

from joblens.models import FilterSpec
from joblens.pipeline.query import Explorer, process, run_query

from conftest import FIXED_NOW


def ids(jobs):
    return [j["id"] for j in jobs]


@pytest.fixture
def twenty(make_job):
    return [make_job(n, salary_to=50_000 + n) for n in range(20)]


def test_remote_only_then_salary_high_end_to_end(make_job, now):
    remote = {4: 55_000, 11: 90_000, 19: 70_000}
    jobs = [
        make_job(n, is_remote_work=1 if n in remote else 0, salary_to=remote.get(n, 60_000))
        for n in range(25)
    ]

    filtered = process(jobs, FilterSpec(remote_only=True), "newest", now=now)
    # all created_at are equal, so "newest" keeps input order
    assert ids(filtered) == ["job-4", "job-11", "job-19"]

    ranked = process(jobs, FilterSpec(remote_only=True), "salary_high", now=now)
    assert ids(ranked) == ["job-11", "job-19", "job-4"]


def test_run_query_pagination(twenty, now):
    result = run_query(twenty, FilterSpec(), "salary_low", "pagination", 3, page_size=9, now=now)
    assert result.total == 20
    assert result.total_pages == 3
    assert len(result.visible) == 2
    assert result.has_more is False

    beyond = run_query(twenty, FilterSpec(), "salary_low", "pagination", 4, page_size=9, now=now)
    assert beyond.visible == []


def test_run_query_infinite(twenty, now):
    result = run_query(twenty, FilterSpec(), "salary_low", "infinite", 9, page_size=9, now=now)
    assert len(result.visible) == 9
    assert result.has_more


def test_run_query_rejects_unknown_view_mode(twenty):
    with pytest.raises(ValueError):
        run_query(twenty, FilterSpec(), "newest", "carousel", 1)


class TestExplorer:
    def make(self, jobs):
        return Explorer(jobs, page_size=9, batch=9, now=lambda: FIXED_NOW)

    def test_infinite_scroll_sequence(self, twenty):
        explorer = self.make(twenty)
        explorer.set_view_mode("infinite")

        assert explorer.view().has_more
        assert explorer.load_more()
        assert explorer.visible_count == 18
        assert explorer.view().has_more
        assert explorer.load_more()
        assert explorer.visible_count == 20
        assert not explorer.view().has_more
        assert not explorer.load_more()
        assert explorer.visible_count == 20

    def test_filter_change_resets_window(self, twenty):
        explorer = self.make(twenty)
        explorer.go_to_page(3)
        explorer.load_more()

        explorer.set_filters(explorer.filters.replace(search="engineer"))
        assert explorer.page == 1
        assert explorer.visible_count == 9

    def test_sort_change_resets_window(self, twenty):
        explorer = self.make(twenty)
        explorer.go_to_page(2)
        explorer.set_sort("salary_high")
        assert explorer.page == 1

    def test_unknown_sort_rejected(self, twenty):
        with pytest.raises(ValueError):
            self.make(twenty).set_sort("random")

    def test_view_matches_run_query(self, twenty):
        explorer = self.make(twenty)
        explorer.set_sort("salary_high")
        explorer.go_to_page(2)
        expected = run_query(twenty, FilterSpec(), "salary_high", "pagination", 2, page_size=9, now=FIXED_NOW)
        assert explorer.view() == expected

    def test_repeated_views_are_identical(self, twenty):
        explorer = self.make(twenty)
        assert explorer.view() == explorer.view()
        assert explorer.results() is explorer.results()

    def test_reset_filters(self, twenty):
        explorer = self.make(twenty)
        explorer.set_filters(FilterSpec(remote_only=True))
        assert explorer.view().total == 0
        explorer.reset_filters()
        assert explorer.view().total == 20
