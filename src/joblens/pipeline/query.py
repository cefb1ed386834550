# src/joblens/pipeline/query.py
"""
The rendering boundary: (jobs, filters, sort, view mode, position) in,
(visible jobs, total, total pages, has more) out.

`run_query` is the stateless form. `Explorer` keeps one user's interaction
state and applies the reset rules: a new filter spec or sort key sends the
page back to 1 and the infinite-scroll window back to one batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from joblens.models import DEFAULT_SORT, SORT_OPTIONS, VIEW_MODES, FilterSpec, Job
from joblens.pipeline.filter import apply_filters
from joblens.pipeline.sort import apply_sort
from joblens.pipeline import window

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 9
DEFAULT_BATCH = 9


@dataclass(frozen=True)
class QueryResult:
    visible: List[Job]
    total: int
    total_pages: int
    has_more: bool


def process(jobs: Sequence[Job], spec: FilterSpec, sort: str, *, now: Optional[datetime] = None) -> List[Job]:
    """Filter then sort: the set both the window and the exports work from."""
    return apply_sort(apply_filters(jobs, spec, now=now), sort)


def run_query(
    jobs: Sequence[Job],
    spec: FilterSpec,
    sort: str,
    view_mode: str,
    position: int,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    now: Optional[datetime] = None,
) -> QueryResult:
    """
    `position` is the 1-based page index in "pagination" mode and the
    visible count in "infinite" mode.
    """
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode: {view_mode!r}")
    processed = process(jobs, spec, sort, now=now)
    return _window(processed, view_mode, position, page_size)


def _window(processed: List[Job], view_mode: str, position: int, page_size: int) -> QueryResult:
    count = len(processed)
    if view_mode == "infinite":
        visible = window.prefix_window(processed, position)
        more = window.has_more(position, count)
    else:
        visible = window.paginate(processed, page_size, position)
        more = False
    return QueryResult(visible, count, window.total_pages(count, page_size), more)


class Explorer:
    """
    One browsing session over a fixed job list.

    The filtered+sorted list is memoized on (filters, sort), so re-rendering
    with unchanged input costs nothing and accumulates no state.
    """

    def __init__(
        self,
        jobs: Sequence[Job],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        batch: int = DEFAULT_BATCH,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self._jobs = list(jobs)
        self.page_size = page_size
        self.batch = batch
        self._now = now
        self.filters = FilterSpec()
        self.sort: str = DEFAULT_SORT
        self.view_mode: str = "pagination"
        self.page = 1
        self.visible_count = batch
        self._memo: Optional[Tuple[FilterSpec, str, List[Job]]] = None

    # ---- state changes ----

    def _reset_window(self) -> None:
        self.page = 1
        self.visible_count = self.batch

    def set_filters(self, spec: FilterSpec) -> None:
        self.filters = spec
        self._reset_window()

    def reset_filters(self) -> None:
        self.set_filters(FilterSpec.default())

    def set_sort(self, sort: str) -> None:
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort!r}")
        self.sort = sort
        self._reset_window()

    def set_view_mode(self, view_mode: str) -> None:
        if view_mode not in VIEW_MODES:
            raise ValueError(f"Unknown view mode: {view_mode!r}")
        self.view_mode = view_mode

    def go_to_page(self, page: int) -> None:
        self.page = page

    def load_more(self) -> bool:
        """Advance the infinite window by one batch. Returns False if nothing changed."""
        before = self.visible_count
        self.visible_count = window.advance(before, len(self.results()), self.batch)
        return self.visible_count != before

    # ---- reads ----

    def results(self) -> List[Job]:
        if self._memo is not None and self._memo[0] == self.filters and self._memo[1] == self.sort:
            return self._memo[2]
        now = self._now() if self._now else None
        processed = process(self._jobs, self.filters, self.sort, now=now)
        logger.debug("Query matched %d of %d jobs", len(processed), len(self._jobs))
        self._memo = (self.filters, self.sort, processed)
        return processed

    def view(self) -> QueryResult:
        position = self.visible_count if self.view_mode == "infinite" else self.page
        return _window(self.results(), self.view_mode, position, self.page_size)
