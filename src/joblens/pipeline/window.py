# src/joblens/pipeline/window.py
"""
Windowing over an already filtered+sorted list: fixed-size pages
(1-based) or a growable prefix for infinite scroll.
"""

from __future__ import annotations

import math
from typing import List, Sequence, TypeVar, Union

T = TypeVar("T")

ELLIPSIS = "..."


def total_pages(count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return math.ceil(count / page_size)


def paginate(items: Sequence[T], page_size: int, page: int) -> List[T]:
    """Items of 1-based `page`. An out-of-range page gives [] (no error)."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if page < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def prefix_window(items: Sequence[T], visible_count: int) -> List[T]:
    return list(items[:max(0, visible_count)])


def has_more(visible_count: int, count: int) -> bool:
    return visible_count < count


def advance(visible_count: int, count: int, batch: int) -> int:
    """
    Grow the infinite-scroll window by one batch, clamped at `count`.
    Once everything is visible this is a no-op.
    """
    if not has_more(visible_count, count):
        return visible_count
    return min(visible_count + batch, count)


def page_links(current: int, total: int) -> List[Union[int, str]]:
    """
    Compact page selector, e.g. for 12 pages on page 6:
      [1, "...", 5, 6, 7, "...", 12]
    Up to 7 pages are all listed; a single page needs no selector ([]).
    """
    if total <= 1:
        return []
    if total <= 7:
        return list(range(1, total + 1))

    links: List[Union[int, str]] = [1]
    if current > 3:
        links.append(ELLIPSIS)
    for i in range(max(2, current - 1), min(total - 1, current + 1) + 1):
        links.append(i)
    if current < total - 2:
        links.append(ELLIPSIS)
    links.append(total)
    return links
