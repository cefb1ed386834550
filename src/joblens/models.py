# src/joblens/models.py
"""
Typed shapes for job records and the query inputs that select/order them.

Job records stay plain dicts (TypedDict gives us key hints only), exactly as
they arrive from the listings API plus the few keys normalization fills in.
The filter specification is a frozen dataclass: a query is a pure function of
(records, FilterSpec), so every change produces a new spec.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import FrozenSet, Literal, Optional, Tuple, TypedDict


# Upper bound of the salary slider; a spec with salary_max below this (or
# salary_min above 0) counts as an active salary filter.
SALARY_CEILING = 500_000

SortOption = Literal["newest", "oldest", "salary_high", "salary_low", "most_openings"]
SORT_OPTIONS: Tuple[str, ...] = ("newest", "oldest", "salary_high", "salary_low", "most_openings")
DEFAULT_SORT: SortOption = "newest"

ViewMode = Literal["pagination", "infinite"]
VIEW_MODES: Tuple[str, ...] = ("pagination", "infinite")


@dataclass(frozen=True)
class Qualifications:
    """
    `qualifications` is ambiguous on the wire: either a JSON-encoded list of
    strings or one opaque string. We resolve it once, at normalization time.

    - kind == "list": the payload decoded to a JSON array.
    - kind == "text": anything else; `items` holds the raw string alone.
    """

    kind: Literal["list", "text"]
    items: Tuple[str, ...] = ()


class JobRaw(TypedDict, total=False):
    """
    One job posting exactly as the listings API returns it.

    Nothing is validated here; `openings` and `created_at` are frequently
    missing and must never be assumed present on raw input.
    """

    id: str
    title: str
    description: str
    company: str
    location: str

    # Non-negative ints; salary_from <= salary_to is expected, not enforced
    salary_from: int
    salary_to: int

    # Free-text categorical labels (not a closed enum)
    employment_type: str
    job_category: str

    application_deadline: str  # ISO-8601 expected, may be malformed
    qualifications: str  # JSON array of strings or an opaque string
    contact: str  # email if it contains "@", otherwise a phone number
    is_remote_work: int  # 0/1 flag

    openings: Optional[int]
    created_at: Optional[str]


class Job(JobRaw, total=False):
    """
    A normalized record: `openings` and `created_at` are always concrete and
    `parsed_qualifications` holds the resolved qualifications variant.
    """

    parsed_qualifications: Qualifications


# Dimensions accepted by FilterSpec.without()
FILTER_DIMENSIONS: Tuple[str, ...] = (
    "search",
    "location",
    "employment_types",
    "job_category",
    "remote_only",
    "salary",
    "min_openings",
    "created_within",
)


@dataclass(frozen=True)
class FilterSpec:
    """
    Immutable set of predicates selecting which jobs are visible.

    Inactive values (the defaults) never exclude anything, except the salary
    range which always applies: by default it is [0, SALARY_CEILING].
    """

    search: str = ""
    location: str = ""
    employment_types: FrozenSet[str] = field(default_factory=frozenset)
    job_category: str = ""
    remote_only: bool = False
    salary_min: int = 0
    salary_max: int = SALARY_CEILING
    min_openings: int = 0
    created_within: Optional[int] = None  # days, e.g. 7 or 30; None = no constraint

    def __post_init__(self) -> None:
        # Accept any iterable (list from the CLI, tuple in tests) but store a frozenset
        if not isinstance(self.employment_types, frozenset):
            object.__setattr__(self, "employment_types", frozenset(self.employment_types))

    @classmethod
    def default(cls) -> "FilterSpec":
        return cls()

    def replace(self, **changes) -> "FilterSpec":
        """Return a new spec with `changes` applied; self is untouched."""
        return dataclasses.replace(self, **changes)

    def without(self, dimension: str, value: Optional[str] = None) -> "FilterSpec":
        """
        Drop one active filter (the "remove tag" action).

        For `employment_types`, passing `value` removes just that type and
        keeps the others selected.
        """
        if dimension not in FILTER_DIMENSIONS:
            raise ValueError(f"Unknown filter dimension: {dimension!r}")

        if dimension == "employment_types":
            if value is None:
                return self.replace(employment_types=frozenset())
            return self.replace(employment_types=self.employment_types - {value})
        if dimension == "salary":
            return self.replace(salary_min=0, salary_max=SALARY_CEILING)

        default = FilterSpec()
        return self.replace(**{dimension: getattr(default, dimension)})
