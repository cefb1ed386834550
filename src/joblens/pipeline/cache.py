# src/joblens/pipeline/cache.py
"""
Ingestion: fetch every page, normalize, and keep the merged list for a while.

`fetch_all_jobs` does one full load (all pages, in order). `JobsCache` wraps
any loader with a TTL. It holds a single entry under a fixed key. The cache is
an object owned by the caller (the CLI keeps one per process, tests make their
own), so separate sessions never share state.
"""

from __future__ import annotations

import logging
import random
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

import httpx

from joblens.clients.jsonfakery import iter_pages
from joblens.config import Settings
from joblens.models import Job
from joblens.pipeline.normalize import normalize_jobs

logger = logging.getLogger(__name__)

CACHE_KEY = "all_jobs"
DEFAULT_TTL_SECONDS = 5 * 60


def fetch_all_jobs(
    settings: Settings,
    *,
    client: Optional[httpx.Client] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    backoff: bool = True,
) -> List[Job]:
    """
    Fetch all pages (page order and in-page order preserved) and normalize them.

    Raises NetworkError if any page fails. Nothing is returned for the
    pages that did succeed.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)

    jobs: List[Job] = []
    pages = 0
    for data in iter_pages(
        base_url=settings.api_url,
        max_pages=settings.max_pages,
        client=client,
        timeout=settings.http_timeout,
        retries=settings.http_retries,
        backoff=backoff,
    ):
        pages += 1
        jobs.extend(normalize_jobs(data.get("data") or [], rng=rng, now=now))

    logger.info("Ingested %d jobs from %d page(s)", len(jobs), pages)
    return jobs


class JobsCache:
    """
    Single-entry TTL cache in front of a job loader.

    - A hit within `ttl` seconds returns the stored list without calling the loader.
    - A successful load overwrites the entry (never merges).
    - A failed load propagates its error and leaves any earlier entry alone.
    - `invalidate()` drops the entry and abandons loads already in flight:
      their results are handed back to their caller but never stored.
    """

    def __init__(
        self,
        loader: Callable[[], List[Job]],
        *,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self._ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[float, List[Job]]] = {}
        self._generation = 0

    def _fresh_entry(self) -> Optional[List[Job]]:
        entry = self._entries.get(CACHE_KEY)
        if entry is None:
            return None
        stored_at, jobs = entry
        if self._clock() - stored_at < self._ttl:
            return jobs
        return None

    def get_all(self) -> List[Job]:
        cached = self._fresh_entry()
        if cached is not None:
            logger.debug("Cache hit: %d jobs", len(cached))
            return list(cached)

        generation = self._generation
        jobs = self._loader()

        if generation != self._generation:
            logger.info("Discarding result of an abandoned load")
            return jobs

        self._entries[CACHE_KEY] = (self._clock(), list(jobs))
        return list(jobs)

    def invalidate(self) -> None:
        self._generation += 1
        self._entries.pop(CACHE_KEY, None)

    @property
    def has_entry(self) -> bool:
        return CACHE_KEY in self._entries
