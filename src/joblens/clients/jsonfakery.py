# src/joblens/clients/jsonfakery.py

"""
Plain-function client for the paginated job listings endpoint.

- Keep *all* HTTP details here (URL, headers, timeouts, retries).
- Return the raw JSON page (dict); normalization happens in the pipeline.
- Any failure that survives the retries surfaces as a single NetworkError.
"""

from __future__ import annotations

import logging
from typing import Dict, Generator, Optional

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
)

from joblens.config import DEFAULT_API_URL
from joblens.errors import NetworkError

logger = logging.getLogger(__name__)


# ---- Internal helpers ---------------------------------------------------------

def _default_headers() -> Dict[str, str]:
    return {"User-Agent": "joblens/0.1", "Accept": "application/json"}


def _retrying(retries: int, backoff: bool) -> Retrying:
    return Retrying(
        # 1s, 2s, 4s ... capped at 16s between attempts
        wait=wait_exponential(min=1, max=16) if backoff else wait_none(),
        stop=stop_after_attempt(max(1, retries)),
        retry=retry_if_exception_type(httpx.HTTPError),
        reraise=True,
    )


def _get_json(client: httpx.Client, url: str, params: Dict[str, str], *, retries: int, backoff: bool) -> Dict:
    """One GET (with retries) that must answer 2xx with a JSON object."""
    try:
        for attempt in _retrying(retries, backoff):
            with attempt:
                resp = client.get(url, params=params)
                resp.raise_for_status()  # httpx.HTTPStatusError for 4xx/5xx
                payload = resp.json()
    except httpx.HTTPError as exc:
        raise NetworkError(f"Failed to fetch jobs: {exc}") from exc
    except ValueError as exc:
        raise NetworkError(f"Failed to fetch jobs: invalid JSON from {url}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise NetworkError(f"Failed to fetch jobs: unexpected payload from {url}")
    return payload


# ---- Public API ---------------------------------------------------------------

def fetch_page(
    page: int,
    *,
    base_url: str = DEFAULT_API_URL,
    client: Optional[httpx.Client] = None,
    timeout: float = 20,
    retries: int = 3,
    backoff: bool = True,
) -> Dict:
    """
    Fetch ONE page (1-based) and return the raw JSON.

    The page looks like:
      {"data": [...], "current_page": 1, "last_page": 7, "per_page": 10,
       "total": 68, "next_page_url": "...?page=2", "prev_page_url": null}

    Pass `client` to reuse a connection (or to plug in a test transport);
    otherwise a short-lived client is opened for this one call.
    """
    params = {"page": str(page)}
    if client is not None:
        return _get_json(client, base_url, params, retries=retries, backoff=backoff)
    with httpx.Client(timeout=timeout, headers=_default_headers()) as own:
        return _get_json(own, base_url, params, retries=retries, backoff=backoff)


def is_last_page(data: Dict, page: int) -> bool:
    """End-of-stream: no next_page_url, or the current page reached last_page."""
    if not data.get("next_page_url"):
        return True
    current = data.get("current_page") or page
    last = data.get("last_page")
    return last is not None and current >= last


def iter_pages(
    *,
    base_url: str = DEFAULT_API_URL,
    max_pages: int = 10,
    client: Optional[httpx.Client] = None,
    timeout: float = 20,
    retries: int = 3,
    backoff: bool = True,
) -> Generator[Dict, None, None]:
    """
    Yield raw pages in order, strictly one request at a time.

    Stops when the source reports no further page, or after `max_pages`
    pages no matter what the source says.
    """
    own = None
    if client is None:
        own = client = httpx.Client(timeout=timeout, headers=_default_headers())
    try:
        page = 1
        while True:
            logger.debug("Fetching jobs page %d from %s", page, base_url)
            data = fetch_page(page, base_url=base_url, client=client, retries=retries, backoff=backoff)
            yield data

            if is_last_page(data, page):
                break
            page += 1
            if page > max_pages:
                logger.warning("Stopping after %d pages (safety ceiling)", max_pages)
                break
    finally:
        if own is not None:
            own.close()
