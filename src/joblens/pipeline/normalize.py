# src/joblens/pipeline/normalize.py
"""
Turn raw API records into complete Job dicts.

The listings API often omits `openings` and `created_at`. We fill them with
synthetic values so everything downstream can assume they exist. Those values
are random, so the random source and the clock are parameters: tests pass a
seeded/fake RNG and a fixed `now` and can assert exact results.
"""

from __future__ import annotations

import json
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from joblens.errors import ParseError
from joblens.models import Job, JobRaw, Qualifications

logger = logging.getLogger(__name__)

MAX_SYNTHETIC_OPENINGS = 10
SYNTHETIC_CREATED_WINDOW = timedelta(days=60)


# ---- Dates --------------------------------------------------------------------

def _parse_iso(raw: str) -> datetime:
    text = raw.strip()
    if not text:
        raise ParseError("empty date string")
    # fromisoformat() only learned "Z" in 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ParseError(f"not an ISO-8601 date: {raw!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date/timestamp into an aware datetime (UTC if naive).

    Returns None for missing or malformed input; never raises.
    """
    if not raw or not isinstance(raw, str):
        return None
    try:
        return _parse_iso(raw)
    except ParseError as exc:
        logger.debug("Ignoring malformed date: %s", exc)
        return None


def to_iso(moment: datetime) -> str:
    # "2025-09-26T07:20:13.123Z", the same shape the API uses
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---- Qualifications -----------------------------------------------------------

def _decode_qualifications(raw: str) -> List[str]:
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ParseError("qualifications is not JSON") from exc
    if not isinstance(parsed, list):
        raise ParseError("qualifications JSON is not an array")
    return [str(item) for item in parsed]


def parse_qualifications(raw) -> Qualifications:
    """
    '["BSc", "3 years Python"]' -> Qualifications("list", ("BSc", "3 years Python"))
    'Degree in anything'        -> Qualifications("text", ("Degree in anything",))
    """
    if isinstance(raw, list):
        return Qualifications("list", tuple(str(item) for item in raw))
    if raw is None:
        return Qualifications("text", ())
    text = str(raw)
    try:
        return Qualifications("list", tuple(_decode_qualifications(text)))
    except ParseError:
        return Qualifications("text", (text,))


# ---- Records ------------------------------------------------------------------

def normalize_job(raw: JobRaw, *, rng: random.Random, now: datetime) -> Job:
    """
    Copy `raw` and fill in what's missing:
    - openings: random int in [1, 10]
    - created_at: random instant within the 60 days before `now`

    Values already present are kept as-is, malformed or not.
    """
    job: Job = dict(raw)  # type: ignore[assignment]

    if job.get("openings") is None:
        job["openings"] = rng.randint(1, MAX_SYNTHETIC_OPENINGS)

    if job.get("created_at") is None:
        offset = SYNTHETIC_CREATED_WINDOW * rng.random()
        job["created_at"] = to_iso(now - offset)

    job["parsed_qualifications"] = parse_qualifications(raw.get("qualifications"))
    return job


def normalize_jobs(
    raws: Iterable[JobRaw],
    *,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Job]:
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    out: List[Job] = []
    for raw in raws:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object job record: %r", raw)
            continue
        out.append(normalize_job(raw, rng=rng, now=now))
    return out
