"""Shared fixtures: job factories and a fixed clock."""

from datetime import datetime, timezone

import pytest

FIXED_NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


def build_job(n: int = 1, **overrides) -> dict:
    job = {
        "id": f"job-{n}",
        "title": f"Engineer {n}",
        "description": "Build and run things.",
        "company": f"Company {n}",
        "location": "Berlin",
        "salary_from": 50_000,
        "salary_to": 70_000,
        "employment_type": "Full-Time",
        "job_category": "Engineering",
        "application_deadline": "2025-07-01",
        "qualifications": '["BSc", "Python"]',
        "contact": "jobs@example.com",
        "is_remote_work": 0,
        "openings": 2,
        "created_at": "2025-06-10T09:00:00.000Z",
    }
    job.update(overrides)
    return job


@pytest.fixture
def make_job():
    return build_job


@pytest.fixture
def now():
    return FIXED_NOW
