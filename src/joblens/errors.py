# src/joblens/errors.py
"""Exceptions raised across joblens."""


class JobLensError(Exception):
    """Base class for every error this package raises on purpose."""


class NetworkError(JobLensError):
    """
    Ingestion failed: a page request errored or returned a non-success status.

    Fatal to the current load. The only recovery is a full re-ingest; partial
    results are never kept.
    """


class ParseError(JobLensError):
    """A single malformed date or qualifications payload. Always caught locally."""


class ExportInProgressError(JobLensError):
    """An export was requested while another one is still running."""
