# src/joblens/io/gate.py
"""The "exporting" marker: at most one export runs at a time."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from joblens.errors import ExportInProgressError


class ExportGate:
    def __init__(self) -> None:
        self._active: Optional[str] = None

    @property
    def active(self) -> Optional[str]:
        """Kind of the running export ("csv", "pdf"), or None."""
        return self._active

    @property
    def busy(self) -> bool:
        return self._active is not None

    @contextmanager
    def hold(self, kind: str) -> Iterator[None]:
        """
        Mark an export as running for the duration of the block.
        Raises ExportInProgressError if one already is; the marker is
        always released on exit, whether the export succeeded or not.
        """
        if self._active is not None:
            raise ExportInProgressError(f"A {self._active} export is already running")
        self._active = kind
        try:
            yield
        finally:
            self._active = None
