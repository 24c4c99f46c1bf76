"""Test utilities for the diffexport test suite.

This module provides recording fakes for the delivery capabilities and small
helpers for writing diff input documents.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any

# Date returned by the fixed clock fixture
FIXED_DATE = date(2024, 3, 15)


class RecordingSurface:
    """Display surface that records what was written to it."""

    def __init__(self, fail_on_write: bool = False):
        self.chunks: list[str] = []
        self.title: str | None = None
        self.closed = False
        self.fail_on_write = fail_on_write

    def write(self, markup: str) -> None:
        if self.fail_on_write:
            raise RuntimeError("surface is broken")
        self.chunks.append(markup)

    def set_title(self, title: str) -> None:
        self.title = title

    def close(self) -> None:
        self.closed = True

    @property
    def content(self) -> str:
        return "".join(self.chunks)


class RecordingSink:
    """Delivery sink that records save and preview calls in memory.

    Staged file content is read inside ``save_file`` because the service
    releases the staged file afterwards.
    """

    def __init__(
        self,
        surface: RecordingSurface | None = None,
        refuse_surface: bool = False,
        fail_save: bool = False,
        fail_open: bool = False,
    ):
        self.saved: list[tuple[str, str, bytes]] = []
        self.staged_paths: list[Path] = []
        self.surfaces: list[RecordingSurface] = []
        self._surface = surface
        self.refuse_surface = refuse_surface
        self.fail_save = fail_save
        self.fail_open = fail_open

    def save_file(self, staged_path: Path, filename: str, mime_type: str) -> None:
        self.staged_paths.append(staged_path)
        if self.fail_save:
            raise OSError("disk full")
        self.saved.append((filename, mime_type, staged_path.read_bytes()))

    def open_surface(self) -> RecordingSurface | None:
        if self.fail_open:
            raise RuntimeError("popup blocked")
        if self.refuse_surface:
            return None
        surface = self._surface or RecordingSurface()
        self.surfaces.append(surface)
        return surface


class ManualScheduler:
    """Scheduler that collects callbacks until :meth:`run_all` is called."""

    def __init__(self):
        self.calls: list[tuple[float, Any]] = []

    def __call__(self, delay, callback) -> None:
        self.calls.append((delay, callback))

    def run_all(self) -> None:
        for _, callback in self.calls:
            callback()


def write_diff_input(path: Path, payload: Any) -> Path:
    """Write a diff input document as JSON and return its path."""
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
