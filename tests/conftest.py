"""Pytest configuration and shared fixtures for the diffexport test suite.

This module provides shared fixtures and test configuration used across
the entire test suite.
"""

import logging
import os
from datetime import datetime

import pytest
from hypothesis import Phase, Verbosity, settings

from utils import FIXED_DATE, ManualScheduler, RecordingSink

from diffexport.models import DiffLine, FileInfo

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by hypothesis")


@pytest.fixture
def fixed_clock():
    """Provide a clock returning a fixed date for filename generation."""
    return lambda: FIXED_DATE


@pytest.fixture
def sample_lines() -> list[DiffLine]:
    """Provide a small diff with every line type."""
    return [
        DiffLine(1, "def greet(name):", "unchanged", original_line_number=1, new_line_number=1),
        DiffLine(2, "    print('Hello ' + name)", "removed", original_line_number=2),
        DiffLine(3, "    print(f'Hello {name}')", "added", new_line_number=2),
        DiffLine(4, "    return None", "modified", original_line_number=3, new_line_number=3),
        DiffLine(5, "", "unchanged", original_line_number=4, new_line_number=4),
    ]


@pytest.fixture
def original_file() -> FileInfo:
    """Provide metadata for the original file."""
    return FileInfo(name="config.old.py", content="a\nb\nc", size=1234, last_modified=datetime(2024, 3, 1, 9, 30))


@pytest.fixture
def modified_file() -> FileInfo:
    """Provide metadata for the modified file."""
    return FileInfo(name="config.new.py", content="a\nb\nc\nd", size=1300, last_modified=datetime(2024, 3, 2, 10, 0))


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Provide a delivery sink that records calls."""
    return RecordingSink()


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    """Provide a scheduler that runs callbacks on demand."""
    return ManualScheduler()


@pytest.fixture
def no_browser(monkeypatch):
    """Record browser launches instead of opening a browser."""
    opened: list[str] = []
    monkeypatch.delenv("DIFFEXPORT_NO_BROWSER", raising=False)
    monkeypatch.setattr("webbrowser.open", lambda url, *args, **kwargs: opened.append(url) or True)
    return opened


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo root logger changes made by CLI logging setup."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty working directory with no user configuration."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("DIFFEXPORT_CONFIG", raising=False)
    return tmp_path
