"""Unit tests for logging configuration."""

import logging

import pytest

from diffexport.logging_utils import configure_logging, resolve_log_level


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_string_level(self):
        root = configure_logging("debug")

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging("chatty").level == logging.INFO

    def test_trace_format(self):
        root = configure_logging(logging.WARNING, trace_mode=True)

        assert "%(asctime)s" in root.handlers[0].formatter._fmt

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "diffexport.log"

        root = configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("diffexport.test").info("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert len(root.handlers) == 2
        assert "hello from test" in log_file.read_text(encoding="utf-8")

    def test_unwritable_log_file_keeps_console(self, tmp_path):
        root = configure_logging("INFO", log_file=str(tmp_path / "missing" / "dir" / "x.log"))
        assert len(root.handlers) == 1


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [(logging.ERROR, logging.ERROR), ("warning", logging.WARNING), (" Debug ", logging.DEBUG), ("chatty", logging.INFO)],
)
def test_resolve_log_level(value, expected):
    assert resolve_log_level(value) == expected
