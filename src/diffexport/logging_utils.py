"""Logging setup for the diffexport command-line entry points.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, once per CLI invocation.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "diffexport: %(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s:%(lineno)d] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Return a numeric level for ``log_level``; unknown names resolve to INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _make_formatter(trace_mode: bool) -> logging.Formatter:
    if trace_mode:
        return logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    return logging.Formatter(CONSOLE_FORMAT)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str | Path] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install console (and optional file) handlers on the root logger.

    Existing root handlers are replaced, so repeated calls do not duplicate
    output.

    Parameters
    ----------
    log_level : int | str
        Numeric level or level name such as ``"DEBUG"``
    log_file : str or Path, optional
        Append log records to this file as well; a file that cannot be opened
        is reported on the console and skipped
    trace_mode : bool, default False
        Use the timestamped format with logger names and line numbers

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_log_level(log_level)
    formatter = _make_formatter(trace_mode)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(Path(log_file), mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    if file_error is not None:
        root_logger.warning(f"Could not open log file {log_file}: {file_error}")
    elif log_file:
        root_logger.debug(f"Logging to file: {log_file}")

    return root_logger
