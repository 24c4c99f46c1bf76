#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/cli/builder.py
"""Shared argument parsing pieces and exit codes for the diffexport CLI."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Mapping

from diffexport.constants import ENV_CONFIG
from diffexport.exceptions import (
    DeliveryError,
    FormatError,
    InputError,
    RenderingError,
    ValidationError,
)
from diffexport.logging_utils import configure_logging

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_RENDERING_ERROR = 7
EXIT_DELIVERY_ERROR = 11

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_LEVEL = "WARNING"


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (InputError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, FormatError):
        return EXIT_FORMAT_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    if isinstance(exception, DeliveryError):
        return EXIT_DELIVERY_ERROR

    return EXIT_ERROR


def create_common_parser() -> argparse.ArgumentParser:
    """Create the parent parser holding the flags every command accepts.

    Returns
    -------
    argparse.ArgumentParser
        Parser without help, meant for ``parents=[...]``

    """
    parser = argparse.ArgumentParser(add_help=False)
    group = parser.add_argument_group("global options")
    group.add_argument(
        "--config",
        help=f"Path to a configuration file (.toml, .yaml, .json or pyproject.toml); defaults to ${ENV_CONFIG}",
    )
    group.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper, help="Logging verbosity")
    group.add_argument("--log-file", help="Also write log records to this file")
    group.add_argument("--trace", action="store_true", help="Timestamped debug logging")
    return parser


def setup_logging(parsed: argparse.Namespace, config: Mapping[str, Any]) -> None:
    """Configure logging from parsed global flags, falling back to the config file."""
    if parsed.trace:
        level: str = "DEBUG"
    else:
        level = parsed.log_level or str(config.get("log_level", DEFAULT_LOG_LEVEL)).upper()
    configure_logging(level, log_file=parsed.log_file, trace_mode=parsed.trace)
    logging.getLogger(__name__).debug(f"Logging configured at {level}")


def config_path_from_env() -> str | None:
    """Return the configuration path set in the environment, if any."""
    return os.environ.get(ENV_CONFIG) or None
