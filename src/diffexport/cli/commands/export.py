#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/diffexport/cli/commands/export.py
"""Export and preview commands for the diffexport CLI.

Both commands read diff lines from a JSON document. The document is either a
list of line objects or an object with a ``lines`` list and optional
``originalFile``/``modifiedFile`` metadata; snake_case keys are accepted as
well. ``-`` reads the document from standard input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

from diffexport.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    config_path_from_env,
    create_common_parser,
    get_exit_code_for_exception,
    setup_logging,
)
from diffexport.cli.config import get_format_section, load_config_with_priority
from diffexport.constants import FORMAT_HTML, RENDER_MODES, THEMES, VIEW_MODES
from diffexport.delivery import LocalDeliverySink
from diffexport.exceptions import DiffExportError, InputError
from diffexport.models import DiffLine, FileInfo
from diffexport.options import get_options_class
from diffexport.options.base import BaseExportOptions
from diffexport.registry import get_default_registry
from diffexport.service import ExportService, run_immediately

logger = logging.getLogger(__name__)


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the flags that map onto export option fields.

    Every flag defaults to None so that only flags given on the command line
    override configuration file values.
    """
    group = parser.add_argument_group("report options")
    group.add_argument("--title", help="Report title")
    group.add_argument(
        "--no-line-numbers", dest="include_line_numbers", action="store_false", default=None, help="Omit line numbers"
    )
    group.add_argument(
        "--no-stats", dest="include_stats", action="store_false", default=None, help="Omit the statistics summary"
    )
    group.add_argument(
        "--no-header", dest="include_header", action="store_false", default=None, help="Omit the file header"
    )
    group.add_argument("--original-file", metavar="PATH", help="Original file (name and metadata for the header)")
    group.add_argument("--modified-file", metavar="PATH", help="Modified file (name and metadata for the header)")

    html_group = parser.add_argument_group("html options")
    html_group.add_argument("--theme", choices=THEMES, help="Colour theme")
    html_group.add_argument("--view-mode", choices=VIEW_MODES, help="Unified or side-by-side layout")
    html_group.add_argument(
        "--differences-only", action="store_true", default=None, help="Show only added, removed and modified lines"
    )
    html_group.add_argument("--render-mode", choices=RENDER_MODES, help="Render lines as markup or SVG images")


def _create_export_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffexport export",
        description="Export diff lines as an HTML, plain text or Markdown report.",
        parents=[create_common_parser()],
    )
    parser.add_argument("input", help="JSON file with diff lines ('-' for stdin)")
    parser.add_argument("--format", "-f", help="Export format (default: html, or 'format' from the config file)")
    parser.add_argument("--output-dir", "-o", help="Directory to save the report into (default: current directory)")
    parser.add_argument("--filename", help="Output filename (default: generated from the file names and date)")
    parser.add_argument("--stdout", action="store_true", help="Print the report instead of saving it")
    _add_option_arguments(parser)
    return parser


def _create_preview_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diffexport preview",
        description="Render diff lines as HTML and open the report in a web browser.",
        parents=[create_common_parser()],
    )
    parser.add_argument("input", help="JSON file with diff lines ('-' for stdin)")
    _add_option_arguments(parser)
    return parser


def load_diff_input(source: str) -> tuple[list[DiffLine], Optional[FileInfo], Optional[FileInfo]]:
    """Load diff lines and optional file metadata from a JSON document.

    Parameters
    ----------
    source : str
        Path to a JSON file, or ``-`` for standard input

    Returns
    -------
    tuple
        ``(lines, original_file, modified_file)``

    Raises
    ------
    InputError
        If the input cannot be read, is not valid JSON, or has the wrong shape

    """
    try:
        if source == "-":
            raw = sys.stdin.read()
        else:
            raw = Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise InputError(f"Could not read diff input: {e}", input_path=source, original_error=e) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in diff input: {e}", input_path=source, original_error=e) from e

    original_file: Optional[FileInfo] = None
    modified_file: Optional[FileInfo] = None

    if isinstance(data, Mapping):
        raw_lines = data.get("lines")
        original_file = _file_info_from(data, source, "originalFile", "original_file")
        modified_file = _file_info_from(data, source, "modifiedFile", "modified_file")
    else:
        raw_lines = data

    if not isinstance(raw_lines, list):
        raise InputError("Diff input must be a list of lines or an object with a 'lines' list", input_path=source)

    lines: list[DiffLine] = []
    for index, item in enumerate(raw_lines):
        if not isinstance(item, Mapping):
            raise InputError(f"Diff line {index} must be an object, got {type(item).__name__}", input_path=source)
        try:
            lines.append(DiffLine.from_dict(item))
        except (DiffExportError, TypeError, ValueError) as e:
            raise InputError(f"Invalid diff line {index}: {e}", input_path=source, original_error=e) from e

    logger.debug(f"Loaded {len(lines)} diff lines from {source}")
    return lines, original_file, modified_file


def _file_info_from(data: Mapping[str, Any], source: str, *keys: str) -> Optional[FileInfo]:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, Mapping):
            raise InputError(f"'{key}' must be an object", input_path=source)
        try:
            return FileInfo.from_dict(value)
        except (DiffExportError, TypeError, ValueError) as e:
            raise InputError(f"Invalid '{key}': {e}", input_path=source, original_error=e) from e
    return None


def _describe_file(path: Optional[str]) -> Optional[FileInfo]:
    if path is None:
        return None
    try:
        return FileInfo.from_path(path)
    except OSError as e:
        raise InputError(f"Could not read file metadata: {e}", input_path=path, original_error=e) from e


def build_options(
    format_name: str,
    parsed: argparse.Namespace,
    config: Mapping[str, Any],
    original_file: Optional[FileInfo] = None,
    modified_file: Optional[FileInfo] = None,
) -> BaseExportOptions:
    """Build export options from configuration defaults and command-line flags.

    The per-format config table provides defaults; any flag given on the
    command line overrides it. File metadata from ``--original-file`` and
    ``--modified-file`` takes precedence over metadata embedded in the input.

    Raises
    ------
    ValidationError
        If an option does not apply to the format or has an invalid value

    """
    values: dict[str, Any] = get_format_section(dict(config), format_name)

    if original_file is not None:
        values["original_file"] = original_file
    if modified_file is not None:
        values["modified_file"] = modified_file

    for name in (
        "title",
        "include_line_numbers",
        "include_stats",
        "include_header",
        "theme",
        "view_mode",
        "differences_only",
        "render_mode",
    ):
        value = getattr(parsed, name, None)
        if value is not None:
            values[name] = value

    for name in ("original_file", "modified_file"):
        described = _describe_file(getattr(parsed, name, None))
        if described is not None:
            values[name] = described

    filename = getattr(parsed, "filename", None)
    if filename:
        values["filename"] = filename

    return get_options_class(format_name).from_mapping(values)


def handle_export_command(args: list[str]) -> int:
    """Handle the ``export`` command.

    Parameters
    ----------
    args : list[str]
        Command line arguments after ``export``

    Returns
    -------
    int
        Exit code

    """
    parser = _create_export_parser()
    parsed = parser.parse_args(args)

    try:
        config = load_config_with_priority(parsed.config, config_path_from_env())
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    setup_logging(parsed, config)

    try:
        format_name = parsed.format or str(config.get("format", FORMAT_HTML))
        # Fail on an unknown format before reading any input
        get_default_registry().require(format_name)

        lines, original_file, modified_file = load_diff_input(parsed.input)
        options = build_options(format_name, parsed, config, original_file, modified_file)

        if parsed.stdout:
            result = ExportService().export(lines, format_name, options)
            if isinstance(result.content, str):
                sys.stdout.write(result.content)
                if not result.content.endswith("\n"):
                    sys.stdout.write("\n")
            else:
                sys.stdout.buffer.write(result.content.data)
            return EXIT_SUCCESS

        output_dir = parsed.output_dir or config.get("output_dir")
        sink = LocalDeliverySink(output_dir=output_dir, open_browser=False)
        service = ExportService(sink=sink, scheduler=run_immediately)
        service.export_and_download(lines, format_name, options)
        print(f"Saved to: {sink.saved_paths[-1]}")
        return EXIT_SUCCESS

    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Exception as e:
        logger.debug("Export failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


def handle_preview_command(args: list[str]) -> int:
    """Handle the ``preview`` command.

    Parameters
    ----------
    args : list[str]
        Command line arguments after ``preview``

    Returns
    -------
    int
        Exit code

    """
    parser = _create_preview_parser()
    parsed = parser.parse_args(args)

    try:
        config = load_config_with_priority(parsed.config, config_path_from_env())
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    setup_logging(parsed, config)

    try:
        lines, original_file, modified_file = load_diff_input(parsed.input)
        options = build_options(FORMAT_HTML, parsed, config, original_file, modified_file)

        sink = LocalDeliverySink(open_browser=True)
        ExportService(sink=sink).export_html_and_preview(lines, options)

        surface = sink.surfaces[-1]
        print(f"Preview: {surface.path}")
        return EXIT_SUCCESS

    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Exception as e:
        logger.debug("Preview failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
