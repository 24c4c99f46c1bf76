#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/diffexport/cli/commands/formats.py
"""Format listing command for the diffexport CLI.

Shows every format in the default renderer registry with its file extension
and media type, as plain text or as a rich table.
"""

import argparse
from pathlib import Path
from typing import Any

from diffexport.cli.builder import EXIT_FORMAT_ERROR, EXIT_SUCCESS
from diffexport.registry import get_default_registry


def _create_list_formats_parser() -> argparse.ArgumentParser:
    """Create argparse parser for the list-formats command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser for list-formats command

    """
    parser = argparse.ArgumentParser(
        prog="diffexport list-formats", description="Show the registered export formats.", add_help=True
    )
    parser.add_argument("format", nargs="?", help="Show details for a specific format only")
    parser.add_argument("--rich", action="store_true", help="Use rich terminal output with formatting")
    return parser


def _gather_format_info(formats: list[str]) -> list[dict[str, Any]]:
    registry = get_default_registry()
    info_list: list[dict[str, Any]] = []
    for format_name in formats:
        renderer = registry.require(format_name)
        info_list.append(
            {
                "name": format_name,
                "renderer": type(renderer).__name__,
                "extension": Path(renderer.generate_filename()).suffix,
                "mime_type": renderer.get_mime_type(),
            }
        )
    return info_list


def _render_rich_formats(info_list: list[dict[str, Any]]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title=f"diffexport formats ({len(info_list)} formats)")
    table.add_column("Format", style="cyan", no_wrap=True)
    table.add_column("Extension", style="yellow")
    table.add_column("MIME Type", style="green")
    table.add_column("Renderer", style="blue")

    for info in info_list:
        table.add_row(info["name"], info["extension"], info["mime_type"], info["renderer"])

    Console().print(table)


def _render_plain_formats(info_list: list[dict[str, Any]]) -> None:
    print(f"{'Format':<12} {'Extension':<10} {'MIME Type':<30} {'Renderer'}")
    print("-" * 80)
    for info in info_list:
        print(f"{info['name']:<12} {info['extension']:<10} {info['mime_type']:<30} {info['renderer']}")


def handle_list_formats_command(args: list[str] | None = None) -> int:
    """Handle the ``list-formats`` command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments after ``list-formats``

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = _create_list_formats_parser()
    parsed = parser.parse_args(args or [])

    registry = get_default_registry()
    if parsed.format:
        if not registry.is_format_supported(parsed.format):
            supported = ", ".join(registry.list_supported_formats())
            print(f"Error: Unknown format '{parsed.format}'. Supported formats: {supported}")
            return EXIT_FORMAT_ERROR
        formats = [parsed.format]
    else:
        formats = registry.list_supported_formats()

    info_list = _gather_format_info(formats)
    if parsed.rich:
        _render_rich_formats(info_list)
    else:
        _render_plain_formats(info_list)
    return EXIT_SUCCESS
