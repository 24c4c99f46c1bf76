"""Command-line interface for the diffexport library.

Diff lines are read from a JSON file (or stdin) and exported as a report.

Basic usage::

    diffexport export changes.json --format markdown --output-dir reports
    diffexport export changes.json -f plaintext --stdout
    diffexport preview changes.json --theme dark --view-mode side-by-side
    diffexport list-formats --rich

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

from diffexport import __version__
from diffexport.cli.builder import EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from diffexport.cli.commands import COMMANDS, dispatch_command


def _usage() -> str:
    lines = [
        "usage: diffexport <command> [options]",
        "",
        "Export computed diffs as HTML, plain text and Markdown reports.",
        "",
        "commands:",
    ]
    for name, description in COMMANDS.items():
        lines.append(f"  {name:<14} {description}")
    lines.extend(["", "Run 'diffexport <command> --help' for command options."])
    return "\n".join(lines)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI entry point."""
    if args is None:
        args = sys.argv[1:]

    if not args or args[0] in ("-h", "--help", "help"):
        print(_usage())
        return EXIT_SUCCESS

    if args[0] in ("-V", "--version"):
        print(f"diffexport {__version__}")
        return EXIT_SUCCESS

    result = dispatch_command(args)
    if result is not None:
        return result

    print(f"Error: Unknown command '{args[0]}'", file=sys.stderr)
    print(_usage(), file=sys.stderr)
    return EXIT_VALIDATION_ERROR


if __name__ == "__main__":
    sys.exit(main())
