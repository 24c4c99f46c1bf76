#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/diffexport/cli/commands/__init__.py
"""CLI command handlers for diffexport.

Each subcommand lives in its own module and is imported only when it is
dispatched, so ``diffexport --help`` stays fast.
"""

import logging
import sys

logger = logging.getLogger(__name__)

COMMANDS = {
    "export": "Render diff lines and save the report to a file",
    "preview": "Render diff lines as HTML and open them in a web browser",
    "list-formats": "Show the registered export formats",
}


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Run the subcommand named by the first argument.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int or None
        Exit code if a command was handled, None otherwise

    """
    if not args:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] == "export":
        from diffexport.cli.commands.export import handle_export_command

        return handle_export_command(args[1:])

    if args[0] == "preview":
        from diffexport.cli.commands.export import handle_preview_command

        return handle_preview_command(args[1:])

    if args[0] == "list-formats":
        from diffexport.cli.commands.formats import handle_list_formats_command

        return handle_list_formats_command(args[1:])

    return None
