"""Configuration options for Markdown export."""

from __future__ import annotations

from dataclasses import dataclass, field

from diffexport.options.base import BaseExportOptions


@dataclass(frozen=True)
class MarkdownExportOptions(BaseExportOptions):
    """Configuration options for Markdown export.

    Line numbers are off by default; they add little inside a fenced block.

    Parameters
    ----------
    use_code_blocks : bool, default True
        Emit the diff as a fenced ``diff`` code block instead of inline
        emphasis markup
    include_diff_symbols : bool, default True
        Prefix lines with ``+``, ``-``, ``~`` or a space

    """

    include_line_numbers: bool = field(
        default=False,
        metadata={"help": "Include line numbers", "cli_name": "line-numbers"},
    )
    use_code_blocks: bool = field(
        default=True,
        metadata={"help": "Render the diff as a fenced code block", "cli_name": "no-code-blocks"},
    )
    include_diff_symbols: bool = field(
        default=True,
        metadata={"help": "Prefix lines with diff symbols (+/-/~)", "cli_name": "no-diff-symbols"},
    )
