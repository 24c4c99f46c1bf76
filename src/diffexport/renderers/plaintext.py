#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/renderers/plaintext.py
"""Plain text rendering of diff lines.

This module provides the PlainTextRenderer class which writes a diff as an
unformatted text report: an optional header with the compared files, an
optional statistics block, a separator rule and one line per diff line with
its line number and prefix symbol. The output is suitable for terminals,
email bodies and log attachments.

"""

from __future__ import annotations

from typing import Sequence, cast

from diffexport.constants import (
    DEFAULT_LINE_NUMBER_WIDTH,
    DEFAULT_REPORT_TITLE,
    EXTENSION_PLAINTEXT,
    MIME_TYPE_PLAINTEXT,
)
from diffexport.models import DiffLine, FileInfo
from diffexport.options.base import BaseExportOptions
from diffexport.options.plaintext import PlainTextExportOptions
from diffexport.renderers.base import BaseRenderer


class PlainTextRenderer(BaseRenderer):
    """Render diff lines to a plain text report.

    Examples
    --------
        >>> from diffexport.models import DiffLine
        >>> renderer = PlainTextRenderer()
        >>> text = renderer.render([DiffLine(1, "hello", "added")])
        >>> text.splitlines()[-1]
        '   1 + hello'

    """

    options_class = PlainTextExportOptions

    def render(self, lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> str:
        """Render diff lines to plain text.

        Parameters
        ----------
        lines : sequence of DiffLine
            Diff lines in display order
        options : PlainTextExportOptions or None, default None
            Rendering options

        Returns
        -------
        str
            Plain text report

        """
        opts = cast(PlainTextExportOptions, self._resolve_options(options))
        sections: list[str] = []

        if opts.include_header and opts.original_file and opts.modified_file:
            sections.append(self._render_header(opts, opts.original_file, opts.modified_file))
            sections.append("")

        if opts.include_stats:
            sections.append(self._render_stats(lines))
            sections.append("")

        sections.append("=" * opts.column_width)
        sections.append("")
        sections.append("\n".join(self._format_line(line, opts) for line in lines))

        return "\n".join(sections)

    def get_mime_type(self) -> str:
        """Return the plain text media type."""
        return MIME_TYPE_PLAINTEXT

    def get_file_extension(self) -> str:
        """Return ``.txt``."""
        return EXTENSION_PLAINTEXT

    def _render_header(self, opts: PlainTextExportOptions, original: FileInfo, modified: FileInfo) -> str:
        title = opts.title or DEFAULT_REPORT_TITLE
        parts = [title, "=" * len(title), ""]

        if opts.generated_at is not None:
            parts.append(f"Generated: {self.format_date(opts.generated_at)}")
            parts.append("")

        parts.append(f"Original:  {original.name} ({original.size} bytes)")
        parts.append(f"Modified:  {modified.name} ({modified.size} bytes)")
        return "\n".join(parts)

    def _render_stats(self, lines: Sequence[DiffLine]) -> str:
        stats = self.get_line_stats(lines)
        return "\n".join(
            [
                "Statistics:",
                f"  Added:     {stats.added}",
                f"  Removed:   {stats.removed}",
                f"  Modified:  {stats.modified}",
                f"  Unchanged: {stats.unchanged}",
                f"  Similarity: {stats.similarity}%",
            ]
        )

    def _format_line(self, line: DiffLine, opts: PlainTextExportOptions) -> str:
        parts: list[str] = []
        if opts.include_line_numbers:
            parts.append(str(line.line_number).rjust(DEFAULT_LINE_NUMBER_WIDTH))
        if opts.include_diff_symbols:
            parts.append(self.get_prefix_symbol(line.type))
        parts.append(line.content or "")
        return " ".join(parts)
