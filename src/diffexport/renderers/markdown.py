#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/renderers/markdown.py
"""Markdown rendering of diff lines.

The Markdown report starts with a title, optionally followed by file
information and statistics tables, and ends with the diff itself either as a
fenced ``diff`` code block (rendered with +/- colouring by most viewers) or as
inline formatted lines.

"""

from __future__ import annotations

from typing import Sequence, cast

from diffexport.constants import DEFAULT_REPORT_TITLE, EXTENSION_MARKDOWN, MIME_TYPE_MARKDOWN
from diffexport.models import DiffLine, FileInfo
from diffexport.options.base import BaseExportOptions
from diffexport.options.markdown import MarkdownExportOptions
from diffexport.renderers.base import BaseRenderer

_INLINE_TEMPLATES = {
    "added": "**{content}** (added)",
    "removed": "~~{content}~~ (removed)",
    "modified": "*{content}* (modified)",
}


class MarkdownRenderer(BaseRenderer):
    """Render diff lines to a Markdown report.

    In code block mode the line content is emitted verbatim inside the fence;
    in inline mode Markdown metacharacters are backslash-escaped so that
    content cannot alter the surrounding formatting.
    """

    options_class = MarkdownExportOptions

    def render(self, lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> str:
        """Render diff lines to Markdown.

        Parameters
        ----------
        lines : sequence of DiffLine
            Diff lines in display order
        options : MarkdownExportOptions or None, default None
            Rendering options

        Returns
        -------
        str
            Markdown document

        """
        opts = cast(MarkdownExportOptions, self._resolve_options(options))
        sections: list[str] = []

        # None selects the default title, an empty string drops it
        title = DEFAULT_REPORT_TITLE if opts.title is None else opts.title
        if title:
            sections.append(f"# {title}")
            sections.append("")

        if opts.include_header and opts.original_file and opts.modified_file:
            sections.append(self._render_header(opts, opts.original_file, opts.modified_file))
            sections.append("")

        if opts.include_stats:
            sections.append(self._render_stats(lines))
            sections.append("")

        sections.append("## Diff Content")
        sections.append("")
        if opts.use_code_blocks:
            sections.append(self._render_code_block(lines, opts))
        else:
            sections.append("\n".join(self._format_inline_line(line, opts) for line in lines))

        return "\n".join(sections)

    def get_mime_type(self) -> str:
        """Return the Markdown media type."""
        return MIME_TYPE_MARKDOWN

    def get_file_extension(self) -> str:
        """Return ``.md``."""
        return EXTENSION_MARKDOWN

    def _render_header(self, opts: MarkdownExportOptions, original: FileInfo, modified: FileInfo) -> str:
        parts = ["## File Information", ""]
        if opts.generated_at is not None:
            parts.append(f"**Generated:** {self.format_date(opts.generated_at)}")
            parts.append("")
        parts.extend(
            [
                "| File | Name | Size |",
                "|------|------|------|",
                f"| Original | `{original.name}` | {original.size} bytes |",
                f"| Modified | `{modified.name}` | {modified.size} bytes |",
            ]
        )
        return "\n".join(parts)

    def _render_stats(self, lines: Sequence[DiffLine]) -> str:
        stats = self.get_line_stats(lines)
        return "\n".join(
            [
                "## Statistics",
                "",
                "| Metric | Count |",
                "|--------|-------|",
                f"| Added | `+{stats.added}` |",
                f"| Removed | `-{stats.removed}` |",
                f"| Modified | `~{stats.modified}` |",
                f"| Unchanged | `{stats.unchanged}` |",
                f"| Similarity | **{stats.similarity}%** |",
            ]
        )

    def _render_code_block(self, lines: Sequence[DiffLine], opts: MarkdownExportOptions) -> str:
        body = "\n".join(self._line_prefix(line, opts) + (line.content or "") for line in lines)
        return f"```diff\n{body}\n```"

    def _format_inline_line(self, line: DiffLine, opts: MarkdownExportOptions) -> str:
        content = self.escape_markdown(line.content or "")
        template = _INLINE_TEMPLATES.get(line.type)
        formatted = template.format(content=content) if template else content
        return self._line_prefix(line, opts) + formatted

    def _line_prefix(self, line: DiffLine, opts: MarkdownExportOptions) -> str:
        parts: list[str] = []
        if opts.include_line_numbers:
            parts.append(f"{line.line_number}:")
        if opts.include_diff_symbols:
            parts.append(self.get_prefix_symbol(line.type))
        return " ".join(parts) + " " if parts else ""
