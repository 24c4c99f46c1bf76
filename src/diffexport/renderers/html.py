#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/renderers/html.py
"""HTML rendering of diff lines as a standalone report.

The renderer writes a self-contained HTML5 page: theme CSS, a collapsible
header with the compared files, inline statistics badges, the diff and a
footer. Two layouts are supported (``unified`` and ``side-by-side``) in two
render modes:

- ``markup`` writes one element per line. Removed lines followed by added
  lines are paired by position and similar pairs get character-level
  highlighting.
- ``svg`` draws each panel with :class:`SvgDiffRenderer` and embeds it as a
  base64 data URI image.

"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Mapping, Sequence, cast

from diffexport.constants import (
    DEFAULT_HTML_TITLE,
    DEFAULT_SVG_SIDE_BY_SIDE_WIDTH,
    DEFAULT_SVG_UNIFIED_WIDTH,
    EXTENSION_HTML,
    GENERATOR_NAME,
    MIME_TYPE_HTML,
    NO_DIFFERENCES_MESSAGE,
)
from diffexport.models import CharSegment, DiffLine, FileInfo
from diffexport.options.base import BaseExportOptions
from diffexport.options.html import HtmlExportOptions
from diffexport.renderers.base import BaseRenderer
from diffexport.renderers.svg import SvgDiffRenderer
from diffexport.utils.char_diff import compute_line_segments

logger = logging.getLogger(__name__)

_THEME_VARIABLES: dict[str, dict[str, str]] = {
    "light": {
        "bg-color": "#ffffff",
        "text-color": "#333333",
        "border-color": "#e5e7eb",
        "header-bg": "#f8fafc",
        "added-bg": "#dcfce7",
        "added-border": "#22c55e",
        "added-text": "#166534",
        "removed-bg": "#fee2e2",
        "removed-border": "#ef4444",
        "removed-text": "#991b1b",
        "modified-bg": "#fef3c7",
        "modified-border": "#f59e0b",
        "modified-text": "#92400e",
        "unchanged-bg": "#f9fafb",
        "unchanged-border": "#d1d5db",
        "unchanged-text": "#6b7280",
        "char-added-bg": "#86efac",
        "char-removed-bg": "#fca5a5",
    },
    "dark": {
        "bg-color": "#1a1a1a",
        "text-color": "#e0e0e0",
        "border-color": "#374151",
        "header-bg": "#111827",
        "added-bg": "#0d4f28",
        "added-border": "#16a34a",
        "added-text": "#4ade80",
        "removed-bg": "#4c0f1a",
        "removed-border": "#dc2626",
        "removed-text": "#f87171",
        "modified-bg": "#451a03",
        "modified-border": "#d97706",
        "modified-text": "#fbbf24",
        "unchanged-bg": "#1f2937",
        "unchanged-border": "#4b5563",
        "unchanged-text": "#9ca3af",
        "char-added-bg": "#166534",
        "char-removed-bg": "#991b1b",
    },
}

_BASE_CSS = """
    * {
      margin: 0;
      padding: 0;
      box-sizing: border-box;
    }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', sans-serif;
      line-height: 1.6;
      color: var(--text-color);
      background-color: var(--bg-color);
    }
    .container {
      max-width: 1200px;
      margin: 0 auto;
      padding: 20px;
    }
    .report-title {
      font-size: 20px;
      margin-bottom: 16px;
    }
    .report-header {
      background: var(--header-bg);
      padding: 8px 16px;
      border-radius: 8px;
      border: 1px solid var(--border-color);
      margin-bottom: 16px;
    }
    .header-summary {
      display: flex;
      align-items: center;
      justify-content: space-between;
      cursor: pointer;
      list-style: none;
      user-select: none;
    }
    .header-summary::-webkit-details-marker {
      display: none;
    }
    .header-summary h1 {
      font-size: 20px;
      flex: 1;
    }
    .toggle-icon {
      font-size: 14px;
      transition: transform 0.2s ease;
      margin-left: 12px;
    }
    .header-details[open] .toggle-icon {
      transform: rotate(90deg);
    }
    .metadata {
      margin-top: 16px;
      padding-top: 16px;
      border-top: 1px solid var(--border-color);
    }
    .metadata-row .label {
      font-weight: bold;
      margin-right: 8px;
    }
    .file-comparison {
      display: grid;
      grid-template-columns: 1fr auto 1fr;
      gap: 24px;
      align-items: center;
      margin-top: 16px;
    }
    .file-info h3 {
      font-size: 16px;
      margin-bottom: 12px;
    }
    .file-details div {
      margin-bottom: 4px;
      font-size: 14px;
    }
    .comparison-arrow {
      font-size: 24px;
      text-align: center;
    }
    .stats-section {
      margin-bottom: 16px;
      padding: 0 16px;
    }
    .stats-inline {
      display: flex;
      align-items: center;
      gap: 16px;
      flex-wrap: wrap;
      font-size: 0.75rem;
      font-weight: 500;
    }
    .stat-item {
      padding: 4px 12px;
      border-radius: 4px;
      font-family: 'SF Mono', Monaco, 'Cascadia Code', monospace;
      white-space: nowrap;
    }
    .stat-item.added {
      background: var(--added-bg);
      color: var(--added-text);
      border: 1px solid var(--added-border);
    }
    .stat-item.removed {
      background: var(--removed-bg);
      color: var(--removed-text);
      border: 1px solid var(--removed-border);
    }
    .stat-item.modified {
      background: var(--modified-bg);
      color: var(--modified-text);
      border: 1px solid var(--modified-border);
    }
    .stat-item.unchanged {
      background: var(--unchanged-bg);
      color: var(--unchanged-text);
      border: 1px solid var(--unchanged-border);
    }
    .stat-item.similarity {
      border: 1px solid var(--border-color);
      font-weight: 600;
    }
    .diff-content {
      border: 1px solid var(--border-color);
      border-radius: 6px;
      overflow: hidden;
      font-family: 'SF Mono', Monaco, 'Cascadia Code', monospace;
      font-size: 13px;
    }
    .diff-empty {
      text-align: center;
      padding: 32px;
      color: var(--unchanged-text);
    }
    .diff-line {
      display: flex;
      border-left: 4px solid transparent;
      white-space: pre-wrap;
      word-break: break-word;
    }
    .diff-line-added {
      background: var(--added-bg);
      border-left-color: var(--added-border);
      color: var(--added-text);
    }
    .diff-line-removed {
      background: var(--removed-bg);
      border-left-color: var(--removed-border);
      color: var(--removed-text);
    }
    .diff-line-modified {
      background: var(--modified-bg);
      border-left-color: var(--modified-border);
      color: var(--modified-text);
    }
    .diff-line-unchanged {
      background: var(--unchanged-bg);
      border-left-color: var(--unchanged-border);
    }
    .line-number {
      min-width: 56px;
      padding-right: 8px;
      text-align: right;
      color: var(--unchanged-text);
      user-select: none;
    }
    .line-prefix {
      width: 20px;
      text-align: center;
      opacity: 0.5;
      user-select: none;
    }
    .line-content {
      flex: 1;
    }
    .diff-side-by-side {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 16px;
    }
    .panel-title {
      font-weight: 500;
      font-size: 14px;
      margin-bottom: 8px;
      padding: 0 16px;
    }
    .diff-image {
      display: block;
      max-width: 100%;
      height: auto;
    }
    .report-footer {
      margin-top: 48px;
      padding: 24px;
      text-align: center;
      border-top: 1px solid var(--border-color);
      color: var(--unchanged-text);
    }
    @media print {
      .container {
        max-width: none;
        padding: 16px;
      }
      .report-header,
      .report-footer {
        break-inside: avoid;
      }
      .toggle-icon {
        display: none;
      }
    }
    @media (max-width: 768px) {
      .file-comparison,
      .diff-side-by-side {
        grid-template-columns: 1fr;
      }
    }
"""

_CHAR_DIFF_CSS = """
    .char-added {
      background: var(--char-added-bg);
      border-radius: 2px;
    }
    .char-removed {
      background: var(--char-removed-bg);
      border-radius: 2px;
      text-decoration: line-through;
    }
"""


class HtmlRenderer(BaseRenderer):
    """Render diff lines to a standalone HTML report.

    Examples
    --------
    Side-by-side report in the dark theme:
        >>> from diffexport.options import HtmlExportOptions
        >>> renderer = HtmlRenderer()
        >>> html = renderer.render(lines, HtmlExportOptions(theme="dark", view_mode="side-by-side"))

    """

    options_class = HtmlExportOptions

    def render(self, lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> str:
        """Render diff lines to an HTML document.

        Parameters
        ----------
        lines : sequence of DiffLine
            Diff lines in display order
        options : HtmlExportOptions or None, default None
            Rendering options

        Returns
        -------
        str
            Complete HTML document

        """
        opts = cast(HtmlExportOptions, self._resolve_options(options))
        visible = self.filter_lines(lines, opts.differences_only)
        title = opts.title or DEFAULT_HTML_TITLE

        segments: Mapping[int, list[CharSegment]] = {}
        diff_output = StringIO()
        if opts.render_mode == "svg":
            self._write_svg_view(visible, opts, diff_output)
        else:
            segments = compute_line_segments(visible, opts.char_diff_threshold)
            if opts.view_mode == "side-by-side":
                self._write_side_by_side_markup(visible, segments, opts, diff_output)
            else:
                self._write_unified_markup(visible, segments, opts, diff_output)

        logger.debug(
            f"Rendered HTML diff: {len(lines)} lines ({len(visible)} visible), "
            f"view={opts.view_mode}, mode={opts.render_mode}"
        )

        output = StringIO()
        self._write_html_prefix(output, opts, title, include_char_css=bool(segments))
        if opts.include_header and opts.original_file and opts.modified_file:
            self._write_header(output, opts, title, opts.original_file, opts.modified_file)
        else:
            output.write(f"    <h1 class=\"report-title\">{self.escape_html(title)}</h1>\n")
        if opts.include_stats:
            self._write_stats(output, visible)
        output.write('    <section class="diff-section">\n')
        output.write(diff_output.getvalue())
        output.write("    </section>\n")
        if opts.include_footer:
            output.write('    <footer class="report-footer">\n')
            output.write(f"      <p>Generated by {GENERATOR_NAME}</p>\n")
            output.write("    </footer>\n")
        self._write_html_suffix(output)
        return output.getvalue()

    def get_mime_type(self) -> str:
        """Return the HTML media type."""
        return MIME_TYPE_HTML

    def get_file_extension(self) -> str:
        """Return ``.html``."""
        return EXTENSION_HTML

    def render_char_segments(self, segments: Sequence[CharSegment]) -> str:
        """Render character segments as escaped HTML.

        Unchanged text is emitted as-is; added and removed runs are wrapped in
        ``span.char-added`` / ``span.char-removed``. Empty segments produce
        nothing.
        """
        parts: list[str] = []
        for segment in segments:
            if not segment.text:
                continue
            text = self.escape_html(segment.text)
            if segment.type == "unchanged":
                parts.append(text)
            else:
                parts.append(f'<span class="char-{segment.type}">{text}</span>')
        return "".join(parts)

    def _write_html_prefix(self, output: StringIO, opts: HtmlExportOptions, title: str, include_char_css: bool) -> None:
        output.write("<!DOCTYPE html>\n")
        output.write(f'<html lang="en" data-theme="{opts.theme}">\n')
        output.write("<head>\n")
        output.write('  <meta charset="UTF-8">\n')
        output.write('  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n')
        output.write(f'  <meta name="generator" content="{GENERATOR_NAME}">\n')
        output.write(f"  <title>{self.escape_html(title)}</title>\n")
        output.write("  <style>\n")
        output.write(self._get_css(opts.theme, include_char_css))
        output.write("  </style>\n")
        output.write("</head>\n")
        output.write("<body>\n")
        output.write('  <div class="container">\n')

    def _write_html_suffix(self, output: StringIO) -> None:
        output.write("  </div>\n")
        output.write("</body>\n")
        output.write("</html>\n")

    def _get_css(self, theme: str, include_char_css: bool) -> str:
        variables = "\n".join(f"      --{name}: {value};" for name, value in _THEME_VARIABLES[theme].items())
        css = f"    :root {{\n{variables}\n    }}\n{_BASE_CSS}"
        if include_char_css:
            css += _CHAR_DIFF_CSS
        return css

    def _write_header(
        self,
        output: StringIO,
        opts: HtmlExportOptions,
        title: str,
        original: FileInfo,
        modified: FileInfo,
    ) -> None:
        output.write('    <header class="report-header">\n')
        output.write('      <details class="header-details" open>\n')
        output.write('        <summary class="header-summary">\n')
        output.write(f"          <h1>{self.escape_html(title)}</h1>\n")
        output.write('          <span class="toggle-icon">&#9654;</span>\n')
        output.write("        </summary>\n")
        output.write('        <div class="metadata">\n')
        if opts.generated_at is not None:
            output.write('          <div class="metadata-row">\n')
            output.write('            <span class="label">Generated:</span>\n')
            output.write(f'            <span class="value">{self.format_date(opts.generated_at)}</span>\n')
            output.write("          </div>\n")
        output.write('          <div class="file-comparison">\n')
        self._write_file_info(output, "original-file", "Original File", original)
        output.write('            <div class="comparison-arrow">&harr;</div>\n')
        self._write_file_info(output, "modified-file", "Modified File", modified)
        output.write("          </div>\n")
        output.write("        </div>\n")
        output.write("      </details>\n")
        output.write("    </header>\n")

    def _write_file_info(self, output: StringIO, css_class: str, heading: str, info: FileInfo) -> None:
        output.write(f'            <div class="file-info {css_class}">\n')
        output.write(f"              <h3>{heading}</h3>\n")
        output.write('              <div class="file-details">\n')
        output.write(f"                <div><strong>Name:</strong> {self.escape_html(info.name)}</div>\n")
        output.write(f"                <div><strong>Size:</strong> {info.size:,} bytes</div>\n")
        output.write(f"                <div><strong>Lines:</strong> {info.line_count:,}</div>\n")
        if info.last_modified is not None:
            output.write(
                f"                <div><strong>Modified:</strong> {self.format_date(info.last_modified)}</div>\n"
            )
        output.write("              </div>\n")
        output.write("            </div>\n")

    def _write_stats(self, output: StringIO, lines: Sequence[DiffLine]) -> None:
        stats = self.get_line_stats(lines)
        output.write('    <section class="stats-section">\n')
        output.write('      <div class="stats-inline">\n')
        output.write(f'        <span class="stat-item added">+{stats.added:,}</span>\n')
        output.write(f'        <span class="stat-item removed">-{stats.removed:,}</span>\n')
        output.write(f'        <span class="stat-item modified">~{stats.modified:,}</span>\n')
        output.write(f'        <span class="stat-item unchanged">={stats.unchanged:,}</span>\n')
        output.write(f'        <span class="stat-item similarity">{stats.similarity}%</span>\n')
        output.write("      </div>\n")
        output.write("    </section>\n")

    def _write_unified_markup(
        self,
        lines: Sequence[DiffLine],
        segments: Mapping[int, list[CharSegment]],
        opts: HtmlExportOptions,
        output: StringIO,
    ) -> None:
        if not lines:
            output.write(f'      <div class="diff-empty">{NO_DIFFERENCES_MESSAGE}</div>\n')
            return

        output.write('      <div class="diff-content diff-unified">\n')
        for index, line in enumerate(lines):
            output.write(self._render_line(line, line.line_number, segments.get(index), opts))
        output.write("      </div>\n")

    def _write_side_by_side_markup(
        self,
        lines: Sequence[DiffLine],
        segments: Mapping[int, list[CharSegment]],
        opts: HtmlExportOptions,
        output: StringIO,
    ) -> None:
        original_indices = [i for i, line in enumerate(lines) if line.type != "added"]
        modified_indices = [i for i, line in enumerate(lines) if line.type != "removed"]

        if not original_indices and not modified_indices:
            output.write(f'      <div class="diff-empty">{NO_DIFFERENCES_MESSAGE}</div>\n')
            return

        output.write('      <div class="diff-side-by-side">\n')
        for label, css_class, indices in (
            ("Original", "diff-panel-original", original_indices),
            ("Modified", "diff-panel-modified", modified_indices),
        ):
            output.write(f'        <div class="diff-panel {css_class}">\n')
            output.write(f'          <div class="panel-title">{label}</div>\n')
            output.write('          <div class="diff-content">\n')
            for index in indices:
                line = lines[index]
                if css_class == "diff-panel-original":
                    number = line.original_line_number
                else:
                    number = line.new_line_number
                output.write(self._render_line(line, number or line.line_number, segments.get(index), opts))
            output.write("          </div>\n")
            output.write("        </div>\n")
        output.write("      </div>\n")

    def _render_line(
        self,
        line: DiffLine,
        number: int,
        segments: Sequence[CharSegment] | None,
        opts: HtmlExportOptions,
    ) -> str:
        parts = [f'<div class="diff-line diff-line-{line.type}">']
        if opts.include_line_numbers:
            parts.append(f'<span class="line-number">{number}</span>')
        parts.append(f'<span class="line-prefix">{self.escape_html(self.get_prefix_symbol(line.type))}</span>')
        if segments is not None:
            content = self.render_char_segments(segments)
        else:
            content = self.escape_html(line.content or "")
        parts.append(f'<span class="line-content">{content}</span>')
        parts.append("</div>\n")
        return "".join(parts)

    def _write_svg_view(self, lines: Sequence[DiffLine], opts: HtmlExportOptions, output: StringIO) -> None:
        svg_renderer = SvgDiffRenderer(opts.svg, theme=opts.theme, include_line_numbers=opts.include_line_numbers)

        if opts.view_mode == "side-by-side":
            original_lines = [line for line in lines if line.type != "added"]
            modified_lines = [line for line in lines if line.type != "removed"]
            if not original_lines and not modified_lines:
                output.write(f'      <div class="diff-empty">{NO_DIFFERENCES_MESSAGE}</div>\n')
                return

            width = opts.svg.width or DEFAULT_SVG_SIDE_BY_SIDE_WIDTH
            output.write('      <div class="diff-side-by-side">\n')
            for label, alt, panel_lines in (
                ("Original", "Original file diff", original_lines),
                ("Modified", "Modified file diff", modified_lines),
            ):
                uri = svg_renderer.render_data_uri(panel_lines, width=width)
                output.write('        <div class="diff-panel">\n')
                output.write(f'          <div class="panel-title">{label}</div>\n')
                output.write(f'          <img class="diff-image" src="{uri}" alt="{alt}">\n')
                output.write("        </div>\n")
            output.write("      </div>\n")
            return

        if not lines:
            output.write(f'      <div class="diff-empty">{NO_DIFFERENCES_MESSAGE}</div>\n')
            return

        uri = svg_renderer.render_data_uri(lines, width=opts.svg.width or DEFAULT_SVG_UNIFIED_WIDTH)
        output.write(f'      <img class="diff-image" src="{uri}" alt="Unified diff view">\n')
