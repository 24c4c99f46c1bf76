#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/renderers/svg.py
"""SVG rendering of a single diff panel.

The HTML renderer uses this module in its ``svg`` render mode: each panel
(the unified view, or the original and modified halves of the side-by-side
view) becomes one SVG image embedded as a base64 data URI. Each line is drawn
as a coloured background, a left border in the change colour, an optional
line number, the prefix symbol and the line text.

"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from html import escape
from typing import Sequence

from diffexport.constants import (
    DEFAULT_SVG_SIDE_BY_SIDE_WIDTH,
    MIME_TYPE_SVG,
    NO_DIFFERENCES_MESSAGE,
    PREFIX_SYMBOLS,
    SVG_BORDER_WIDTH,
    SVG_EMPTY_HEIGHT,
    SVG_LINE_NUMBER_WIDTH,
    SVG_SYMBOL_WIDTH,
    ThemeType,
)
from diffexport.models import DiffLine
from diffexport.options.html import SvgOptions

_SVG_NAMESPACE = "http://www.w3.org/2000/svg"


@dataclass(frozen=True)
class LineColors:
    """Background, border and text colour of one change type."""

    bg: str
    border: str
    text: str


@dataclass(frozen=True)
class SvgColorScheme:
    """Colours for one theme."""

    background: str
    text: str
    line_number: str
    added: LineColors
    removed: LineColors
    modified: LineColors
    unchanged: LineColors

    def for_type(self, line_type: str) -> LineColors:
        """Return the colours of a line type; unknown types use ``unchanged``."""
        if line_type == "added":
            return self.added
        if line_type == "removed":
            return self.removed
        if line_type == "modified":
            return self.modified
        return self.unchanged


LIGHT_COLOR_SCHEME = SvgColorScheme(
    background="#ffffff",
    text="#1f2937",
    line_number="#6b7280",
    added=LineColors(bg="#dcfce7", border="#22c55e", text="#166534"),
    removed=LineColors(bg="#fee2e2", border="#ef4444", text="#991b1b"),
    modified=LineColors(bg="#dbeafe", border="#3b82f6", text="#1e40af"),
    unchanged=LineColors(bg="#f9fafb", border="#d1d5db", text="#6b7280"),
)

DARK_COLOR_SCHEME = SvgColorScheme(
    background="#1a1a1a",
    text="#e0e0e0",
    line_number="#9ca3af",
    added=LineColors(bg="#0d4f28", border="#16a34a", text="#4ade80"),
    removed=LineColors(bg="#4c0f1a", border="#dc2626", text="#f87171"),
    modified=LineColors(bg="#1e3a8a", border="#3b82f6", text="#93c5fd"),
    unchanged=LineColors(bg="#1f2937", border="#4b5563", text="#9ca3af"),
)


class SvgDiffRenderer:
    """Render diff lines as an SVG panel.

    Parameters
    ----------
    options : SvgOptions or None, default None
        Panel layout (line height, font, padding, width)
    theme : {"light", "dark"}, default "light"
        Colour scheme
    include_line_numbers : bool, default True
        Draw the line number column

    Examples
    --------
        >>> renderer = SvgDiffRenderer(theme="dark")
        >>> uri = renderer.render_data_uri([DiffLine(1, "x = 1", "added")], width=600)
        >>> uri.startswith("data:image/svg+xml;base64,")
        True

    """

    def __init__(
        self,
        options: SvgOptions | None = None,
        theme: ThemeType = "light",
        include_line_numbers: bool = True,
    ):
        """Initialize the SVG renderer."""
        self.options = options or SvgOptions()
        self.theme = theme
        self.include_line_numbers = include_line_numbers
        self.colors = DARK_COLOR_SCHEME if theme == "dark" else LIGHT_COLOR_SCHEME

    def render_svg(self, lines: Sequence[DiffLine], width: int | None = None) -> str:
        """Render lines as SVG markup.

        Parameters
        ----------
        lines : sequence of DiffLine
            Lines of one panel, in display order
        width : int or None, default None
            Panel width; falls back to ``options.width`` and then to 600

        Returns
        -------
        str
            Standalone SVG document

        """
        total_width = width or self.options.width or DEFAULT_SVG_SIDE_BY_SIDE_WIDTH
        if not lines:
            return self._render_empty(total_width)

        opts = self.options
        total_height = len(lines) * opts.line_height + 2 * opts.padding
        inner_width = total_width - 2 * opts.padding

        elements = [_rect(0, 0, total_width, total_height, self.colors.background)]
        for index, line in enumerate(lines):
            y = opts.padding + index * opts.line_height
            elements.append(self._render_line(line, opts.padding, y, inner_width))

        return _svg_document(total_width, total_height, elements)

    def render_data_uri(self, lines: Sequence[DiffLine], width: int | None = None) -> str:
        """Render lines as a ``data:image/svg+xml;base64,...`` URI."""
        svg = self.render_svg(lines, width)
        encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
        return f"data:{MIME_TYPE_SVG};base64,{encoded}"

    def _render_line(self, line: DiffLine, x: float, y: float, width: float) -> str:
        opts = self.options
        colors = self.colors.for_type(line.type)
        line_number_width = SVG_LINE_NUMBER_WIDTH if self.include_line_numbers else 0
        baseline = y + opts.line_height / 2 + opts.font_size / 3

        parts = [
            _rect(x, y, width, opts.line_height, colors.bg),
            _rect(x, y, SVG_BORDER_WIDTH, opts.line_height, colors.border),
        ]
        if self.include_line_numbers:
            parts.append(
                _text(
                    x + SVG_BORDER_WIDTH + 10,
                    baseline,
                    str(line.line_number),
                    font_family=opts.font_family,
                    font_size=opts.font_size - 1,
                    fill=self.colors.line_number,
                )
            )
        parts.append(
            _text(
                x + SVG_BORDER_WIDTH + line_number_width + 5,
                baseline,
                PREFIX_SYMBOLS.get(line.type, " "),
                font_family=opts.font_family,
                font_size=opts.font_size,
                fill=colors.text,
                opacity=0.5,
            )
        )
        parts.append(
            _text(
                x + SVG_BORDER_WIDTH + line_number_width + SVG_SYMBOL_WIDTH,
                baseline,
                line.content or "",
                font_family=opts.font_family,
                font_size=opts.font_size,
                fill=colors.text,
            )
        )
        return "<g>" + "".join(parts) + "</g>"

    def _render_empty(self, width: int) -> str:
        elements = [
            _rect(0, 0, width, SVG_EMPTY_HEIGHT, self.colors.background),
            _text(
                width / 2,
                SVG_EMPTY_HEIGHT / 2,
                NO_DIFFERENCES_MESSAGE,
                font_family=self.options.font_family,
                font_size=14,
                fill=self.colors.text,
                anchor="middle",
                opacity=0.5,
            ),
        ]
        return _svg_document(width, SVG_EMPTY_HEIGHT, elements)


def _num(value: float) -> str:
    rounded = round(float(value), 2)
    return str(int(rounded)) if rounded.is_integer() else f"{rounded:g}"


def _attrs(**attributes: object) -> str:
    return " ".join(f'{name.replace("_", "-")}="{escape(str(value))}"' for name, value in attributes.items())


def _svg_document(width: float, height: float, elements: list[str]) -> str:
    attrs = _attrs(
        xmlns=_SVG_NAMESPACE,
        width=_num(width),
        height=_num(height),
        viewBox=f"0 0 {_num(width)} {_num(height)}",
    )
    body = "\n  ".join(elements)
    return f"<svg {attrs}>\n  {body}\n</svg>"


def _rect(x: float, y: float, width: float, height: float, fill: str) -> str:
    return f"<rect {_attrs(x=_num(x), y=_num(y), width=_num(width), height=_num(height), fill=fill)} />"


def _text(
    x: float,
    y: float,
    content: str,
    *,
    font_family: str,
    font_size: int,
    fill: str,
    anchor: str = "start",
    opacity: float = 1,
) -> str:
    attrs = _attrs(
        x=_num(x),
        y=_num(y),
        font_family=font_family,
        font_size=font_size,
        fill=fill,
        text_anchor=anchor,
        opacity=_num(opacity),
    )
    # xml:space keeps leading indentation visible
    return f'<text xml:space="preserve" {attrs}>{escape(content)}</text>'
