#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/renderers/__init__.py
"""Renderers for the supported export formats.

Available Renderers
-------------------
- HtmlRenderer: Standalone HTML report (markup or embedded SVG panels)
- PlainTextRenderer: Plain text report for terminals and email
- MarkdownRenderer: Markdown report with a fenced ``diff`` block
- SvgDiffRenderer: SVG panel images used by the HTML renderer

Examples
--------
Render a diff as Markdown:
    >>> from diffexport.models import DiffLine
    >>> from diffexport.renderers import MarkdownRenderer
    >>> lines = [DiffLine(1, "old", "removed"), DiffLine(2, "new", "added")]
    >>> markdown = MarkdownRenderer().render(lines)

"""

from diffexport.renderers.base import BaseRenderer, DiffRenderer
from diffexport.renderers.html import HtmlRenderer
from diffexport.renderers.markdown import MarkdownRenderer
from diffexport.renderers.plaintext import PlainTextRenderer
from diffexport.renderers.svg import SvgDiffRenderer

__all__ = [
    "BaseRenderer",
    "DiffRenderer",
    "HtmlRenderer",
    "MarkdownRenderer",
    "PlainTextRenderer",
    "SvgDiffRenderer",
]
