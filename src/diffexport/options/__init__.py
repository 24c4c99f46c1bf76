"""Export options for diffexport renderers.

Each export format has a frozen options dataclass derived from
:class:`BaseExportOptions`. The export service treats options opaquely and
forwards them to the selected renderer.
"""

from __future__ import annotations

from diffexport.constants import FORMAT_HTML, FORMAT_MARKDOWN, FORMAT_PLAINTEXT
from diffexport.options.base import BaseExportOptions, CloneFrozenMixin
from diffexport.options.html import HtmlExportOptions, SvgOptions
from diffexport.options.markdown import MarkdownExportOptions
from diffexport.options.plaintext import PlainTextExportOptions

_OPTIONS_CLASSES: dict[str, type[BaseExportOptions]] = {
    FORMAT_HTML: HtmlExportOptions,
    FORMAT_PLAINTEXT: PlainTextExportOptions,
    FORMAT_MARKDOWN: MarkdownExportOptions,
}


def get_options_class(format_name: str) -> type[BaseExportOptions]:
    """Return the options class for a built-in format.

    Unknown formats (for example ones registered by extensions) fall back to
    :class:`BaseExportOptions`.
    """
    return _OPTIONS_CLASSES.get(format_name, BaseExportOptions)


__all__ = [
    "BaseExportOptions",
    "CloneFrozenMixin",
    "HtmlExportOptions",
    "MarkdownExportOptions",
    "PlainTextExportOptions",
    "SvgOptions",
    "get_options_class",
]
