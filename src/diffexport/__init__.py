"""diffexport - Export computed diffs as HTML, plain text and Markdown reports.

diffexport takes a sequence of diff lines that were computed elsewhere and
turns them into shareable documents. A registry maps each export format to a
renderer, and the export service wraps rendered content in a uniform result
envelope that can be kept in memory, saved as a file or previewed in a
browser.

Supported Formats
-----------------
- **html**: Standalone report with themes, side-by-side view, character-level
  highlighting and an optional SVG render mode
- **plaintext**: Text report with line numbers and diff symbols
- **markdown**: Markdown report with a fenced ``diff`` block or inline
  formatting

Examples
--------
Export to Markdown in memory:

    >>> from diffexport import DiffLine, export
    >>> lines = [DiffLine(1, "old value", "removed"), DiffLine(2, "new value", "added")]
    >>> result = export(lines, "markdown")
    >>> result.filename  # doctest: +SKIP
    'diff_2025-01-31.md'

Save an HTML report into a directory:

    >>> from diffexport import ExportService, HtmlExportOptions, LocalDeliverySink
    >>> service = ExportService(sink=LocalDeliverySink("reports"))
    >>> service.export_and_download(lines, "html", HtmlExportOptions(theme="dark"))  # doctest: +SKIP

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from diffexport.api import (
    export,
    export_and_download,
    export_html_and_preview,
    generate_filename,
    get_default_service,
    is_format_supported,
    list_supported_formats,
    set_default_service,
)
from diffexport.delivery import BrowserSurface, DeliverySink, DisplaySurface, LocalDeliverySink
from diffexport.exceptions import (
    DeliveryError,
    DeliveryFailedError,
    DiffExportError,
    FormatError,
    InputError,
    InvalidContentTypeError,
    InvalidOptionsError,
    PreviewUnavailableError,
    RenderingError,
    UnsupportedFormatError,
    ValidationError,
)
from diffexport.models import BinaryArtifact, CharSegment, DiffLine, DiffStats, ExportResult, FileInfo
from diffexport.options import (
    BaseExportOptions,
    HtmlExportOptions,
    MarkdownExportOptions,
    PlainTextExportOptions,
    SvgOptions,
)
from diffexport.registry import RendererRegistry, create_default_registry, get_default_registry
from diffexport.renderers import BaseRenderer, DiffRenderer
from diffexport.service import ExportService

__all__ = [
    "__version__",
    # API functions
    "export",
    "export_and_download",
    "export_html_and_preview",
    "generate_filename",
    "get_default_service",
    "is_format_supported",
    "list_supported_formats",
    "set_default_service",
    # Service and registry
    "ExportService",
    "RendererRegistry",
    "create_default_registry",
    "get_default_registry",
    "BaseRenderer",
    "DiffRenderer",
    # Delivery
    "BrowserSurface",
    "DeliverySink",
    "DisplaySurface",
    "LocalDeliverySink",
    # Models
    "BinaryArtifact",
    "CharSegment",
    "DiffLine",
    "DiffStats",
    "ExportResult",
    "FileInfo",
    # Options
    "BaseExportOptions",
    "HtmlExportOptions",
    "MarkdownExportOptions",
    "PlainTextExportOptions",
    "SvgOptions",
    # Exceptions
    "DeliveryError",
    "DeliveryFailedError",
    "DiffExportError",
    "FormatError",
    "InputError",
    "InvalidContentTypeError",
    "InvalidOptionsError",
    "PreviewUnavailableError",
    "RenderingError",
    "UnsupportedFormatError",
    "ValidationError",
]
