"""Module-level export functions backed by a shared default service."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/diffexport/api.py
from __future__ import annotations

import threading
from typing import Any, Sequence

from diffexport.models import DiffLine, ExportResult, FileInfo
from diffexport.options.base import BaseExportOptions
from diffexport.service import ExportService

_default_service: ExportService | None = None
_default_service_lock = threading.Lock()


def get_default_service() -> ExportService:
    """Return the shared :class:`ExportService`, creating it on first use.

    The default service uses the built-in renderer registry and a
    :class:`~diffexport.delivery.LocalDeliverySink` writing to the current
    working directory.
    """
    global _default_service
    if _default_service is None:
        with _default_service_lock:
            if _default_service is None:
                _default_service = ExportService()
    return _default_service


def set_default_service(service: ExportService | None) -> None:
    """Replace the shared service; None resets it to be rebuilt lazily."""
    global _default_service
    with _default_service_lock:
        _default_service = service


def export(lines: Sequence[DiffLine], format: str, options: BaseExportOptions | None = None) -> ExportResult:
    """Render diff lines into ``format``.

    Parameters
    ----------
    lines : sequence of DiffLine
        Diff lines in display order
    format : str
        Registered format key, e.g. ``"html"``, ``"plaintext"`` or ``"markdown"``
    options : BaseExportOptions or None, default None
        Format options forwarded to the renderer

    Returns
    -------
    ExportResult
        Rendered content with media type, filename and format

    Examples
    --------
        >>> from diffexport import DiffLine, export
        >>> result = export([DiffLine(1, "print('hi')", "added")], "markdown")
        >>> result.mime_type
        'text/markdown;charset=utf-8'

    """
    return get_default_service().export(lines, format, options)


def export_and_download(
    lines: Sequence[DiffLine], format: str, options: BaseExportOptions | None = None
) -> ExportResult:
    """Export and save the result through the default delivery sink."""
    return get_default_service().export_and_download(lines, format, options)


def export_html_and_preview(lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> None:
    """Export as HTML and open it on a preview surface."""
    get_default_service().export_html_and_preview(lines, options)


def generate_filename(
    original_file: FileInfo | None = None,
    modified_file: FileInfo | None = None,
    format: str = "html",
) -> str:
    """Return the default filename for ``format``."""
    return get_default_service().generate_filename(original_file, modified_file, format)


def is_format_supported(candidate: Any) -> bool:
    """Return True if ``candidate`` is a supported export format."""
    return get_default_service().is_format_supported(candidate)


def list_supported_formats() -> list[str]:
    """Return the supported export formats in registration order."""
    return get_default_service().list_supported_formats()
