#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/service.py
"""Export orchestration.

:class:`ExportService` looks up the renderer for a format, renders the diff
lines and wraps the content in an :class:`~diffexport.models.ExportResult`.
Two delivery operations build on that: saving the result as a file and
previewing HTML on a display surface, both through an injected
:class:`~diffexport.delivery.DeliverySink`.

Failures are never recovered silently. Lookup and option errors propagate
immediately; delivery failures are logged and re-raised as
:class:`~diffexport.exceptions.DeliveryError` subclasses.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from functools import partial
from pathlib import Path
from typing import Any, Callable, Sequence

from diffexport.constants import (
    DEFAULT_CLEANUP_DELAY_SECONDS,
    FORMAT_HTML,
    PREVIEW_TITLE,
    STAGING_FILE_PREFIX,
)
from diffexport.delivery import DeliverySink, LocalDeliverySink
from diffexport.exceptions import DeliveryFailedError, InvalidContentTypeError, PreviewUnavailableError
from diffexport.models import DiffLine, ExportResult, FileInfo
from diffexport.options.base import BaseExportOptions
from diffexport.registry import RendererRegistry, get_default_registry

logger = logging.getLogger(__name__)

Scheduler = Callable[[float, Callable[[], None]], None]


def schedule_with_timer(delay: float, callback: Callable[[], None]) -> None:
    """Run ``callback`` after ``delay`` seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


def run_immediately(delay: float, callback: Callable[[], None]) -> None:
    """Run ``callback`` synchronously, ignoring ``delay``.

    Suitable when the sink copies staged files before returning, as
    :class:`~diffexport.delivery.LocalDeliverySink` does.
    """
    callback()


def _release_staged_file(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug(f"Could not remove staged file {path}: {e}")


class ExportService:
    """Render diff lines into export formats and deliver the results.

    Parameters
    ----------
    registry : RendererRegistry or None, default None
        Format registry; None uses :func:`~diffexport.registry.get_default_registry`
    sink : DeliverySink or None, default None
        Delivery capabilities; None uses a :class:`LocalDeliverySink` saving
        into the current working directory
    scheduler : callable, optional
        ``scheduler(delay, callback)`` used to release staged download files;
        defaults to a daemon :class:`threading.Timer`
    cleanup_delay : float, default 0.1
        Seconds to wait before releasing a staged download file

    Examples
    --------
        >>> from diffexport.models import DiffLine
        >>> service = ExportService()
        >>> result = service.export([DiffLine(1, "hello", "added")], "plaintext")
        >>> result.filename.endswith(".txt")
        True

    """

    def __init__(
        self,
        registry: RendererRegistry | None = None,
        sink: DeliverySink | None = None,
        scheduler: Scheduler | None = None,
        cleanup_delay: float = DEFAULT_CLEANUP_DELAY_SECONDS,
    ):
        """Initialize the export service."""
        self.registry = registry if registry is not None else get_default_registry()
        self.sink: DeliverySink = sink if sink is not None else LocalDeliverySink()
        self._scheduler: Scheduler = scheduler or schedule_with_timer
        self.cleanup_delay = cleanup_delay

    def export(
        self,
        lines: Sequence[DiffLine],
        format: str,
        options: BaseExportOptions | None = None,
    ) -> ExportResult:
        """Render diff lines into the requested format.

        Parameters
        ----------
        lines : sequence of DiffLine
            Diff lines in display order; may be empty
        format : str
            Registered format key (exact match)
        options : BaseExportOptions or None, default None
            Forwarded unchanged to the renderer. ``filename`` overrides the
            default filename when non-empty.

        Returns
        -------
        ExportResult
            Rendered content with its media type, filename and format

        Raises
        ------
        UnsupportedFormatError
            If ``format`` is not registered
        InvalidOptionsError
            If the renderer rejects the options class

        """
        renderer = self.registry.require(format)
        logger.debug(f"Exporting {len(lines)} diff lines as {format}")

        content = renderer.render(lines, options)
        mime_type = renderer.get_mime_type()

        if options is not None and isinstance(options.filename, str) and options.filename:
            filename = options.filename
        else:
            original_file = options.original_file if options is not None else None
            modified_file = options.modified_file if options is not None else None
            filename = renderer.generate_filename(original_file, modified_file)

        return ExportResult(content=content, mime_type=mime_type, filename=filename, format=format)

    def export_and_download(
        self,
        lines: Sequence[DiffLine],
        format: str,
        options: BaseExportOptions | None = None,
    ) -> ExportResult:
        """Export and save the result through the delivery sink.

        The content is staged in a temporary file and handed to
        ``sink.save_file`` exactly once. The staged file is released after
        :attr:`cleanup_delay` seconds whatever the outcome.

        Returns
        -------
        ExportResult
            The exported result that was saved

        Raises
        ------
        UnsupportedFormatError
            If ``format`` is not registered
        DeliveryFailedError
            If staging or saving the file fails

        """
        result = self.export(lines, format, options)
        artifact = result.to_artifact()

        staged_path: Path | None = None
        try:
            staged_path = self._stage(artifact.data)
            self.sink.save_file(staged_path, result.filename, artifact.mime_type)
        except Exception as e:
            logger.error(f"Failed to download file '{result.filename}': {e}")
            raise DeliveryFailedError("Failed to download file", filename=result.filename, original_error=e) from e
        finally:
            if staged_path is not None:
                self._scheduler(self.cleanup_delay, partial(_release_staged_file, staged_path))

        return result

    def export_html_and_preview(self, lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> None:
        """Export as HTML and show it on a new display surface.

        Raises
        ------
        InvalidContentTypeError
            If the HTML renderer returned non-text content
        PreviewUnavailableError
            If the sink cannot open a display surface
        DeliveryFailedError
            If writing to the surface fails

        """
        result = self.export(lines, FORMAT_HTML, options)
        if not isinstance(result.content, str):
            raise InvalidContentTypeError(content_type=type(result.content))

        try:
            surface = self.sink.open_surface()
        except Exception as e:
            logger.error(f"Could not open preview surface: {e}")
            raise PreviewUnavailableError(original_error=e) from e

        if surface is None:
            error = PreviewUnavailableError()
            logger.error(error.message)
            raise error

        # The surface is closed even when writing fails
        try:
            try:
                surface.write(result.content)
                surface.set_title(PREVIEW_TITLE)
            finally:
                surface.close()
        except Exception as e:
            logger.error(f"Failed to display HTML preview: {e}")
            raise DeliveryFailedError("Failed to display HTML preview", original_error=e) from e

    def generate_filename(
        self,
        original_file: FileInfo | None = None,
        modified_file: FileInfo | None = None,
        format: str = FORMAT_HTML,
    ) -> str:
        """Return the default filename the renderer for ``format`` would use.

        Raises
        ------
        UnsupportedFormatError
            If ``format`` is not registered

        """
        return self.registry.require(format).generate_filename(original_file, modified_file)

    def is_format_supported(self, candidate: Any) -> bool:
        """Return True if ``candidate`` is a registered format key."""
        return self.registry.is_format_supported(candidate)

    def list_supported_formats(self) -> list[str]:
        """Return the registered format keys in registration order."""
        return self.registry.list_supported_formats()

    @staticmethod
    def _stage(data: bytes) -> Path:
        fd, temp_path = tempfile.mkstemp(prefix=STAGING_FILE_PREFIX)
        path = Path(temp_path)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except OSError:
            _release_staged_file(path)
            raise
        return path
