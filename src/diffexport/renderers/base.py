#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/renderers/base.py
"""Base classes for diff export renderers.

This module defines the renderer contract that the export service relies on
and the abstract base class all built-in renderers inherit from. The
BaseRenderer provides the shared filename policy, option resolution and the
small text helpers (escaping, prefix symbols, statistics) used by every
format.

"""

from __future__ import annotations

import html
import re
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable, ClassVar, Protocol, Sequence, runtime_checkable

from diffexport.constants import DEFAULT_FALLBACK_FILENAME_STEM, PREFIX_SYMBOLS
from diffexport.exceptions import InvalidOptionsError
from diffexport.models import DiffLine, DiffStats, ExportContent, FileInfo
from diffexport.options.base import BaseExportOptions

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_REPEATED_UNDERSCORES = re.compile(r"_{2,}")
_EXTENSION = re.compile(r"\.[^/.]+$")

_MARKDOWN_SPECIAL_CHARS = "\\`*_{}[]()#+-.!"
_MARKDOWN_ESCAPES = str.maketrans({char: "\\" + char for char in _MARKDOWN_SPECIAL_CHARS})

_FILE_SIZE_UNITS = ("bytes", "KB", "MB", "GB")


@runtime_checkable
class DiffRenderer(Protocol):
    """Contract between the export service and a format renderer.

    Any object with these three methods can be registered for a format;
    inheriting from :class:`BaseRenderer` is optional.
    """

    def render(self, lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> ExportContent:
        """Render diff lines into document content."""
        ...

    def get_mime_type(self) -> str:
        """Return the media type of rendered content."""
        ...

    def generate_filename(self, original_file: FileInfo | None = None, modified_file: FileInfo | None = None) -> str:
        """Return a default filename for rendered content."""
        ...


class BaseRenderer(ABC):
    """Abstract base class for all diff export renderers.

    Subclasses implement :meth:`render`, :meth:`get_mime_type` and
    :meth:`get_file_extension`, and set :attr:`options_class` to the options
    dataclass they expect.

    Parameters
    ----------
    clock : callable returning date, optional
        Source of the date used in default filenames. Defaults to
        :meth:`datetime.date.today`. Rendering itself never reads the clock.

    Examples
    --------
    Creating a custom renderer:

        >>> from diffexport.renderers.base import BaseRenderer
        >>>
        >>> class CsvRenderer(BaseRenderer):
        ...     def render(self, lines, options=None):
        ...         return "\\n".join(f"{l.line_number},{l.type}" for l in lines)
        ...
        ...     def get_mime_type(self):
        ...         return "text/csv"
        ...
        ...     def get_file_extension(self):
        ...         return ".csv"

    """

    options_class: ClassVar[type[BaseExportOptions]] = BaseExportOptions

    def __init__(self, clock: Callable[[], date] | None = None):
        """Initialize the renderer with an optional date source."""
        self._clock: Callable[[], date] = clock or date.today

    @abstractmethod
    def render(self, lines: Sequence[DiffLine], options: BaseExportOptions | None = None) -> ExportContent:
        """Render diff lines to the target format.

        Parameters
        ----------
        lines : sequence of DiffLine
            Diff lines in display order
        options : BaseExportOptions or None, default None
            Format options. None selects the defaults of :attr:`options_class`.

        Returns
        -------
        str or BinaryArtifact
            Rendered document

        Raises
        ------
        InvalidOptionsError
            If options belong to another format

        """

    @abstractmethod
    def get_mime_type(self) -> str:
        """Return the media type of this format."""

    @abstractmethod
    def get_file_extension(self) -> str:
        """Return the file extension of this format, including the dot."""

    def generate_filename(self, original_file: FileInfo | None = None, modified_file: FileInfo | None = None) -> str:
        """Generate the default filename for this format.

        Both files given: ``{original}_vs_{modified}_diff_{YYYY-MM-DD}{ext}``
        with the original extensions stripped. Otherwise
        ``diff_{YYYY-MM-DD}{ext}``. The result is passed through
        :meth:`sanitize_filename`.

        Parameters
        ----------
        original_file : FileInfo or None, default None
            Metadata of the original file
        modified_file : FileInfo or None, default None
            Metadata of the modified file

        Returns
        -------
        str
            Non-empty filename

        """
        stamp = self._clock().isoformat()
        extension = self.get_file_extension()

        if original_file is not None and modified_file is not None:
            original_name = self.strip_extension(original_file.name)
            modified_name = self.strip_extension(modified_file.name)
            return self.sanitize_filename(f"{original_name}_vs_{modified_name}_diff_{stamp}{extension}")

        return self.sanitize_filename(f"{DEFAULT_FALLBACK_FILENAME_STEM}_{stamp}{extension}")

    def _resolve_options(self, options: BaseExportOptions | None) -> BaseExportOptions:
        """Return options of :attr:`options_class`.

        None yields the defaults, plain :class:`BaseExportOptions` are lifted
        into :attr:`options_class` keeping the shared fields, and options of a
        different format raise :class:`InvalidOptionsError`.
        """
        expected = self.options_class
        if options is None:
            return expected()
        if isinstance(options, expected):
            return options
        if type(options) is BaseExportOptions:
            return expected(**options.shared_fields())
        raise InvalidOptionsError(
            renderer_name=self.__class__.__name__,
            expected_type=expected,
            received_type=type(options),
        )

    @staticmethod
    def filter_lines(lines: Sequence[DiffLine], differences_only: bool) -> list[DiffLine]:
        """Drop unchanged lines when ``differences_only`` is set."""
        if not differences_only:
            return list(lines)
        return [line for line in lines if line.type != "unchanged"]

    @staticmethod
    def get_prefix_symbol(line_type: str) -> str:
        """Return the prefix symbol for a line type (``+``, ``-``, ``~`` or a space)."""
        return PREFIX_SYMBOLS.get(line_type, " ")

    @staticmethod
    def get_line_stats(lines: Sequence[DiffLine]) -> DiffStats:
        """Count lines per change type."""
        return DiffStats.from_lines(lines)

    @staticmethod
    def escape_html(text: str) -> str:
        """Escape ``& < > " '`` for HTML text and attribute values."""
        return html.escape(text, quote=True)

    @staticmethod
    def escape_markdown(text: str) -> str:
        r"""Backslash-escape Markdown metacharacters (``\ ` * _ { } [ ] ( ) # + - . !``)."""
        return text.translate(_MARKDOWN_ESCAPES)

    @staticmethod
    def strip_extension(filename: str) -> str:
        """Remove the last extension from a filename."""
        return _EXTENSION.sub("", filename)

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """Replace unsafe characters with ``_`` and collapse repeated underscores."""
        return _REPEATED_UNDERSCORES.sub("_", _UNSAFE_FILENAME_CHARS.sub("_", filename))

    @staticmethod
    def format_file_size(size: int) -> str:
        """Format a byte count with two decimals (``1.50 KB``)."""
        value = float(size)
        unit_index = 0
        while value >= 1024 and unit_index < len(_FILE_SIZE_UNITS) - 1:
            value /= 1024
            unit_index += 1
        return f"{value:.2f} {_FILE_SIZE_UNITS[unit_index]}"

    @staticmethod
    def format_date(value: datetime) -> str:
        """Format a timestamp as ``YYYY-MM-DD HH:MM:SS``."""
        return value.strftime("%Y-%m-%d %H:%M:%S")
