"""Base classes for export options.

This module defines the foundation classes for all format-specific options
used by the export renderers.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from diffexport.exceptions import ValidationError
from diffexport.models import FileInfo


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseExportOptions(CloneFrozenMixin):
    """Base class for all export options.

    The export service reads only ``filename``, ``original_file`` and
    ``modified_file``; every other field is interpreted by the renderer.

    Parameters
    ----------
    filename : str or None, default None
        Explicit output filename. Used verbatim when non-empty.
    original_file : FileInfo or None, default None
        Metadata about the original file (default filename and header)
    modified_file : FileInfo or None, default None
        Metadata about the modified file (default filename and header)
    title : str or None, default None
        Document title. None selects the renderer's default title.
    include_line_numbers : bool, default True
        Include line numbers next to each diff line
    include_stats : bool, default True
        Include the statistics summary
    include_header : bool, default True
        Include the file metadata header (requires both file infos)
    generated_at : datetime or None, default None
        Timestamp printed in the header. Rendering never reads the clock, so
        output stays reproducible unless a timestamp is supplied.

    Notes
    -----
    Subclasses should define format-specific options as frozen dataclass fields.

    """

    filename: str | None = field(
        default=None,
        metadata={"help": "Output filename (overrides the generated default)", "importance": "core"},
    )
    original_file: FileInfo | None = field(
        default=None,
        metadata={"help": "Metadata about the original file", "importance": "core"},
    )
    modified_file: FileInfo | None = field(
        default=None,
        metadata={"help": "Metadata about the modified file", "importance": "core"},
    )
    title: str | None = field(
        default=None,
        metadata={"help": "Document title (default depends on the format)", "importance": "core"},
    )
    include_line_numbers: bool = field(
        default=True,
        metadata={"help": "Include line numbers", "cli_name": "no-line-numbers", "importance": "core"},
    )
    include_stats: bool = field(
        default=True,
        metadata={"help": "Include statistics summary", "cli_name": "no-stats", "importance": "core"},
    )
    include_header: bool = field(
        default=True,
        metadata={"help": "Include file metadata header", "cli_name": "no-header", "importance": "core"},
    )
    generated_at: datetime | None = field(
        default=None,
        metadata={"help": "Timestamp shown in the header", "importance": "advanced"},
    )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build options from a plain mapping such as a config file section.

        Nested ``original_file``/``modified_file`` mappings are converted to
        :class:`FileInfo`; subclasses convert their own nested tables in
        :meth:`_convert_value`.

        Parameters
        ----------
        data : Mapping[str, Any]
            Option names and values

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValidationError
            If a key is not a field of this options class or a value is invalid

        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(
                f"Unknown option(s) for {cls.__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=data[unknown[0]],
            )

        try:
            kwargs = {key: cls._convert_value(key, value) for key, value in data.items()}
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e), original_error=e) from e

    @classmethod
    def _convert_value(cls, key: str, value: Any) -> Any:
        if key in ("original_file", "modified_file") and isinstance(value, Mapping):
            return FileInfo.from_dict(value)
        if key == "generated_at" and isinstance(value, str):
            return datetime.fromisoformat(value)
        return value

    def shared_fields(self) -> dict[str, Any]:
        """Return the values of the fields declared on :class:`BaseExportOptions`."""
        return {f.name: getattr(self, f.name) for f in fields(BaseExportOptions)}
