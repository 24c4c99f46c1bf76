#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/models.py
"""Data model for the export layer.

The export layer consumes an ordered sequence of :class:`DiffLine` records
computed elsewhere, optional :class:`FileInfo` metadata about the two compared
files, and produces an :class:`ExportResult` envelope.

Diff lines are opaque to the orchestrator: it never inspects them, it only
hands them to the selected renderer in the order they were given.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Sequence, Union

from diffexport.constants import DIFF_TYPES, DiffType, SegmentType
from diffexport.exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class CharSegment:
    """A run of characters inside a line with a single change type."""

    text: str
    type: SegmentType

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CharSegment:
        """Build a segment from a mapping with ``text`` and ``type`` keys."""
        seg_type = data.get("type", "unchanged")
        if seg_type not in ("added", "removed", "unchanged"):
            raise ValidationError(
                f"Invalid segment type: {seg_type!r}", parameter_name="type", parameter_value=seg_type
            )
        return cls(text=str(data.get("text", "")), type=seg_type)


@dataclass(frozen=True, slots=True)
class DiffLine:
    """One line of a computed diff.

    Parameters
    ----------
    line_number : int
        Line number in the diff output
    content : str
        Content of the line (empty for blank lines)
    type : DiffType
        Change type: ``added``, ``removed``, ``unchanged`` or ``modified``
    original_line_number : int, optional
        Line number in the original file
    new_line_number : int, optional
        Line number in the modified file
    segments : tuple of CharSegment, optional
        Precomputed character-level segments for inline highlighting

    """

    line_number: int
    content: str
    type: DiffType
    original_line_number: int | None = None
    new_line_number: int | None = None
    segments: tuple[CharSegment, ...] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DiffLine:
        """Build a diff line from a mapping.

        Both snake_case keys and the camelCase keys written by the browser
        based diff tool (``lineNumber``, ``originalLineNumber``...) are accepted.

        Raises
        ------
        ValidationError
            If the line type is unknown or the line number is missing

        """
        line_type = data.get("type")
        if line_type not in DIFF_TYPES:
            raise ValidationError(
                f"Invalid diff line type: {line_type!r}. Must be one of: {', '.join(DIFF_TYPES)}",
                parameter_name="type",
                parameter_value=line_type,
            )

        line_number = _first_present(data, "line_number", "lineNumber")
        if line_number is None:
            raise ValidationError("Diff line is missing a line number", parameter_name="line_number")

        segments = _parse_segments(data.get("segments"))

        return cls(
            line_number=int(line_number),
            content=str(data.get("content") or ""),
            type=line_type,
            original_line_number=_optional_int(_first_present(data, "original_line_number", "originalLineNumber")),
            new_line_number=_optional_int(_first_present(data, "new_line_number", "newLineNumber")),
            segments=segments,
        )


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Metadata about one of the compared files.

    Only ``name`` is required; it drives default filename generation. The
    remaining fields feed the report headers.
    """

    name: str
    content: str = ""
    size: int = 0
    last_modified: datetime | None = None
    mime_type: str | None = None
    extension: str | None = None

    @property
    def line_count(self) -> int:
        """Number of lines in ``content``."""
        return len(self.content.split("\n"))

    @classmethod
    def from_path(cls, path: str | Path) -> FileInfo:
        """Describe a file on disk.

        Parameters
        ----------
        path : str or Path
            File to describe

        Returns
        -------
        FileInfo
            Metadata including the decoded text content

        """
        file_path = Path(path)
        stat = file_path.stat()
        mime_type, _ = mimetypes.guess_type(file_path.name)
        return cls(
            name=file_path.name,
            content=file_path.read_text(encoding="utf-8", errors="replace"),
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
            mime_type=mime_type,
            extension=file_path.suffix or None,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileInfo:
        """Build file metadata from a mapping (snake_case or camelCase keys)."""
        if not data.get("name"):
            raise ValidationError("File information requires a name", parameter_name="name")

        return cls(
            name=str(data["name"]),
            content=str(data.get("content") or ""),
            size=int(data.get("size") or 0),
            last_modified=_parse_timestamp(_first_present(data, "last_modified", "lastModified")),
            mime_type=_first_present(data, "mime_type", "type"),
            extension=data.get("extension"),
        )


@dataclass(frozen=True, slots=True)
class BinaryArtifact:
    """Pre-packaged binary content with its media type."""

    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        """Size of the payload in bytes."""
        return len(self.data)


ExportContent = Union[str, BinaryArtifact]


@dataclass(frozen=True)
class ExportResult:
    """Envelope returned by a successful export.

    Attributes
    ----------
    content : str or BinaryArtifact
        Rendered document
    mime_type : str
        Media type declared by the renderer
    filename : str
        Caller override or the renderer's default filename
    format : str
        The requested export format

    """

    content: ExportContent
    mime_type: str
    filename: str
    format: str

    @property
    def is_binary(self) -> bool:
        """True when the renderer produced a binary artifact."""
        return isinstance(self.content, BinaryArtifact)

    def to_artifact(self) -> BinaryArtifact:
        """Return the content as a binary artifact.

        Text content is encoded as UTF-8 and tagged with the result's media
        type; an existing artifact is returned unchanged.
        """
        if isinstance(self.content, BinaryArtifact):
            return self.content
        return BinaryArtifact(data=self.content.encode("utf-8"), mime_type=self.mime_type)


@dataclass(frozen=True)
class DiffStats:
    """Line counts per change type."""

    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0
    total: int = 0

    @property
    def similarity(self) -> int:
        """Percentage of unchanged lines, rounded; 100 for an empty diff."""
        if self.total == 0:
            return 100
        return int(self.unchanged * 100 / self.total + 0.5)

    @classmethod
    def from_lines(cls, lines: Sequence[DiffLine]) -> DiffStats:
        """Count lines by type."""
        counts = {"added": 0, "removed": 0, "modified": 0, "unchanged": 0}
        for line in lines:
            if line.type in counts:
                counts[line.type] += 1
        return cls(total=len(lines), **counts)


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _optional_int(value: Any) -> int | None:
    return int(value) if value is not None else None


def _parse_segments(raw: Any) -> tuple[CharSegment, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        raise ValidationError(
            f"Segments must be a list, got {type(raw).__name__}", parameter_name="segments", parameter_value=raw
        )

    segments: list[CharSegment] = []
    for index, item in enumerate(raw):
        if isinstance(item, CharSegment):
            segments.append(item)
        elif isinstance(item, Mapping):
            segments.append(CharSegment.from_dict(item))
        else:
            raise ValidationError(
                f"Segment {index} must be an object, got {type(item).__name__}",
                parameter_name="segments",
                parameter_value=item,
            )
    return tuple(segments)


def _parse_timestamp(value: Any) -> datetime | None:
    """Convert a datetime, an ISO 8601 string or epoch milliseconds to a datetime."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise ValidationError(
                f"Invalid last modified timestamp: {value!r}",
                parameter_name="last_modified",
                parameter_value=value,
                original_error=e,
            ) from e
    # Browser File.lastModified is milliseconds since the epoch
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError) as e:
            raise ValidationError(
                f"Last modified timestamp out of range: {value!r}",
                parameter_name="last_modified",
                parameter_value=value,
                original_error=e,
            ) from e
    raise ValidationError(
        f"Last modified must be an ISO 8601 string or epoch milliseconds, got {type(value).__name__}",
        parameter_name="last_modified",
        parameter_value=value,
    )


__all__ = [
    "BinaryArtifact",
    "CharSegment",
    "DiffLine",
    "DiffStats",
    "ExportContent",
    "ExportResult",
    "FileInfo",
]
