"""Unit tests for the diffexport data model."""

from datetime import datetime

import pytest

from diffexport.exceptions import ValidationError
from diffexport.models import BinaryArtifact, CharSegment, DiffLine, DiffStats, ExportResult, FileInfo


@pytest.mark.unit
class TestDiffLine:
    """Tests for DiffLine construction from mappings."""

    def test_from_dict_accepts_camel_case_keys(self):
        line = DiffLine.from_dict(
            {"lineNumber": 7, "content": "x = 1", "type": "modified", "originalLineNumber": 5, "newLineNumber": 6}
        )

        assert line == DiffLine(7, "x = 1", "modified", original_line_number=5, new_line_number=6)

    def test_from_dict_accepts_snake_case_keys(self):
        line = DiffLine.from_dict({"line_number": 2, "content": "y", "type": "added", "new_line_number": 2})

        assert line.line_number == 2
        assert line.new_line_number == 2
        assert line.original_line_number is None

    def test_from_dict_missing_content_is_empty(self):
        line = DiffLine.from_dict({"lineNumber": 1, "type": "unchanged"})
        assert line.content == ""

    def test_from_dict_rejects_unknown_type(self):
        with pytest.raises(ValidationError) as exc_info:
            DiffLine.from_dict({"lineNumber": 1, "content": "x", "type": "moved"})
        assert exc_info.value.parameter_name == "type"

    def test_from_dict_requires_line_number(self):
        with pytest.raises(ValidationError):
            DiffLine.from_dict({"content": "x", "type": "added"})

    def test_from_dict_parses_segments(self):
        line = DiffLine.from_dict(
            {
                "lineNumber": 1,
                "content": "ab",
                "type": "added",
                "segments": [{"text": "a", "type": "unchanged"}, {"text": "b", "type": "added"}],
            }
        )

        assert line.segments == (CharSegment("a", "unchanged"), CharSegment("b", "added"))

    def test_segment_rejects_modified_type(self):
        with pytest.raises(ValidationError):
            CharSegment.from_dict({"text": "a", "type": "modified"})

    @pytest.mark.parametrize("segments", [["abc"], [{"text": "a"}, 3], "abc", {"text": "a"}])
    def test_from_dict_rejects_malformed_segments(self, segments):
        with pytest.raises(ValidationError) as exc_info:
            DiffLine.from_dict({"lineNumber": 1, "content": "a", "type": "added", "segments": segments})
        assert exc_info.value.parameter_name == "segments"

    def test_malformed_segment_reports_index(self):
        with pytest.raises(ValidationError, match="Segment 1 must be an object"):
            DiffLine.from_dict({"lineNumber": 1, "content": "a", "type": "added", "segments": [{"text": "a"}, None]})


@pytest.mark.unit
class TestFileInfo:
    """Tests for FileInfo."""

    def test_line_count(self):
        assert FileInfo(name="a.txt", content="one\ntwo\nthree").line_count == 3
        assert FileInfo(name="a.txt").line_count == 1

    def test_from_dict_parses_iso_timestamp(self):
        info = FileInfo.from_dict({"name": "a.txt", "size": 10, "lastModified": "2024-01-02T03:04:05"})

        assert info.last_modified == datetime(2024, 1, 2, 3, 4, 5)
        assert info.size == 10

    def test_from_dict_converts_epoch_milliseconds(self):
        info = FileInfo.from_dict({"name": "a.txt", "lastModified": 1700000000000})

        assert info.last_modified == datetime.fromtimestamp(1700000000)

    def test_from_dict_keeps_datetime(self):
        stamp = datetime(2024, 5, 6, 7, 8, 9)
        assert FileInfo.from_dict({"name": "a.txt", "last_modified": stamp}).last_modified == stamp

    @pytest.mark.parametrize("value", ["yesterday", [2024, 1, 2], {"year": 2024}, True])
    def test_from_dict_rejects_invalid_timestamp(self, value):
        with pytest.raises(ValidationError) as exc_info:
            FileInfo.from_dict({"name": "a.txt", "lastModified": value})
        assert exc_info.value.parameter_name == "last_modified"

    def test_from_dict_requires_name(self):
        with pytest.raises(ValidationError):
            FileInfo.from_dict({"size": 10})

    def test_from_path(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("# Title\nbody", encoding="utf-8")

        info = FileInfo.from_path(path)

        assert info.name == "notes.md"
        assert info.extension == ".md"
        assert info.size == path.stat().st_size
        assert info.content == "# Title\nbody"
        assert info.last_modified is not None


@pytest.mark.unit
class TestDiffStats:
    """Tests for line statistics."""

    def test_counts_each_type(self, sample_lines):
        stats = DiffStats.from_lines(sample_lines)

        assert (stats.added, stats.removed, stats.modified, stats.unchanged, stats.total) == (1, 1, 1, 2, 5)
        assert stats.similarity == 40

    def test_empty_diff_is_fully_similar(self):
        assert DiffStats.from_lines([]).similarity == 100

    def test_similarity_rounds_half_up(self):
        lines = [DiffLine(1, "a", "unchanged"), DiffLine(2, "b", "added"), DiffLine(3, "c", "unchanged")]
        assert DiffStats.from_lines(lines).similarity == 67


@pytest.mark.unit
class TestExportResult:
    """Tests for the result envelope."""

    def test_text_content_converts_to_artifact(self):
        result = ExportResult(content="héllo", mime_type="text/plain;charset=utf-8", filename="a.txt", format="plaintext")

        artifact = result.to_artifact()

        assert not result.is_binary
        assert artifact.data == "héllo".encode("utf-8")
        assert artifact.mime_type == "text/plain;charset=utf-8"

    def test_binary_content_is_returned_unchanged(self):
        artifact = BinaryArtifact(data=b"\x00\x01", mime_type="application/octet-stream")
        result = ExportResult(content=artifact, mime_type="text/plain", filename="a.bin", format="custom")

        assert result.is_binary
        assert result.to_artifact() is artifact
        assert artifact.size == 2
