"""Unit tests for the Markdown renderer."""

from datetime import datetime

import pytest

from diffexport.exceptions import InvalidOptionsError
from diffexport.models import DiffLine
from diffexport.options import HtmlExportOptions, MarkdownExportOptions
from diffexport.renderers import MarkdownRenderer


@pytest.mark.unit
class TestMarkdownRenderer:
    """Tests for MarkdownRenderer output."""

    def test_default_layout(self, sample_lines):
        markdown = MarkdownRenderer().render(sample_lines)

        assert markdown.startswith("# Diff Comparison\n")
        assert "## Statistics" in markdown
        assert "| Similarity | **40%** |" in markdown
        assert "## Diff Content" in markdown
        assert "```diff\n" in markdown
        assert markdown.rstrip().endswith("```")

    def test_code_block_keeps_content_verbatim(self):
        lines = [DiffLine(1, "x = a*b_c", "added"), DiffLine(2, "y", "unchanged")]

        markdown = MarkdownRenderer().render(lines, MarkdownExportOptions(include_stats=False))

        assert "```diff\n+ x = a*b_c\n  y\n```" in markdown

    def test_inline_mode_escapes_and_formats(self):
        lines = [
            DiffLine(1, "a*b", "added"),
            DiffLine(2, "old_name", "removed"),
            DiffLine(3, "v1.2", "modified"),
            DiffLine(4, "plain", "unchanged"),
        ]
        options = MarkdownExportOptions(use_code_blocks=False, include_stats=False)

        body = MarkdownRenderer().render(lines, options).split("## Diff Content\n\n", 1)[1]

        assert body.splitlines() == [
            "+ **a\\*b** (added)",
            "- ~~old\\_name~~ (removed)",
            "~ *v1\\.2* (modified)",
            "  plain",
        ]

    def test_line_numbers_prefix(self):
        options = MarkdownExportOptions(include_line_numbers=True, include_stats=False)
        markdown = MarkdownRenderer().render([DiffLine(9, "x", "removed")], options)

        assert "9: - x" in markdown

    def test_empty_title_is_suppressed(self):
        markdown = MarkdownRenderer().render([], MarkdownExportOptions(title=""))
        assert not markdown.startswith("#  ")
        assert "Diff Comparison" not in markdown

    def test_custom_title(self):
        markdown = MarkdownRenderer().render([], MarkdownExportOptions(title="Release Notes"))
        assert markdown.startswith("# Release Notes\n")

    def test_file_information_table(self, sample_lines, original_file, modified_file):
        options = MarkdownExportOptions(
            original_file=original_file,
            modified_file=modified_file,
            generated_at=datetime(2024, 3, 15, 8, 0, 0),
        )

        markdown = MarkdownRenderer().render(sample_lines, options)

        assert "## File Information" in markdown
        assert "**Generated:** 2024-03-15 08:00:00" in markdown
        assert "| Original | `config.old.py` | 1234 bytes |" in markdown
        assert "| Modified | `config.new.py` | 1300 bytes |" in markdown

    def test_rejects_html_options(self):
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer().render([], HtmlExportOptions())

    def test_filename_with_files(self, fixed_clock, original_file, modified_file):
        renderer = MarkdownRenderer(clock=fixed_clock)

        assert renderer.generate_filename(original_file, modified_file) == "config.old_vs_config.new_diff_2024-03-15.md"
        assert renderer.get_mime_type() == "text/markdown;charset=utf-8"
