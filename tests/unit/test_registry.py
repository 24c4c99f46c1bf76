"""Unit tests for the renderer registry."""

import pytest

from diffexport.exceptions import UnsupportedFormatError, ValidationError
from diffexport.registry import RendererRegistry, create_default_registry, get_default_registry
from diffexport.renderers import HtmlRenderer, MarkdownRenderer, PlainTextRenderer


class CsvRenderer:
    """Minimal renderer that does not inherit from BaseRenderer."""

    def render(self, lines, options=None):
        return "\n".join(f"{line.line_number},{line.type}" for line in lines)

    def get_mime_type(self):
        return "text/csv"

    def generate_filename(self, original_file=None, modified_file=None):
        return "diff.csv"


@pytest.mark.unit
class TestDefaultRegistry:
    """The built-in format registry."""

    def test_builtin_formats_in_order(self):
        assert create_default_registry().list_supported_formats() == ["html", "plaintext", "markdown"]

    def test_default_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()

    def test_builtin_renderer_types(self):
        registry = create_default_registry()

        assert isinstance(registry.require("html"), HtmlRenderer)
        assert isinstance(registry.require("plaintext"), PlainTextRenderer)
        assert isinstance(registry.require("markdown"), MarkdownRenderer)

    def test_list_returns_fresh_copy(self):
        registry = create_default_registry()

        formats = registry.list_supported_formats()
        formats.append("pdf")

        assert registry.list_supported_formats() == ["html", "plaintext", "markdown"]


@pytest.mark.unit
class TestLookups:
    """Exact, non-normalising lookups."""

    @pytest.mark.parametrize("candidate", ["HTML", " html", "htm", "", "svg", None, 42, ["html"]])
    def test_unsupported_candidates(self, candidate):
        registry = create_default_registry()

        assert not registry.is_format_supported(candidate)
        assert candidate not in registry
        assert registry.get(candidate) is None

    def test_require_unknown_format(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            create_default_registry().require("pdf")

        error = exc_info.value
        assert error.format_type == "pdf"
        assert error.supported_formats == ["html", "plaintext", "markdown"]
        assert "Unsupported export format: 'pdf'" in str(error)

    def test_len_and_repr(self):
        registry = create_default_registry()

        assert len(registry) == 3
        assert repr(registry) == "RendererRegistry(['html', 'plaintext', 'markdown'])"


@pytest.mark.unit
class TestCustomRegistries:
    """Building registries with extra formats."""

    def test_duck_typed_renderer_is_accepted(self):
        registry = RendererRegistry({"csv": CsvRenderer()})

        assert registry.is_format_supported("csv")
        assert dict(registry.items())["csv"].get_mime_type() == "text/csv"

    def test_with_renderer_leaves_original_unchanged(self):
        base = create_default_registry()

        extended = base.with_renderer("csv", CsvRenderer())

        assert extended.list_supported_formats() == ["html", "plaintext", "markdown", "csv"]
        assert "csv" not in base

    def test_duplicate_key_rejected(self):
        with pytest.raises(ValidationError, match="already registered"):
            create_default_registry().with_renderer("html", CsvRenderer())

    @pytest.mark.parametrize("key", ["", None, 3])
    def test_invalid_key_rejected(self, key):
        with pytest.raises(ValidationError):
            RendererRegistry([(key, CsvRenderer())])

    def test_renderer_class_rejected(self):
        with pytest.raises(ValidationError):
            RendererRegistry({"csv": CsvRenderer})

    def test_incomplete_renderer_rejected(self):
        class NoFilename:
            def render(self, lines, options=None):
                return ""

            def get_mime_type(self):
                return "text/plain"

        with pytest.raises(ValidationError):
            RendererRegistry({"broken": NoFilename()})
