"""Unit tests for the SVG panel renderer."""

import base64
import xml.etree.ElementTree as ET

import pytest

from diffexport.models import DiffLine
from diffexport.options import SvgOptions
from diffexport.renderers import SvgDiffRenderer
from diffexport.renderers.svg import DARK_COLOR_SCHEME, LIGHT_COLOR_SCHEME

SVG_NS = "{http://www.w3.org/2000/svg}"


def _texts(svg: str) -> list[ET.Element]:
    return list(ET.fromstring(svg).iter(f"{SVG_NS}text"))


@pytest.mark.unit
class TestSvgDiffRenderer:
    """Tests for SvgDiffRenderer."""

    def test_dimensions_follow_line_count(self):
        lines = [DiffLine(1, "a", "added"), DiffLine(2, "b", "removed")]

        root = ET.fromstring(SvgDiffRenderer().render_svg(lines, width=500))

        assert root.get("width") == "500"
        assert root.get("height") == "56"
        assert root.get("viewBox") == "0 0 500 56"

    def test_line_layout(self):
        svg = SvgDiffRenderer().render_svg([DiffLine(7, "  indented", "added")], width=400)

        number, symbol, content = _texts(svg)
        assert (number.text, number.get("x"), number.get("font-size")) == ("7", "22", "12")
        assert (symbol.text, symbol.get("x"), symbol.get("opacity")) == ("+", "77", "0.5")
        assert (content.text, content.get("x"), content.get("y")) == ("  indented", "92", "22.33")
        assert content.get("fill") == LIGHT_COLOR_SCHEME.added.text

    def test_without_line_numbers(self):
        renderer = SvgDiffRenderer(include_line_numbers=False)

        symbol, content = _texts(renderer.render_svg([DiffLine(1, "x", "removed")]))

        assert symbol.get("x") == "17"
        assert content.get("x") == "32"

    def test_content_is_escaped(self):
        svg = SvgDiffRenderer().render_svg([DiffLine(1, "a < b && c", "modified")])

        assert "a &lt; b &amp;&amp; c" in svg
        assert _texts(svg)[-1].text == "a < b && c"

    def test_empty_panel(self):
        svg = SvgDiffRenderer().render_svg([], width=300)
        root = ET.fromstring(svg)

        assert root.get("height") == "100"
        (message,) = _texts(svg)
        assert message.text == "No differences to display"
        assert message.get("text-anchor") == "middle"
        assert message.get("x") == "150"

    def test_dark_theme_colours(self):
        svg = SvgDiffRenderer(theme="dark").render_svg([DiffLine(1, "x", "added")])

        assert f'fill="{DARK_COLOR_SCHEME.background}"' in svg
        assert f'fill="{DARK_COLOR_SCHEME.added.bg}"' in svg

    def test_width_falls_back_to_options_then_default(self):
        line = [DiffLine(1, "x", "unchanged")]

        assert ET.fromstring(SvgDiffRenderer(SvgOptions(width=750)).render_svg(line)).get("width") == "750"
        assert ET.fromstring(SvgDiffRenderer().render_svg(line)).get("width") == "600"

    def test_data_uri(self):
        renderer = SvgDiffRenderer()
        lines = [DiffLine(1, "héllo", "added")]

        uri = renderer.render_data_uri(lines, width=600)

        prefix = "data:image/svg+xml;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix) :]).decode("utf-8") == renderer.render_svg(lines, width=600)

    def test_unknown_type_uses_unchanged_colours(self):
        assert LIGHT_COLOR_SCHEME.for_type("moved") is LIGHT_COLOR_SCHEME.unchanged
