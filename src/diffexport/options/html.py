"""Configuration options for HTML export.

This module defines options for the standalone HTML report, including the
SVG render mode that embeds each diff panel as a vector image.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from diffexport.constants import (
    DEFAULT_CHAR_DIFF_THRESHOLD,
    DEFAULT_SVG_FONT_FAMILY,
    DEFAULT_SVG_FONT_SIZE,
    DEFAULT_SVG_LINE_HEIGHT,
    DEFAULT_SVG_PADDING,
    RENDER_MODES,
    THEMES,
    VIEW_MODES,
    RenderMode,
    ThemeType,
    ViewMode,
)
from diffexport.options.base import BaseExportOptions, CloneFrozenMixin


@dataclass(frozen=True)
class SvgOptions(CloneFrozenMixin):
    """Layout settings for SVG panels.

    Parameters
    ----------
    width : int or None, default None
        Panel width in pixels. None picks 1200 for the unified view and 600
        for each side-by-side panel.
    line_height : int, default 20
        Height of one diff line in pixels
    font_family : str
        Font family for the code text
    font_size : int, default 13
        Font size in pixels
    padding : int, default 8
        Padding around the panel content

    """

    width: int | None = field(default=None, metadata={"help": "SVG panel width in pixels", "type": int})
    line_height: int = field(default=DEFAULT_SVG_LINE_HEIGHT, metadata={"help": "Line height in pixels", "type": int})
    font_family: str = field(default=DEFAULT_SVG_FONT_FAMILY, metadata={"help": "Font family"})
    font_size: int = field(default=DEFAULT_SVG_FONT_SIZE, metadata={"help": "Font size in pixels", "type": int})
    padding: int = field(default=DEFAULT_SVG_PADDING, metadata={"help": "Panel padding in pixels", "type": int})

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any dimension is not positive.

        """
        if self.width is not None and self.width <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if self.line_height <= 0:
            raise ValueError(f"line_height must be positive, got {self.line_height}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        if self.padding < 0:
            raise ValueError(f"padding must be non-negative, got {self.padding}")


@dataclass(frozen=True)
class HtmlExportOptions(BaseExportOptions):
    """Configuration options for HTML export.

    Parameters
    ----------
    theme : {"light", "dark"}, default "light"
        Colour theme
    view_mode : {"unified", "side-by-side"}, default "unified"
        Single interleaved panel, or original and modified panels side by side
    differences_only : bool, default False
        Hide unchanged lines
    render_mode : {"markup", "svg"}, default "markup"
        ``markup`` renders lines as HTML elements with character-level
        highlighting; ``svg`` embeds each panel as an SVG image
    include_footer : bool, default True
        Include the "Generated by" footer
    char_diff_threshold : float, default 0.3
        Minimum character overlap ratio for a removed/added pair to get
        character-level highlighting
    svg : SvgOptions
        Panel layout used when ``render_mode`` is ``svg``

    """

    theme: ThemeType = field(
        default="light",
        metadata={"help": "Colour theme", "choices": list(THEMES)},
    )
    view_mode: ViewMode = field(
        default="unified",
        metadata={"help": "Diff layout", "choices": list(VIEW_MODES)},
    )
    differences_only: bool = field(
        default=False,
        metadata={"help": "Show only changed lines"},
    )
    render_mode: RenderMode = field(
        default="markup",
        metadata={"help": "Render lines as HTML markup or embedded SVG images", "choices": list(RENDER_MODES)},
    )
    include_footer: bool = field(
        default=True,
        metadata={"help": "Include the generator footer", "cli_name": "no-footer", "importance": "advanced"},
    )
    char_diff_threshold: float = field(
        default=DEFAULT_CHAR_DIFF_THRESHOLD,
        metadata={"help": "Similarity threshold for character-level highlighting", "type": float},
    )
    svg: SvgOptions = field(
        default_factory=SvgOptions,
        metadata={"help": "SVG panel layout", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate enumerated values and ranges.

        Raises
        ------
        ValueError
            If a field value is outside its valid range.

        """
        if self.theme not in THEMES:
            raise ValueError(f"theme must be one of {', '.join(THEMES)}, got {self.theme!r}")
        if self.view_mode not in VIEW_MODES:
            raise ValueError(f"view_mode must be one of {', '.join(VIEW_MODES)}, got {self.view_mode!r}")
        if self.render_mode not in RENDER_MODES:
            raise ValueError(f"render_mode must be one of {', '.join(RENDER_MODES)}, got {self.render_mode!r}")
        if not 0.0 <= self.char_diff_threshold <= 1.0:
            raise ValueError(f"char_diff_threshold must be between 0 and 1, got {self.char_diff_threshold}")

    @classmethod
    def _convert_value(cls, key: str, value: Any) -> Any:
        if key == "svg" and isinstance(value, Mapping):
            return SvgOptions(**value)
        return super()._convert_value(key, value)
