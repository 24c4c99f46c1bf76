#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for diffexport.

This module centralizes the hardcoded values used across the export layer:
format identifiers, media types, file extensions, default titles and the
delivery timings.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Format Identifiers and Media Types
3. Renderer Defaults
4. Delivery Settings
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

DiffType = Literal["added", "removed", "unchanged", "modified"]
SegmentType = Literal["added", "removed", "unchanged"]
ExportFormat = Literal["html", "plaintext", "markdown"]
ThemeType = Literal["light", "dark"]
ViewMode = Literal["unified", "side-by-side"]
RenderMode = Literal["markup", "svg"]

DIFF_TYPES: tuple[str, ...] = ("added", "removed", "unchanged", "modified")
THEMES: tuple[str, ...] = ("light", "dark")
VIEW_MODES: tuple[str, ...] = ("unified", "side-by-side")
RENDER_MODES: tuple[str, ...] = ("markup", "svg")

# =============================================================================
# Format Identifiers and Media Types
# =============================================================================

FORMAT_HTML = "html"
FORMAT_PLAINTEXT = "plaintext"
FORMAT_MARKDOWN = "markdown"

MIME_TYPE_HTML = "text/html;charset=utf-8"
MIME_TYPE_PLAINTEXT = "text/plain;charset=utf-8"
MIME_TYPE_MARKDOWN = "text/markdown;charset=utf-8"
MIME_TYPE_SVG = "image/svg+xml"

EXTENSION_HTML = ".html"
EXTENSION_PLAINTEXT = ".txt"
EXTENSION_MARKDOWN = ".md"

# Prefix symbols shared by every text-based renderer
PREFIX_SYMBOLS: dict[str, str] = {
    "added": "+",
    "removed": "-",
    "modified": "~",
    "unchanged": " ",
}

# =============================================================================
# Renderer Defaults
# =============================================================================

DEFAULT_FALLBACK_FILENAME_STEM = "diff"
DEFAULT_REPORT_TITLE = "Diff Comparison"
DEFAULT_HTML_TITLE = "Diff Comparison Report"
DEFAULT_COLUMN_WIDTH = 80
DEFAULT_CHAR_DIFF_THRESHOLD = 0.3
DEFAULT_LINE_NUMBER_WIDTH = 4
NO_DIFFERENCES_MESSAGE = "No differences to display"
GENERATOR_NAME = "diffexport"

# SVG panel layout
DEFAULT_SVG_UNIFIED_WIDTH = 1200
DEFAULT_SVG_SIDE_BY_SIDE_WIDTH = 600
DEFAULT_SVG_LINE_HEIGHT = 20
DEFAULT_SVG_FONT_SIZE = 13
DEFAULT_SVG_FONT_FAMILY = "'SF Mono', Monaco, 'Cascadia Code', monospace"
DEFAULT_SVG_PADDING = 8
SVG_EMPTY_HEIGHT = 100
SVG_BORDER_WIDTH = 4
SVG_LINE_NUMBER_WIDTH = 60
SVG_SYMBOL_WIDTH = 20

# =============================================================================
# Delivery Settings
# =============================================================================

# Delay before a staged download file is released
DEFAULT_CLEANUP_DELAY_SECONDS = 0.1

PREVIEW_TITLE = "Diff Export Preview"
STAGING_FILE_PREFIX = "diffexport-"
PREVIEW_FILE_PREFIX = "diffexport-preview-"

# Environment variables
ENV_NO_BROWSER = "DIFFEXPORT_NO_BROWSER"
ENV_CONFIG = "DIFFEXPORT_CONFIG"
