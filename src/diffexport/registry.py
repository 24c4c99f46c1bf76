#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/registry.py
"""Renderer registry mapping format keys to renderer instances.

The registry is an immutable, ordered mapping built once. A process-wide
default containing the built-in formats is created lazily on first use;
independent registries can be constructed for tests or to add formats,
either directly or with :meth:`RendererRegistry.with_renderer`.

Lookups are exact: no case folding, no prefix matching.
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from diffexport.constants import FORMAT_HTML, FORMAT_MARKDOWN, FORMAT_PLAINTEXT
from diffexport.exceptions import UnsupportedFormatError, ValidationError
from diffexport.renderers.base import DiffRenderer

logger = logging.getLogger(__name__)


def _sanitize_for_log(value: str) -> str:
    """Escape line breaks so a format key cannot forge log records."""
    return value.replace("\n", "\\n").replace("\r", "\\r")


class RendererRegistry:
    """Immutable mapping of export format keys to renderers.

    Parameters
    ----------
    renderers : mapping or iterable of (str, DiffRenderer) pairs
        Format keys and renderers in registration order

    Raises
    ------
    ValidationError
        If a key is not a non-empty string, a key is registered twice, or a
        renderer does not provide ``render``, ``get_mime_type`` and
        ``generate_filename``

    Examples
    --------
        >>> from diffexport.renderers import HtmlRenderer, PlainTextRenderer
        >>> registry = RendererRegistry([("html", HtmlRenderer()), ("plaintext", PlainTextRenderer())])
        >>> registry.list_supported_formats()
        ['html', 'plaintext']
        >>> registry.is_format_supported("HTML")
        False

    """

    def __init__(self, renderers: Mapping[str, DiffRenderer] | Iterable[tuple[str, DiffRenderer]] = ()):
        """Build the registry, validating every entry."""
        items = renderers.items() if isinstance(renderers, Mapping) else renderers
        entries: dict[str, DiffRenderer] = {}

        for format_name, renderer in items:
            if not isinstance(format_name, str) or not format_name:
                raise ValidationError(
                    f"Format key must be a non-empty string, got {format_name!r}",
                    parameter_name="format",
                    parameter_value=format_name,
                )
            if format_name in entries:
                raise ValidationError(
                    f"Format '{format_name}' is already registered",
                    parameter_name="format",
                    parameter_value=format_name,
                )
            if isinstance(renderer, type) or not isinstance(renderer, DiffRenderer):
                raise ValidationError(
                    f"Renderer for format '{format_name}' must provide render(), get_mime_type() "
                    f"and generate_filename(); got {type(renderer).__name__}",
                    parameter_name="renderer",
                    parameter_value=renderer,
                )
            entries[format_name] = renderer

        self._renderers: Mapping[str, DiffRenderer] = MappingProxyType(entries)
        logger.debug(f"Built renderer registry with formats: {', '.join(_sanitize_for_log(k) for k in entries)}")

    def get(self, format_name: Any) -> DiffRenderer | None:
        """Return the renderer for a format key, or None if absent."""
        if not isinstance(format_name, str):
            return None
        return self._renderers.get(format_name)

    def require(self, format_name: Any) -> DiffRenderer:
        """Return the renderer for a format key.

        Raises
        ------
        UnsupportedFormatError
            If the key is not registered

        """
        renderer = self.get(format_name)
        if renderer is None:
            raise UnsupportedFormatError(
                format_type=str(format_name),
                supported_formats=self.list_supported_formats(),
            )
        return renderer

    def is_format_supported(self, candidate: Any) -> bool:
        """Return True if ``candidate`` is a registered format key.

        Any object is accepted; non-strings are never supported.
        """
        return isinstance(candidate, str) and candidate in self._renderers

    def list_supported_formats(self) -> list[str]:
        """Return the registered format keys in registration order (a new list per call)."""
        return list(self._renderers)

    def with_renderer(self, format_name: str, renderer: DiffRenderer) -> RendererRegistry:
        """Return a new registry with one more format; this registry is unchanged."""
        return RendererRegistry([*self._renderers.items(), (format_name, renderer)])

    def items(self) -> Iterator[tuple[str, DiffRenderer]]:
        """Iterate over ``(format, renderer)`` pairs in registration order."""
        return iter(self._renderers.items())

    def __contains__(self, candidate: object) -> bool:
        """Return True if ``candidate`` is a registered format key."""
        return self.is_format_supported(candidate)

    def __len__(self) -> int:
        """Return the number of registered formats."""
        return len(self._renderers)

    def __repr__(self) -> str:
        """Return a debug representation listing the formats."""
        return f"RendererRegistry({self.list_supported_formats()!r})"


_default_registry: RendererRegistry | None = None
_default_registry_lock = threading.Lock()


def create_default_registry() -> RendererRegistry:
    """Build a new registry with the built-in formats (html, plaintext, markdown)."""
    from diffexport.renderers import HtmlRenderer, MarkdownRenderer, PlainTextRenderer

    return RendererRegistry(
        [
            (FORMAT_HTML, HtmlRenderer()),
            (FORMAT_PLAINTEXT, PlainTextRenderer()),
            (FORMAT_MARKDOWN, MarkdownRenderer()),
        ]
    )


def get_default_registry() -> RendererRegistry:
    """Return the process-wide registry of built-in formats, building it on first use."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = create_default_registry()
    return _default_registry
