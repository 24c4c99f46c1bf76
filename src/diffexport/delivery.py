#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/diffexport/delivery.py
"""Delivery capabilities used by the export service.

The export service never touches the host directly. Saving a file and
showing a preview go through a :class:`DeliverySink`, which is injected into
:class:`~diffexport.service.ExportService`. :class:`LocalDeliverySink` is the
host implementation: it copies staged downloads into an output directory and
previews HTML in the system web browser. Tests substitute recording fakes.
"""

from __future__ import annotations

import html
import logging
import os
import re
import shutil
import tempfile
import webbrowser
from pathlib import Path
from typing import Protocol, runtime_checkable

from diffexport.constants import ENV_NO_BROWSER, PREVIEW_FILE_PREFIX

logger = logging.getLogger(__name__)

_TITLE_ELEMENT = re.compile(r"<title>.*?</title>", re.IGNORECASE | re.DOTALL)
_HEAD_OPEN = re.compile(r"<head[^>]*>", re.IGNORECASE)


@runtime_checkable
class DisplaySurface(Protocol):
    """A blank display surface that accepts markup, such as a browser window."""

    def write(self, markup: str) -> None:
        """Append markup to the surface."""
        ...

    def set_title(self, title: str) -> None:
        """Set the surface title."""
        ...

    def close(self) -> None:
        """Finish writing; the surface shows its content.

        Called exactly once per preview, also after a failed write.
        """
        ...


@runtime_checkable
class DeliverySink(Protocol):
    """Host capabilities for delivering export results."""

    def save_file(self, staged_path: Path, filename: str, mime_type: str) -> None:
        """Save the staged file under ``filename``.

        The staged file belongs to the caller and may be removed shortly after
        this call returns, so implementations must copy it.
        """
        ...

    def open_surface(self) -> DisplaySurface | None:
        """Open a blank display surface, or return None if the host refuses."""
        ...


def browser_disabled() -> bool:
    """Return True when the browser launch is disabled through the environment."""
    return bool(os.environ.get(ENV_NO_BROWSER))


class BrowserSurface:
    """Display surface backed by a temporary HTML file opened in a web browser.

    Markup is buffered until :meth:`close`, which writes the file (with the
    requested title applied) and opens it. The file is kept so the browser
    can load it; its location is available as :attr:`path`.

    Parameters
    ----------
    open_browser : bool, default True
        Launch the browser on close. Setting ``DIFFEXPORT_NO_BROWSER`` in the
        environment also disables the launch.

    """

    def __init__(self, open_browser: bool = True):
        """Initialize an empty surface."""
        self.open_browser = open_browser
        self.path: Path | None = None
        self._chunks: list[str] = []
        self._title: str | None = None
        self._closed = False

    def write(self, markup: str) -> None:
        """Append markup to the buffer."""
        if self._closed:
            raise ValueError("Cannot write to a closed surface")
        self._chunks.append(markup)

    def set_title(self, title: str) -> None:
        """Set the document title applied when the surface is closed."""
        self._title = title

    def close(self) -> None:
        """Write the buffered document to a temporary file and open it."""
        if self._closed:
            return
        self._closed = True

        document = "".join(self._chunks)
        if self._title is not None:
            document = apply_title(document, self._title)

        fd, temp_path = tempfile.mkstemp(suffix=".html", prefix=PREVIEW_FILE_PREFIX)
        try:
            os.write(fd, document.encode("utf-8"))
        finally:
            os.close(fd)
        self.path = Path(temp_path).resolve()
        logger.info(f"Preview written to {self.path}")

        if self.open_browser and not browser_disabled():
            webbrowser.open(self.path.as_uri())
        else:
            logger.debug("Skipping browser launch")


def is_plain_filename(filename: str) -> bool:
    """Return True if ``filename`` names a file without any directory part."""
    if not filename or filename in (".", ".."):
        return False
    return "/" not in filename and "\\" not in filename


def apply_title(document: str, title: str) -> str:
    """Replace the ``<title>`` of an HTML document, adding one if missing."""
    element = f"<title>{html.escape(title)}</title>"
    if _TITLE_ELEMENT.search(document):
        return _TITLE_ELEMENT.sub(lambda _: element, document, count=1)
    head = _HEAD_OPEN.search(document)
    if head:
        return document[: head.end()] + element + document[head.end() :]
    return element + document


class LocalDeliverySink:
    """Deliver exports to the local file system and web browser.

    Parameters
    ----------
    output_dir : str, Path or None, default None
        Directory downloads are saved into; None means the current working
        directory at save time
    open_browser : bool, default True
        Open previews in the system web browser

    Attributes
    ----------
    saved_paths : list of Path
        Destinations written by :meth:`save_file`, in order
    surfaces : list of BrowserSurface
        Surfaces returned by :meth:`open_surface`, in order

    """

    def __init__(self, output_dir: str | Path | None = None, open_browser: bool = True):
        """Initialize the sink."""
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.open_browser = open_browser
        self.saved_paths: list[Path] = []
        self.surfaces: list[BrowserSurface] = []

    def save_file(self, staged_path: Path, filename: str, mime_type: str) -> None:
        """Copy the staged file to ``output_dir / filename``.

        Raises
        ------
        ValueError
            If ``filename`` is empty or contains a directory part
        OSError
            If the directory cannot be created or the copy fails

        """
        if not is_plain_filename(filename):
            raise ValueError(f"Filename must not contain directory parts: {filename!r}")

        target_dir = self.output_dir if self.output_dir is not None else Path.cwd()
        target_dir.mkdir(parents=True, exist_ok=True)
        destination = target_dir / filename
        shutil.copyfile(staged_path, destination)
        self.saved_paths.append(destination)
        logger.info(f"Saved {mime_type} export to {destination}")

    def open_surface(self) -> BrowserSurface:
        """Return a new browser-backed surface."""
        surface = BrowserSurface(open_browser=self.open_browser)
        self.surfaces.append(surface)
        return surface
