#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the diffexport CLI.

Configuration files hold defaults for the CLI: the export format, the output
directory, the log level and one table of option defaults per format::

    format = "html"
    output_dir = "reports"

    [html]
    theme = "dark"
    view_mode = "side-by-side"

    [plaintext]
    column_width = 100

Flags given on the command line always win over file values. Every loading
problem is reported as :class:`argparse.ArgumentTypeError`.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".diffexport.toml", ".diffexport.yaml", ".diffexport.yml", ".diffexport.json"]
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = ("tool", "diffexport")


def _parse_toml(raw: bytes) -> Any:
    return tomllib.loads(raw.decode("utf-8"))


def _parse_yaml(raw: bytes) -> Any:
    # An empty YAML document loads as None
    document = yaml.safe_load(raw)
    return {} if document is None else document


def _parse_json(raw: bytes) -> Any:
    return json.loads(raw)


# suffix -> (label, parser, errors the parser raises on malformed input)
_PARSERS: Dict[str, tuple[str, Callable[[bytes], Any], tuple[type[Exception], ...]]] = {
    ".toml": ("TOML", _parse_toml, (tomllib.TOMLDecodeError, UnicodeDecodeError)),
    ".yaml": ("YAML", _parse_yaml, (yaml.YAMLError,)),
    ".yml": ("YAML", _parse_yaml, (yaml.YAMLError,)),
    ".json": ("JSON", _parse_json, (json.JSONDecodeError, UnicodeDecodeError)),
}


def _read_table(path: Path, suffix: str) -> Dict[str, Any]:
    """Read ``path`` with the parser registered for ``suffix`` and require a table."""
    label, parse, parse_errors = _PARSERS[suffix]
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {label} config {path}: {e}") from e

    try:
        document = parse(raw)
    except parse_errors as e:
        raise argparse.ArgumentTypeError(f"Invalid {label} in config file {path}: {e}") from e

    if not isinstance(document, dict):
        raise argparse.ArgumentTypeError(
            f"{label} config file {path} must be a table of settings, got {type(document).__name__}"
        )
    return document


def _pyproject_table(path: Path) -> Dict[str, Any]:
    """Return the ``[tool.diffexport]`` table of a pyproject file, or an empty dict."""
    section: Any = _read_table(path, ".toml")
    for key in PYPROJECT_TABLE:
        if not isinstance(section, dict):
            break
        section = section.get(key)
        if section is None:
            return {}

    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.diffexport] section in {path} must be a table, got {type(section).__name__}"
        )
    return section


def _has_pyproject_table(path: Path) -> bool:
    try:
        return bool(_pyproject_table(path))
    except argparse.ArgumentTypeError as e:
        logger.debug(f"Skipping unreadable {path}: {e}")
        return False


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest configuration file at or above ``start_dir``.

    Each directory is checked for the dedicated config files in
    :data:`CONFIG_FILENAMES` order, then for a ``pyproject.toml`` carrying a
    non-empty ``[tool.diffexport]`` table.

    Parameters
    ----------
    start_dir : Path, optional
        Directory to start from; the working directory by default

    Returns
    -------
    Path or None
        The first match, or None when the filesystem root is reached

    """
    start = (start_dir or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate

        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_pyproject_table(pyproject):
            return pyproject

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Locate a configuration file near ``start_dir``, falling back to the home directory."""
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found

    home = Path.home()
    return next((home / name for name in CONFIG_FILENAMES if (home / name).is_file()), None)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load one configuration file.

    ``pyproject.toml`` contributes its ``[tool.diffexport]`` table; other
    files are chosen by suffix (``.toml``, ``.yaml``/``.yml``, ``.json``).

    Parameters
    ----------
    config_path : Path or str
        File to load

    Returns
    -------
    dict
        Settings read from the file

    Raises
    ------
    argparse.ArgumentTypeError
        If the path is missing, is not a file, has an unsupported suffix,
        cannot be parsed, or does not hold a table

    Examples
    --------
    >>> load_config_file(".diffexport.toml").get("format")  # doctest: +SKIP
    'html'

    """
    path = Path(config_path)

    if not path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {path}")
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {path}")

    if path.name.lower() == PYPROJECT_FILENAME:
        return _pyproject_table(path)

    suffix = path.suffix.lower()
    if suffix not in _PARSERS:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {suffix}. Use .json, .toml, or .yaml")

    logger.debug(f"Loading configuration from {path}")
    return _read_table(path, suffix)


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load settings from the highest-priority configuration source.

    ``--config`` wins over ``DIFFEXPORT_CONFIG``, which wins over discovery.
    Only one source is read; settings are never merged across files.

    Returns
    -------
    dict
        Settings, or an empty dict when no file is found

    """
    chosen: Path | str | None = explicit_path or env_var_path or discover_config_file()
    if not chosen:
        return {}
    return load_config_file(chosen)


def get_format_section(config: Dict[str, Any], format_name: str) -> Dict[str, Any]:
    """Return a copy of the option defaults table for ``format_name``.

    Raises
    ------
    argparse.ArgumentTypeError
        If the section exists but is not a table

    """
    section = config.get(format_name, {})
    if not isinstance(section, dict):
        raise argparse.ArgumentTypeError(
            f"Configuration section [{format_name}] must be a table, got {type(section).__name__}"
        )
    return dict(section)
