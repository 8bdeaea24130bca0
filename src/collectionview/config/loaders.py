# topmark:header:start
#
#   project      : CollectionView
#   file         : loaders.py
#   file_relpath : src/collectionview/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load CollectionView settings from TOML sources.

Settings can live in:
- a dedicated ``collectionview.toml`` file (``[view]`` table), or
- ``pyproject.toml`` under ``[tool.collectionview.view]``.

Parsing is done with `tomlkit` and returned as plain `dict` structures. I/O and
parse errors never propagate: they are logged and treated as an empty document.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from collectionview.config.keys import Toml
from collectionview.config.logging import get_logger
from collectionview.config.model import ViewSettings
from collectionview.constants import (
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
    SETTINGS_FILE_NAME,
)

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger

    from .types import TomlTable

logger: CollectionViewLogger = get_logger(__name__)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``collectionview.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def _nested_table(data: TomlTable, dotted: str) -> TomlTable | None:
    """Return the table at a dotted path (e.g. ``tool.collectionview``), or None."""
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, dict):
            return None
        node = cast("TomlTable", node).get(part)
    return cast("TomlTable", node) if isinstance(node, dict) else None


def extract_view_table(data: TomlTable, *, is_pyproject: bool) -> TomlTable | None:
    """Return the ``[view]`` table of a parsed document, or None if absent.

    Args:
        data: Parsed TOML document.
        is_pyproject: If True, look under ``[tool.collectionview]`` first.
    """
    root: TomlTable | None = _nested_table(data, PYPROJECT_TOOL_SECTION) if is_pyproject else data
    if root is None:
        return None
    view: Any = root.get(Toml.SECTION_VIEW)
    if view is None:
        return {}
    if not isinstance(view, dict):
        logger.warning("Expected table for [%s], got %s", Toml.SECTION_VIEW, type(view).__name__)
        return {}
    return cast("TomlTable", view)


def load_settings(path: Path) -> ViewSettings:
    """Load settings from a single TOML file.

    ``pyproject.toml`` files are read from ``[tool.collectionview.view]``; any
    other file from its top-level ``[view]`` table.

    Returns:
        ViewSettings: Loaded settings, or defaults when nothing usable is found.
    """
    is_pyproject: bool = path.name == PYPROJECT_FILE_NAME
    table: TomlTable | None = extract_view_table(load_toml_dict(path), is_pyproject=is_pyproject)
    if table is None:
        logger.debug("No CollectionView settings in %s, using defaults", path)
        return ViewSettings()

    where: str = (
        f"{PYPROJECT_TOOL_SECTION}.{Toml.SECTION_VIEW}" if is_pyproject else Toml.SECTION_VIEW
    )
    settings = ViewSettings.from_toml_table(table, where=where)
    logger.debug("Loaded %r from %s", settings, path)
    return settings


def discover_settings(start: Path | None = None) -> ViewSettings:
    """Find and load the nearest settings file, walking up from ``start``.

    In each directory, ``collectionview.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts if it has a ``[tool.collectionview]`` table.

    Args:
        start: Directory to start from. Defaults to the current working directory.

    Returns:
        ViewSettings: Loaded settings, or defaults when no source is found.
    """
    current: Path = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate: Path = directory / SETTINGS_FILE_NAME
        if candidate.is_file():
            return load_settings(candidate)

        pyproject: Path = directory / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            data: TomlTable = load_toml_dict(pyproject)
            if _nested_table(data, PYPROJECT_TOOL_SECTION) is not None:
                return load_settings(pyproject)

    logger.debug("No CollectionView settings found above %s, using defaults", current)
    return ViewSettings()
