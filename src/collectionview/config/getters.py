# topmark:header:start
#
#   project      : CollectionView
#   file         : getters.py
#   file_relpath : src/collectionview/config/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML settings tables.

Each getter validates the expected shape of a single key. When the key is
missing, the getter returns ``None`` (or the supplied default). When the value
has the wrong type, a **warning** is logged and the getter falls back the same
way, so user mistakes in settings files are surfaced without crashing.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Final, TypeVar

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger

    from .types import TomlTable

E = TypeVar("E", bound=Enum)


def get_string_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    logger: CollectionViewLogger,
    default: str = "",
) -> str:
    """Return a string value, logging a warning when the type is not `str`."""
    value: Any | None = table.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected string in %s, got %s: %r", loc, type(value).__name__, value)
    return default


def get_bool_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    logger: CollectionViewLogger,
    default: bool = False,
) -> bool:
    """Return a boolean value, logging a warning when the type is not `bool`.

    Integers are **not** coerced. If the key is missing, `default` is returned.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    loc: Final[str] = f"{where}.{key}"
    logger.warning("Expected bool in %s, got %s: %r", loc, type(value).__name__, value)
    return default


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    logger: CollectionViewLogger,
    minimum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not a usable `int`.

    Notes:
        - Missing key / None -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values below ``minimum`` (when given) are rejected.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if isinstance(value, bool):
        logger.warning("Expected int in %s, got bool: %r", loc, value)
        return None

    if not isinstance(value, int):
        logger.warning("Expected int in %s, got %s: %r", loc, type(value).__name__, value)
        return None

    if minimum is not None and value < minimum:
        logger.warning("Value for %s must be >= %d, got %d", loc, minimum, value)
        return None

    return value


def get_enum_value_checked(
    table: TomlTable,
    key: str,
    enum_cls: type[E],
    *,
    where: str,
    logger: CollectionViewLogger,
) -> E | None:
    """Parse an enum value from TOML.

    Expected input is a `str` matching one of the Enum values (case-insensitive).

    - Missing key -> None
    - Wrong type -> warning + None
    - Unknown enum value -> warning + None
    """
    raw: Any | None = table.get(key)
    if raw is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, str):
        logger.warning(
            "Expected string enum value in %s, got %s: %r",
            loc,
            type(raw).__name__,
            raw,
        )
        return None

    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed: str = ", ".join(str(e.value) for e in enum_cls)
        logger.warning("Invalid value for %s: %r (allowed: %s)", loc, raw, allowed)
        return None
