# topmark:header:start
#
#   project      : CollectionView
#   file         : model.py
#   file_relpath : src/collectionview/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable settings model for `CollectionView` instances.

`ViewSettings` captures the initial paging state and the defaults used by the
view's convenience operations. Settings are only ever read (from code or from
TOML via [`collectionview.config.loaders`][]); a view never writes them back.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from collectionview.config.getters import (
    get_bool_value_checked,
    get_enum_value_checked,
    get_int_value_or_none_checked,
    get_string_value_checked,
)
from collectionview.config.keys import Toml
from collectionview.config.logging import get_logger
from collectionview.constants import DEFAULT_FILTER_NAME, DEFAULT_PAGE_INDEX, DEFAULT_PAGE_SIZE
from collectionview.errors import ValidationError
from collectionview.sorting import SortDirection

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger

    from .types import TomlTable

logger: CollectionViewLogger = get_logger(__name__)


@dataclass(frozen=True)
class ViewSettings:
    """Initial state and defaults for a `CollectionView`.

    Attributes:
        page_size: Initial page size (``>= 1``).
        page_index: Initial page index (``>= 0``).
        sort_direction: Direction used by `CollectionView.sort` when none is given.
        default_filter_name: Name of the descriptor installed by the
            single-filter convenience setter.
        legacy_next_page_check: When True, `can_navigate_to_next_page` compares
            against the length of the current page instead of the total number
            of sorted records. This reproduces an older behavior that reports
            no next page once a page is full.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    page_index: int = DEFAULT_PAGE_INDEX
    sort_direction: SortDirection = SortDirection.ASCENDING
    default_filter_name: str = DEFAULT_FILTER_NAME
    legacy_next_page_check: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValidationError: If a value is out of range.
        """
        if self.page_size < 1:
            raise ValidationError("'page_size' must be greater than or equal one.")
        if self.page_index < 0:
            raise ValidationError("'page_index' must be greater than or equal zero.")
        if not self.default_filter_name:
            raise ValidationError("'default_filter_name' must not be empty.")

    def with_overrides(self, **overrides: Any) -> ViewSettings:
        """Return a validated copy with the given fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_toml_table(cls, table: TomlTable, *, where: str = Toml.SECTION_VIEW) -> ViewSettings:
        """Build settings from a parsed ``[view]`` table.

        Missing keys keep their defaults. Keys with the wrong type or an
        out-of-range value are logged as warnings and also keep their defaults.

        Args:
            table: The ``[view]`` table (not the whole document).
            where: Table location used in warning messages.

        Returns:
            ViewSettings: The resulting settings.
        """
        defaults = cls()
        page_size: int | None = get_int_value_or_none_checked(
            table, Toml.KEY_PAGE_SIZE, where=where, logger=logger, minimum=1
        )
        page_index: int | None = get_int_value_or_none_checked(
            table, Toml.KEY_PAGE_INDEX, where=where, logger=logger, minimum=0
        )
        direction: SortDirection | None = get_enum_value_checked(
            table, Toml.KEY_SORT_DIRECTION, SortDirection, where=where, logger=logger
        )
        filter_name: str = get_string_value_checked(
            table,
            Toml.KEY_DEFAULT_FILTER_NAME,
            where=where,
            logger=logger,
            default=defaults.default_filter_name,
        )
        if not filter_name:
            logger.warning("Empty value for %s.%s ignored", where, Toml.KEY_DEFAULT_FILTER_NAME)
            filter_name = defaults.default_filter_name

        return cls(
            page_size=defaults.page_size if page_size is None else page_size,
            page_index=defaults.page_index if page_index is None else page_index,
            sort_direction=direction or defaults.sort_direction,
            default_filter_name=filter_name,
            legacy_next_page_check=get_bool_value_checked(
                table,
                Toml.KEY_LEGACY_NEXT_PAGE_CHECK,
                where=where,
                logger=logger,
                default=defaults.legacy_next_page_check,
            ),
        )
