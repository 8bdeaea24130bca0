# topmark:header:start
#
#   project      : CollectionView
#   file         : keys.py
#   file_relpath : src/collectionview/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for CollectionView settings.

This module defines the authoritative string constants used when reading
CollectionView settings from TOML sources (``collectionview.toml`` and
``[tool.collectionview]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by CollectionView settings.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - The section is nested under ``[tool.collectionview]`` in ``pyproject.toml``.
    """

    # [view]
    SECTION_VIEW: Final[str] = "view"

    KEY_PAGE_SIZE: Final[str] = "page_size"
    KEY_PAGE_INDEX: Final[str] = "page_index"
    KEY_SORT_DIRECTION: Final[str] = "sort_direction"
    KEY_DEFAULT_FILTER_NAME: Final[str] = "default_filter_name"
    KEY_LEGACY_NEXT_PAGE_CHECK: Final[str] = "legacy_next_page_check"
