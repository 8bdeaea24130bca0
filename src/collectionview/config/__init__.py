# topmark:header:start
#
#   project      : CollectionView
#   file         : __init__.py
#   file_relpath : src/collectionview/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for CollectionView.

- [`collectionview.config.logging`][]: TRACE-aware logging setup.
- [`collectionview.config.model`][]: the immutable `ViewSettings` model.
- [`collectionview.config.loaders`][]: TOML discovery and loading via `tomlkit`.
"""

from __future__ import annotations

from collectionview.config.loaders import discover_settings, load_settings, load_toml_dict
from collectionview.config.model import ViewSettings

__all__ = [
    "ViewSettings",
    "discover_settings",
    "load_settings",
    "load_toml_dict",
]
