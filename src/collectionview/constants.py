# topmark:header:start
#
#   project      : CollectionView
#   file         : constants.py
#   file_relpath : src/collectionview/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CollectionView Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    COLLECTIONVIEW_VERSION: str = get_version("collectionview")
except PackageNotFoundError:  # running from a source checkout
    COLLECTIONVIEW_VERSION = "0.0.0"

# Paging defaults used when no settings are supplied:
DEFAULT_PAGE_SIZE: Final[int] = 10
DEFAULT_PAGE_INDEX: Final[int] = 0

# Name of the descriptor installed by the single-filter convenience setter:
DEFAULT_FILTER_NAME: Final[str] = "Default"

# Environment variable consulted by `collectionview.config.logging`:
LOG_LEVEL_ENV_VAR: Final[str] = "COLLECTIONVIEW_LOG_LEVEL"

# Parent of every module logger; `setup_logging` configures only this one:
PACKAGE_LOGGER_NAME: Final[str] = "collectionview"

# Settings discovery:
SETTINGS_FILE_NAME: Final[str] = "collectionview.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "tool.collectionview"
