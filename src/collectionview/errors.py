# topmark:header:start
#
#   project      : CollectionView
#   file         : errors.py
#   file_relpath : src/collectionview/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by CollectionView.

Usage:
    All errors are raised synchronously at the call site that caused them and
    leave the affected component unchanged. None of them is ever delivered
    through a `Notifier` or an observable subscription.

    Each concrete error also derives from the closest built-in exception so
    callers that already catch ``ValueError`` / ``LookupError`` /
    ``RuntimeError`` keep working.
"""

from __future__ import annotations


class CollectionViewError(Exception):
    """Base class for all CollectionView errors."""


class ValidationError(CollectionViewError, ValueError):
    """Error for invalid arguments (page size, page index, sort expressions, settings)."""


# Alternative name matching the paging setters' documentation.
InvalidArgumentError = ValidationError


class DuplicateNameError(CollectionViewError, ValueError):
    """Error when a filter with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Filter with name '{name}' already exists.")
        self.name: str = name


class NotFoundError(CollectionViewError, LookupError):
    """Error when a handler, filter or sort descriptor cannot be found."""


class IllegalStateError(CollectionViewError, RuntimeError):
    """Error when an operation is not allowed in the current state (e.g. page navigation)."""
