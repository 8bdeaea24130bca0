# topmark:header:start
#
#   project      : CollectionView
#   file         : helpers.py
#   file_relpath : tests/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Record types and recorders shared across the CollectionView test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collectionview import ChangeEvent


@dataclass(frozen=True)
class Player:
    """Attribute-based record used by sorting tests."""

    name: str
    country: str
    points: int
    active: bool = True


@dataclass
class ChangeRecorder:
    """Collects the `ChangeEvent` objects published by a view."""

    events: list[ChangeEvent[Any]] = field(default_factory=lambda: [])

    def __call__(self, event: ChangeEvent[Any]) -> None:
        self.events.append(event)

    @property
    def count(self) -> int:
        """Return the number of recorded events."""
        return len(self.events)

    @property
    def last(self) -> tuple[Any, ...]:
        """Return the page carried by the most recent event."""
        return self.events[-1].new_view

    def reset(self) -> None:
        """Forget recorded events."""
        self.events.clear()


def names(records: Any) -> list[str]:
    """Return the ``name`` of each record (mapping or attribute based)."""
    return [r["name"] if isinstance(r, dict) else r.name for r in records]
