# topmark:header:start
#
#   project      : CollectionView
#   file         : filtering.py
#   file_relpath : src/collectionview/filtering.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filter descriptors and the ordered, name-unique filter set.

A `FilterSet` holds `FilterDescriptor` objects in insertion order. When the
filtered stage is computed, each predicate narrows the output of the previous
one, so the result is the conjunction of all predicates.

Every structural change (`add`, `remove`, `clear`) and every change of a
member's predicate publishes exactly one set-level change on
`FilterSet.changed`.

Typical usage:
    ```python
    filters = FilterSet()
    filters.add(lambda p: p["visible"])  # named "0"
    filters.add("expensive", lambda p: p["price"] > 100)
    filters.find("expensive").predicate = lambda p: p["price"] > 200
    filters.remove("0")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, Iterator, TypeVar, overload

from collectionview.config.logging import get_logger
from collectionview.errors import DuplicateNameError, NotFoundError, ValidationError
from collectionview.notifier import Notifier

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger

logger: CollectionViewLogger = get_logger(__name__)

T = TypeVar("T")

Predicate = Callable[[T], bool]
DescriptorChangedHandler = Callable[[], None]


class FilterDescriptor(Generic[T]):
    """A named predicate with its own change notification.

    Attributes:
        name: Identifier, unique within the owning `FilterSet`.
        changed: Notifier raised whenever `predicate` is reassigned.
    """

    def __init__(self, name: str, predicate: Predicate[T]) -> None:
        _check_predicate(name, predicate)
        self._name: str = name
        self._predicate: Predicate[T] = predicate
        self.changed: Notifier[DescriptorChangedHandler] = Notifier()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"

    @property
    def name(self) -> str:
        """Return the descriptor name."""
        return self._name

    @property
    def predicate(self) -> Predicate[T]:
        """Return the current predicate."""
        return self._predicate

    @predicate.setter
    def predicate(self, value: Predicate[T]) -> None:
        _check_predicate(self._name, value)
        self._predicate = value
        self.changed.publish()

    def apply(self, records: list[T]) -> list[T]:
        """Return the records of ``records`` accepted by the predicate, in order."""
        predicate = self._predicate
        return [record for record in records if predicate(record)]


class FilterSet(Generic[T]):
    """Ordered collection of `FilterDescriptor` objects, unique by name."""

    def __init__(self) -> None:
        self._filters: list[FilterDescriptor[T]] = []
        self.changed: Notifier[DescriptorChangedHandler] = Notifier()

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[FilterDescriptor[T]]:
        return iter(self._filters)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self.find(item) is not None
        return any(f is item for f in self._filters)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(names={self.names()!r})"

    @property
    def count(self) -> int:
        """Return the number of registered filters."""
        return len(self._filters)

    def names(self) -> tuple[str, ...]:
        """Return the filter names in application order."""
        return tuple(f.name for f in self._filters)

    def find(self, name: str) -> FilterDescriptor[T] | None:
        """Return the filter named ``name``, or ``None`` if there is none."""
        for f in self._filters:
            if f.name == name:
                return f
        return None

    @overload
    def add(self, descriptor: FilterDescriptor[T], /) -> FilterDescriptor[T]: ...

    @overload
    def add(self, predicate: Predicate[T], /) -> FilterDescriptor[T]: ...

    @overload
    def add(self, name: str, predicate: Predicate[T], /) -> FilterDescriptor[T]: ...

    def add(
        self,
        target: FilterDescriptor[T] | Predicate[T] | str,
        predicate: Predicate[T] | None = None,
        /,
    ) -> FilterDescriptor[T]:
        """Register a filter and publish one change.

        Three call shapes are accepted:

        - ``add(descriptor)``: register an existing `FilterDescriptor`.
        - ``add(predicate)``: register an anonymous predicate; its name is the
          string form of the current filter count (``"0"``, ``"1"``, ...).
        - ``add(name, predicate)``: register ``predicate`` under ``name``.

        Returns:
            FilterDescriptor[T]: The registered descriptor.

        Raises:
            DuplicateNameError: If a filter with the resolved name already exists.
            ValidationError: If the arguments match none of the call shapes or the
                predicate is not callable.
        """
        descriptor: FilterDescriptor[T]
        if isinstance(target, FilterDescriptor):
            descriptor = target
        elif isinstance(target, str):
            if predicate is None:
                raise ValidationError(f"A predicate is required for filter '{target}'.")
            descriptor = FilterDescriptor(target, predicate)
        elif callable(target):
            descriptor = FilterDescriptor(str(len(self._filters)), target)
        else:
            raise ValidationError(f"Cannot build a filter from {target!r}.")

        if self.find(descriptor.name) is not None:
            raise DuplicateNameError(descriptor.name)

        descriptor.changed.subscribe(self._raise_changed)
        self._filters.append(descriptor)
        logger.debug("Added filter %r (%d registered)", descriptor.name, len(self._filters))
        self._raise_changed()
        return descriptor

    def remove(self, target: str | FilterDescriptor[T]) -> None:
        """Remove a filter by name or by identity and publish one change.

        Raises:
            NotFoundError: If no matching filter is registered.
        """
        descriptor: FilterDescriptor[T] | None
        if isinstance(target, FilterDescriptor):
            descriptor = target if any(f is target for f in self._filters) else None
        else:
            descriptor = self.find(target)

        if descriptor is None:
            raise NotFoundError(f"Filter {target!r} does not exist.")

        self._filters = [f for f in self._filters if f is not descriptor]
        descriptor.changed.unsubscribe(self._raise_changed)
        logger.debug("Removed filter %r (%d registered)", descriptor.name, len(self._filters))
        self._raise_changed()

    def clear(self) -> None:
        """Remove every filter at once and publish one change."""
        for descriptor in self._filters:
            descriptor.changed.unsubscribe(self._raise_changed)

        self._filters = []
        self._raise_changed()

    def apply(self, records: list[T]) -> list[T]:
        """Narrow ``records`` through every filter, in insertion order.

        Always returns a new list, even when no filters are registered.
        """
        result: list[T] = list(records)
        for descriptor in self._filters:
            result = descriptor.apply(result)
        return result

    def _raise_changed(self) -> None:
        self.changed.publish()


def _check_predicate(name: str, predicate: object) -> None:
    if not callable(predicate):
        raise ValidationError(f"Predicate for filter '{name}' must be callable, got {predicate!r}.")
