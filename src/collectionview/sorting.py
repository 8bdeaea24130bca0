# topmark:header:start
#
#   project      : CollectionView
#   file         : sorting.py
#   file_relpath : src/collectionview/sorting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Sort keys, sort descriptors and the ordered sort descriptor set.

A sort key is one of three variants, resolved once at the API boundary by
`resolve_sort_key`:

- `PropertyName`: a record field, looked up as a mapping key for `Mapping`
  records and as an attribute otherwise.
- `KeySelector`: a one-argument callable returning a comparable value.
- `FullComparator`: a two-argument callable returning a negative, zero or
  positive number.

Applying a `SortDescriptorSet` re-sorts the *whole* sequence once per
descriptor, in registration order, with a stable sort. The last registered
descriptor therefore dominates, and earlier descriptors only order the
elements the later ones consider equal.

Unlike `collectionview.filtering.FilterSet`, a `SortDescriptorSet` does not
reject duplicate keys.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, TypeVar, Union

from collectionview.config.logging import get_logger
from collectionview.errors import NotFoundError, ValidationError
from collectionview.notifier import Notifier

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger

logger: CollectionViewLogger = get_logger(__name__)

T = TypeVar("T")

Comparer = Callable[[Any, Any], int]
DescriptorChangedHandler = Callable[[], None]


class SortDirection(Enum):
    """Direction applied to a sort descriptor's comparison result."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    def opposite(self) -> SortDirection:
        """Return the other direction."""
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


def default_compare(a: Any, b: Any) -> int:
    """Three-way comparison using the natural ordering of ``a`` and ``b``.

    Strings compare lexicographically, numbers numerically, booleans with
    ``False < True`` and dates/datetimes chronologically.

    Raises:
        TypeError: If the two values are not mutually comparable.
    """
    return (a > b) - (a < b)


@dataclass(frozen=True)
class PropertyName:
    """Sort by the value stored under a field name."""

    name: str

    def extract(self, record: Any) -> Any:
        """Return the field value of ``record``."""
        if isinstance(record, Mapping):
            return record[self.name]
        return getattr(record, self.name)


@dataclass(frozen=True)
class KeySelector:
    """Sort by the value returned by a one-argument callable."""

    fn: Callable[[Any], Any]

    def extract(self, record: Any) -> Any:
        """Return the selected value of ``record``."""
        return self.fn(record)


@dataclass(frozen=True)
class FullComparator:
    """Sort with a two-argument comparator used verbatim."""

    fn: Comparer


SortKey = Union[PropertyName, KeySelector, FullComparator]
SortExpression = Union[str, Callable[..., Any], PropertyName, KeySelector, FullComparator]


def _required_positional_count(fn: Callable[..., Any]) -> int | None:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    params = signature.parameters.values()
    required = sum(
        1
        for p in params
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    )
    # ``(*args, **kwargs)`` wrappers say nothing about the arity.
    if required == 0 and any(p.kind is p.VAR_POSITIONAL for p in params):
        return None
    return required


def resolve_sort_key(expression: SortExpression) -> SortKey:
    """Turn a user-facing sort expression into a `SortKey` variant.

    Args:
        expression: A field name, a `SortKey` variant, or a callable. A callable
            with one required positional parameter is a key selector, one with
            two is a comparator. Callables whose signature cannot be inspected
            (some builtins, ``operator.itemgetter``) are treated as key selectors.

    Returns:
        SortKey: The resolved variant.

    Raises:
        ValidationError: If the expression cannot be interpreted.
    """
    if isinstance(expression, (PropertyName, KeySelector, FullComparator)):
        return expression
    if isinstance(expression, str):
        return PropertyName(expression)
    if callable(expression):
        arity: int | None = _required_positional_count(expression)
        if arity is None or arity == 1:
            return KeySelector(expression)
        if arity == 2:
            return FullComparator(expression)
        raise ValidationError(
            f"Sort callable must take one (selector) or two (comparator) arguments, got {arity}."
        )
    raise ValidationError(f"Cannot build a sort key from {expression!r}.")


class SortDescriptor(Generic[T]):
    """A sort key plus direction, with its own change notification.

    Attributes:
        key: The resolved sort key (never re-inspected after construction).
        value_comparer: Optional comparer for the values produced by a
            `PropertyName` or `KeySelector` key; ignored for `FullComparator`.
        changed: Notifier raised whenever `direction` changes.
    """

    def __init__(
        self,
        expression: SortExpression,
        direction: SortDirection = SortDirection.ASCENDING,
        value_comparer: Comparer | None = None,
    ) -> None:
        self.key: SortKey = resolve_sort_key(expression)
        self.value_comparer: Comparer | None = value_comparer
        self._direction: SortDirection = direction
        self.changed: Notifier[DescriptorChangedHandler] = Notifier()

        self._base_compare: Comparer
        if isinstance(self.key, FullComparator):
            self._base_compare = self.key.fn
        else:
            extract = self.key.extract
            values: Comparer = value_comparer or default_compare

            def _compare_keys(a: Any, b: Any) -> int:
                return values(extract(a), extract(b))

            self._base_compare = _compare_keys

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r}, direction={self._direction.value})"

    @property
    def selector(self) -> str | Callable[..., Any]:
        """Return the field name or callable the key was built from."""
        if isinstance(self.key, PropertyName):
            return self.key.name
        return self.key.fn

    @property
    def direction(self) -> SortDirection:
        """Return the current direction."""
        return self._direction

    @direction.setter
    def direction(self, value: SortDirection) -> None:
        self._direction = value
        self.changed.publish()

    def toggle(self) -> None:
        """Flip the direction (Ascending <-> Descending) and publish one change."""
        self.direction = self._direction.opposite()

    def compare(self, a: T, b: T) -> int:
        """Compare two records, honoring the current direction."""
        result = self._base_compare(a, b)
        if self._direction is SortDirection.DESCENDING:
            return -result
        return result

    def matches(self, key: SortKey) -> bool:
        """Return True if this descriptor was built from ``key``."""
        return self.key == key


class SortDescriptorSet(Generic[T]):
    """Ordered collection of `SortDescriptor` objects.

    Duplicate keys are allowed; `find` and `remove` act on the first match.
    """

    def __init__(self) -> None:
        self._descriptors: list[SortDescriptor[T]] = []
        self.changed: Notifier[DescriptorChangedHandler] = Notifier()

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[SortDescriptor[T]]:
        return iter(self._descriptors)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(descriptors={self._descriptors!r})"

    @property
    def count(self) -> int:
        """Return the number of registered descriptors."""
        return len(self._descriptors)

    def find(self, expression: SortExpression) -> SortDescriptor[T] | None:
        """Return the first descriptor built from ``expression``, or ``None``.

        Field names match by equality, callables by identity. An expression that
        cannot be turned into a sort key matches nothing.
        """
        try:
            key: SortKey = resolve_sort_key(expression)
        except ValidationError:
            return None
        for descriptor in self._descriptors:
            if descriptor.matches(key):
                return descriptor
        return None

    def add(
        self,
        target: SortDescriptor[T] | SortExpression,
        direction: SortDirection = SortDirection.ASCENDING,
        value_comparer: Comparer | None = None,
    ) -> SortDescriptor[T]:
        """Register a sort descriptor and publish one change.

        Args:
            target: An existing `SortDescriptor`, or an expression (field name,
                key selector, comparator or `SortKey` variant) to build one from.
            direction: Direction of a newly built descriptor.
            value_comparer: Optional comparer for the selected values of a newly
                built descriptor.

        Returns:
            SortDescriptor[T]: The registered descriptor.
        """
        descriptor: SortDescriptor[T] = (
            target
            if isinstance(target, SortDescriptor)
            else SortDescriptor(target, direction, value_comparer)
        )

        descriptor.changed.subscribe(self._raise_changed)
        self._descriptors.append(descriptor)
        logger.debug("Added sort descriptor %r (%d registered)", descriptor, len(self._descriptors))
        self._raise_changed()
        return descriptor

    def remove(self, target: SortDescriptor[T] | SortExpression) -> None:
        """Remove a descriptor by identity or by expression and publish one change.

        Raises:
            NotFoundError: If no matching descriptor is registered.
        """
        descriptor: SortDescriptor[T] | None
        if isinstance(target, SortDescriptor):
            descriptor = target if any(d is target for d in self._descriptors) else None
        else:
            descriptor = self.find(target)

        if descriptor is None:
            raise NotFoundError(f"Sort descriptor {target!r} does not exist.")

        index = next(i for i, d in enumerate(self._descriptors) if d is descriptor)
        del self._descriptors[index]
        descriptor.changed.unsubscribe(self._raise_changed)
        self._raise_changed()

    def clear(self) -> None:
        """Remove every descriptor at once and publish one change."""
        for descriptor in self._descriptors:
            descriptor.changed.unsubscribe(self._raise_changed)

        self._descriptors = []
        self._raise_changed()

    def apply(self, records: list[T]) -> list[T]:
        """Return a new list with ``records`` re-sorted once per descriptor.

        Each pass is a full stable sort of the current intermediate list, in
        registration order.
        """
        result: list[T] = list(records)
        for descriptor in self._descriptors:
            result.sort(key=cmp_to_key(descriptor.compare))
        return result

    def _raise_changed(self) -> None:
        self.changed.publish()
