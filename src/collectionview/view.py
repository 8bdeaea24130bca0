# topmark:header:start
#
#   project      : CollectionView
#   file         : view.py
#   file_relpath : src/collectionview/view.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The `CollectionView` orchestrator.

A `CollectionView` owns a list of records and derives three stages from it:

    raw data -> filtered -> sorted -> paged

Each stage is a freshly materialized list computed from the one before it.
Mutations are classified by the first stage they invalidate and recompute
eagerly, top-down, before the mutating call returns:

- data replacement (`set_data`): filtered, sorted and paged;
- filter mutation (`filters`, `filter`): filtered, sorted and paged;
- sort mutation (`sorting`, `sort`, `toggle_sort_order*`): sorted and paged;
- paging mutation (`page_size`, `page_index`, `page`, navigation): paged only.

Only the paged-stage recompute publishes on `changed`, so every mutating call
results in exactly one `ChangeEvent`.

Batching:
    The ``suppress_*`` context managers disable one stage's automatic
    recompute while several descriptor changes are made; the caller then runs
    the matching ``apply_*`` method once. `batch_update` does both for all
    stages. Flags are restored on exit, including when the block raises.

Threading:
    A view is single-writer. Records may come from a push-based `DataSource`
    driven by any scheduler, but calls into the view must be serialized.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Protocol,
    TypeVar,
    Union,
    runtime_checkable,
)

from collectionview.config.logging import get_logger
from collectionview.config.model import ViewSettings
from collectionview.errors import IllegalStateError, NotFoundError, ValidationError
from collectionview.filtering import FilterDescriptor, FilterSet, Predicate
from collectionview.notifier import Notifier
from collectionview.sorting import SortDescriptorSet, SortDirection, resolve_sort_key

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger
    from collectionview.observable import ViewObservable
    from collectionview.sorting import SortExpression, SortKey

logger: CollectionViewLogger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class DataSource(Protocol):
    """A push-based source of replacement record collections.

    Each value passed to the subscribed callback fully replaces the view's raw
    data. `subscribe` may return a disposer (a callable or an object with a
    ``dispose()`` method); the view keeps it and releases it in `close`.
    """

    def subscribe(self, callback: Callable[[Iterable[Any]], None]) -> Any:
        """Register ``callback`` to receive replacement collections."""
        ...


@dataclass(frozen=True)
class ChangeEvent(Generic[T]):
    """Payload published on `CollectionView.changed`.

    Attributes:
        source: The view that changed.
        new_view: Snapshot of the paged stage after the change.
    """

    source: CollectionView[T]
    new_view: tuple[T, ...]


ChangedHandler = Callable[[ChangeEvent[Any]], None]


class CollectionView(Generic[T]):
    """Filtered, sorted and paged view over an in-memory sequence of records.

    Args:
        data: Initial records, or a `DataSource` whose emissions replace the
            records each time.
        settings: Initial paging state and defaults. Defaults to `ViewSettings()`.
    """

    def __init__(
        self,
        data: Union[Iterable[T], DataSource] = (),
        *,
        settings: ViewSettings | None = None,
    ) -> None:
        self._settings: ViewSettings = settings or ViewSettings()

        self._data: list[T] = []
        self._filtered: list[T] = []
        self._sorted: list[T] = []
        self._paged: list[T] = []

        self._page_size: int = self._settings.page_size
        self._page_index: int = self._settings.page_index

        self._suppress_filtering: bool = False
        self._suppress_sorting: bool = False
        self._suppress_paging: bool = False

        self.changed: Notifier[ChangedHandler] = Notifier()
        self._observable: ViewObservable[T] | None = None
        self._source_subscription: Any = None

        self.filters: FilterSet[T] = FilterSet()
        self.sorting: SortDescriptorSet[T] = SortDescriptorSet()
        self.filters.changed.subscribe(self.apply_filters)
        self.sorting.changed.subscribe(self.apply_sorting)

        if isinstance(data, DataSource):
            logger.debug("Subscribing to data source %r", data)
            self._source_subscription = data.subscribe(self.set_data)
        else:
            self.set_data(data)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(records={len(self._data)}, filtered={len(self._filtered)}, "
            f"page_index={self._page_index}, page_size={self._page_size})"
        )

    def __iter__(self) -> Iterator[T]:
        return iter(self.view)

    def __len__(self) -> int:
        return len(self._paged)

    @property
    def settings(self) -> ViewSettings:
        """Return the settings the view was created with."""
        return self._settings

    # --- data ---

    @property
    def data(self) -> tuple[T, ...]:
        """Return a snapshot of the raw records."""
        return tuple(self._data)

    def set_data(self, records: Iterable[T]) -> None:
        """Replace the raw records and recompute every stage."""
        self._data = list(records)
        logger.debug("Replaced data with %d records", len(self._data))
        self.apply_filters()

    def close(self) -> None:
        """Stop receiving emissions from the `DataSource`, if any. Idempotent."""
        subscription, self._source_subscription = self._source_subscription, None
        if subscription is None:
            return
        if callable(subscription):
            subscription()
        elif hasattr(subscription, "dispose"):
            subscription.dispose()

    @property
    def view(self) -> tuple[T, ...]:
        """Return a snapshot of the current page (same as `paged_view`)."""
        return self.paged_view

    @property
    def total_count(self) -> int:
        """Return the number of records that passed filtering (all pages)."""
        return len(self._sorted)

    # --- filtering ---

    @property
    def filtered_view(self) -> tuple[T, ...]:
        """Return a snapshot of the filtered stage."""
        return tuple(self._filtered)

    @property
    def filtering_suppressed(self) -> bool:
        """Return True while automatic filtering is suppressed."""
        return self._suppress_filtering

    @contextmanager
    def suppress_filtering(self) -> Iterator[None]:
        """Disable automatic re-filtering for the duration of the block."""
        previous = self._suppress_filtering
        self._suppress_filtering = True
        try:
            yield
        finally:
            self._suppress_filtering = previous

    @property
    def filter(self) -> Predicate[T] | None:
        """Return the predicate of the only filter, or None unless exactly one is registered."""
        if len(self.filters) != 1:
            return None
        return next(iter(self.filters)).predicate

    @filter.setter
    def filter(self, predicate: Predicate[T] | None) -> None:
        descriptor: FilterDescriptor[T] | None = (
            None
            if predicate is None
            else FilterDescriptor(self._settings.default_filter_name, predicate)
        )
        with self.suppress_filtering():
            self.filters.clear()
            if descriptor is not None:
                self.filters.add(descriptor)
        self.apply_filters()

    def apply_filters(self) -> None:
        """Recompute the filtered stage and everything downstream of it."""
        if self._suppress_filtering:
            return

        self._filtered = self.filters.apply(self._data)
        logger.trace(
            "Filtered %d of %d records through %d filters",
            len(self._filtered),
            len(self._data),
            len(self.filters),
        )
        self.apply_sorting()

    # --- sorting ---

    @property
    def sorted_view(self) -> tuple[T, ...]:
        """Return a snapshot of the sorted stage."""
        return tuple(self._sorted)

    @property
    def sorting_suppressed(self) -> bool:
        """Return True while automatic sorting is suppressed."""
        return self._suppress_sorting

    @contextmanager
    def suppress_sorting(self) -> Iterator[None]:
        """Disable automatic re-sorting for the duration of the block."""
        previous = self._suppress_sorting
        self._suppress_sorting = True
        try:
            yield
        finally:
            self._suppress_sorting = previous

    @property
    def sort_expression(self) -> SortKey | None:
        """Return the key of the only sort descriptor, or None unless exactly one exists."""
        if len(self.sorting) != 1:
            return None
        return next(iter(self.sorting)).key

    @property
    def sort_direction(self) -> SortDirection | None:
        """Return the direction of the only sort descriptor, or None unless exactly one exists."""
        if len(self.sorting) != 1:
            return None
        return next(iter(self.sorting)).direction

    def sort(self, expression: SortExpression, direction: SortDirection | None = None) -> None:
        """Replace all sort descriptors with one built from ``expression``.

        Args:
            expression: Field name, one-argument key selector, two-argument
                comparator, or a `SortKey` variant.
            direction: Sort direction; defaults to ``settings.sort_direction``.

        Raises:
            ValidationError: If ``expression`` cannot be turned into a sort key.
        """
        key: SortKey = resolve_sort_key(expression)
        with self.suppress_sorting():
            self.sorting.clear()
            self.sorting.add(key, direction or self._settings.sort_direction)
        self.apply_sorting()

    def toggle_sort_order(self) -> None:
        """Flip the direction of every sort descriptor and recompute once."""
        with self.suppress_sorting():
            for descriptor in self.sorting:
                descriptor.toggle()
        self.apply_sorting()

    def toggle_sort_order_by(self, expression: SortExpression) -> None:
        """Flip the direction of the descriptor built from ``expression``.

        Raises:
            NotFoundError: If no descriptor matches ``expression``.
        """
        descriptor = self.sorting.find(expression)
        if descriptor is None:
            raise NotFoundError("Could not find sort descriptor.")

        descriptor.toggle()

    def apply_sorting(self) -> None:
        """Recompute the sorted stage from the filtered stage, then the paged stage."""
        if self._suppress_sorting:
            return

        self._sorted = self.sorting.apply(self._filtered)
        logger.trace("Sorted %d records with %d descriptors", len(self._sorted), len(self.sorting))
        self.apply_paging()

    # --- paging ---

    @property
    def paged_view(self) -> tuple[T, ...]:
        """Return a snapshot of the paged stage."""
        return tuple(self._paged)

    @property
    def paging_suppressed(self) -> bool:
        """Return True while automatic paging is suppressed."""
        return self._suppress_paging

    @contextmanager
    def suppress_paging(self) -> Iterator[None]:
        """Disable automatic re-paging for the duration of the block."""
        previous = self._suppress_paging
        self._suppress_paging = True
        try:
            yield
        finally:
            self._suppress_paging = previous

    @property
    def page_size(self) -> int:
        """Return the number of records per page."""
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        _check_page_size(value)
        self._page_size = value
        self.apply_paging()

    @property
    def page_index(self) -> int:
        """Return the zero-based index of the current page."""
        return self._page_index

    @page_index.setter
    def page_index(self, value: int) -> None:
        _check_page_index(value)
        self._page_index = value
        self.apply_paging()

    def page(self, page_index: int, page_size: int | None = None) -> None:
        """Set page index and (optionally) page size, recomputing once.

        Both values are validated before either is applied.

        Raises:
            ValidationError: If ``page_size < 1`` or ``page_index < 0``.
        """
        size: int = self._page_size if page_size is None else page_size
        _check_page_size(size)
        _check_page_index(page_index)

        with self.suppress_paging():
            self.page_size = size
            self.page_index = page_index
        self.apply_paging()

    def go_to_page(self, page_index: int) -> None:
        """Navigate to ``page_index``, keeping the current page size."""
        self.page_index = page_index

    @property
    def can_navigate_to_previous_page(self) -> bool:
        """Return True if there is a page before the current one."""
        return self._page_index > 0

    @property
    def can_navigate_to_next_page(self) -> bool:
        """Return True if records exist past the current page.

        With ``settings.legacy_next_page_check`` the bound is the length of the
        current page instead of the number of sorted records.
        """
        bound: int = len(self._paged) if self._settings.legacy_next_page_check else len(self._sorted)
        return (self._page_index + 1) * self._page_size < bound

    def go_to_previous_page(self) -> None:
        """Navigate one page back.

        Raises:
            IllegalStateError: If already on the first page.
        """
        if not self.can_navigate_to_previous_page:
            raise IllegalStateError("Can't navigate to previous page.")

        self.page(self._page_index - 1)

    def go_to_next_page(self) -> None:
        """Navigate one page forward.

        Raises:
            IllegalStateError: If `can_navigate_to_next_page` is False.
        """
        if not self.can_navigate_to_next_page:
            raise IllegalStateError("Can't navigate to next page.")

        self.page(self._page_index + 1)

    def apply_paging(self) -> None:
        """Recompute the paged stage from the sorted stage and publish one change."""
        if self._suppress_paging:
            return

        start: int = self._page_index * self._page_size
        self._paged = self._sorted[start : start + self._page_size]
        logger.trace(
            "Paged records [%d:%d) of %d -> %d",
            start,
            start + self._page_size,
            len(self._sorted),
            len(self._paged),
        )
        self._raise_changed()

    # --- batching ---

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Suppress every stage for the block, then recompute once on normal exit.

        If the block raises, the flags are restored and no recompute happens.
        """
        with self.suppress_filtering(), self.suppress_sorting(), self.suppress_paging():
            yield
        self.apply_filters()

    # --- notification ---

    def _raise_changed(self) -> None:
        if not self.changed.has_subscribers:
            return

        self.changed.publish(ChangeEvent(self, tuple(self._paged)))

    def as_observable(self) -> ViewObservable[T]:
        """Return the view as a push-based observable (created once, then reused).

        Subscribers receive the current page immediately and every later page
        after each change.
        """
        if self._observable is None:
            from collectionview.observable import ViewObservable

            self._observable = ViewObservable(self)
        return self._observable


def _check_page_size(value: int) -> None:
    if value < 1:
        raise ValidationError("'page_size' must be greater than or equal one.")


def _check_page_index(value: int) -> None:
    if value < 0:
        raise ValidationError("'page_index' must be greater than or equal zero.")
