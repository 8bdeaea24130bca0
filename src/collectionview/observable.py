# topmark:header:start
#
#   project      : CollectionView
#   file         : observable.py
#   file_relpath : src/collectionview/observable.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Push-based subscription bridge over a view's change notifications.

`ViewObservable` is obtained through `CollectionView.as_observable()`, which
creates it once per view. It multicasts: a single handler is installed on the
view's `changed` notifier (lazily, on the first subscription) and fans each
new page out to every subscriber.

Each new subscriber first receives the *current* page (subscribe-time replay),
then every page published afterwards.

Because `ViewObservable.subscribe` accepts a callback that receives a
collection of records, an observable can also serve as the `DataSource` of
another view:

    ```python
    source = CollectionView(records)
    source.filter = lambda r: r.active
    derived = CollectionView(source.as_observable())
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from collectionview.config.logging import get_logger

if TYPE_CHECKING:
    from collectionview.config.logging import CollectionViewLogger
    from collectionview.view import ChangeEvent, CollectionView

logger: CollectionViewLogger = get_logger(__name__)

T = TypeVar("T")

Observer = Callable[[tuple[T, ...]], None]


class Subscription:
    """Handle returned by `ViewObservable.subscribe`; `dispose` stops delivery."""

    def __init__(self, dispose: Callable[[], None]) -> None:
        self._dispose: Callable[[], None] | None = dispose

    def __repr__(self) -> str:
        return f"{type(self).__name__}(closed={self.closed})"

    def __call__(self) -> None:
        self.dispose()

    @property
    def closed(self) -> bool:
        """Return True once the subscription has been disposed."""
        return self._dispose is None

    def dispose(self) -> None:
        """Stop delivering values to the observer. Idempotent."""
        dispose, self._dispose = self._dispose, None
        if dispose is not None:
            dispose()


class ViewObservable(Generic[T]):
    """Multicast observable of a view's current page."""

    def __init__(self, view: CollectionView[T]) -> None:
        self._view: CollectionView[T] = view
        self._observers: list[Observer[T]] = []
        self._connected: bool = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(observers={len(self._observers)})"

    @property
    def observer_count(self) -> int:
        """Return the number of active subscribers."""
        return len(self._observers)

    def subscribe(self, on_next: Observer[T]) -> Subscription:
        """Replay the current page to ``on_next``, then forward every change.

        Returns:
            Subscription: Handle to stop receiving values.
        """
        if not self._connected:
            self._view.changed.subscribe(self._on_changed)
            self._connected = True
            logger.debug("Connected observable to %r", self._view)

        def _remove() -> None:
            for i, observer in enumerate(self._observers):
                if observer is on_next:
                    del self._observers[i]
                    break

        self._observers.append(on_next)
        try:
            on_next(self._view.view)
        except Exception:
            _remove()
            raise

        return Subscription(_remove)

    def _on_changed(self, event: ChangeEvent[T]) -> None:
        # Copy: observers may dispose while being notified.
        for observer in tuple(self._observers):
            observer(event.new_view)
