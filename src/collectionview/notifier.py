# topmark:header:start
#
#   project      : CollectionView
#   file         : notifier.py
#   file_relpath : src/collectionview/notifier.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Minimal synchronous publish/subscribe primitive.

Every mutable entity in CollectionView (filter and sort descriptors, their
collections, and the view itself) owns one `Notifier` and composes it rather
than inheriting from it.

Notes:
    - Handlers run synchronously, in registration order, on the publishing thread.
    - The handler list is iterated *live*: a handler that subscribes or
      unsubscribes while `publish` is running will affect the ongoing fan-out.
      Removing a handler from within its own callback is therefore unsafe.
    - There is no ordering guarantee across distinct notifiers.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from collectionview.errors import NotFoundError

H = TypeVar("H", bound=Callable[..., Any])


class Notifier(Generic[H]):
    """Ordered list of handlers invoked synchronously on `publish`."""

    def __init__(self) -> None:
        self._handlers: list[H] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def __contains__(self, handler: object) -> bool:
        return handler in self._handlers

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handlers={len(self._handlers)})"

    @property
    def has_subscribers(self) -> bool:
        """Return True if at least one handler is registered."""
        return bool(self._handlers)

    def subscribe(self, handler: H) -> None:
        """Append ``handler`` to the handler list.

        The same handler may be registered more than once; it is then called
        once per registration.
        """
        self._handlers.append(handler)

    def unsubscribe(self, handler: H) -> None:
        """Remove the first registration of ``handler``.

        Raises:
            NotFoundError: If ``handler`` is not registered.
        """
        try:
            self._handlers.remove(handler)
        except ValueError:
            raise NotFoundError("Handler could not be found.") from None

    def publish(self, *args: Any, **kwargs: Any) -> None:
        """Invoke every registered handler with the given arguments."""
        for handler in self._handlers:
            handler(*args, **kwargs)
