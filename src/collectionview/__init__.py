# topmark:header:start
#
#   project      : CollectionView
#   file         : __init__.py
#   file_relpath : src/collectionview/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CollectionView package.

CollectionView presents a mutable in-memory sequence of records as a derived,
always-consistent view: a pipeline of filtering, sorting and pagination, with
synchronous change notification to listeners and push-based delivery to
subscribers.

Typical usage:
    ```python
    from collectionview import CollectionView, SortDirection

    view = CollectionView(products)
    view.filter = lambda p: p["visible"]
    view.sort("price", SortDirection.DESCENDING)
    view.page_size = 20
    for product in view.view:
        ...
    ```
"""

from __future__ import annotations

from collectionview.config.model import ViewSettings
from collectionview.constants import COLLECTIONVIEW_VERSION
from collectionview.errors import (
    CollectionViewError,
    DuplicateNameError,
    IllegalStateError,
    InvalidArgumentError,
    NotFoundError,
    ValidationError,
)
from collectionview.filtering import FilterDescriptor, FilterSet
from collectionview.notifier import Notifier
from collectionview.observable import Subscription, ViewObservable
from collectionview.sorting import (
    FullComparator,
    KeySelector,
    PropertyName,
    SortDescriptor,
    SortDescriptorSet,
    SortDirection,
    default_compare,
    resolve_sort_key,
)
from collectionview.view import ChangeEvent, CollectionView, DataSource

__version__: str = COLLECTIONVIEW_VERSION

__all__ = [
    "ChangeEvent",
    "CollectionView",
    "CollectionViewError",
    "DataSource",
    "DuplicateNameError",
    "FilterDescriptor",
    "FilterSet",
    "FullComparator",
    "IllegalStateError",
    "InvalidArgumentError",
    "KeySelector",
    "NotFoundError",
    "Notifier",
    "PropertyName",
    "SortDescriptor",
    "SortDescriptorSet",
    "SortDirection",
    "Subscription",
    "ValidationError",
    "ViewObservable",
    "ViewSettings",
    "default_compare",
    "resolve_sort_key",
]
