# topmark:header:start
#
#   project      : CollectionView
#   file         : test_sort_keys.py
#   file_relpath : tests/sorting/test_sort_keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for sort key resolution, default comparison and `SortDescriptor`."""

from __future__ import annotations

import operator
from datetime import date
from typing import Any

import pytest

from collectionview import (
    FullComparator,
    KeySelector,
    PropertyName,
    SortDescriptor,
    SortDirection,
    ValidationError,
    default_compare,
    resolve_sort_key,
)
from tests.helpers import Player


def by_points(p: Player) -> int:
    return p.points


def by_name_length(a: Player, b: Player) -> int:
    return len(a.name) - len(b.name)


def test_resolve_string_is_property_name() -> None:
    assert resolve_sort_key("points") == PropertyName("points")


def test_resolve_one_argument_callable_is_key_selector() -> None:
    assert resolve_sort_key(by_points) == KeySelector(by_points)


def test_resolve_two_argument_callable_is_full_comparator() -> None:
    assert resolve_sort_key(by_name_length) == FullComparator(by_name_length)


def test_resolve_keeps_explicit_variants() -> None:
    """Explicit variants bypass arity inspection."""
    key = KeySelector(by_name_length)
    assert resolve_sort_key(key) is key


def test_resolve_uninspectable_callable_is_key_selector() -> None:
    """``operator.itemgetter`` has no usable signature and acts as a selector."""
    getter = operator.itemgetter("price")
    assert resolve_sort_key(getter) == KeySelector(getter)


@pytest.mark.parametrize("bad", [lambda: 0, lambda a, b, c: 0, 42])
def test_resolve_rejects_unusable_expressions(bad: Any) -> None:
    with pytest.raises(ValidationError):
        resolve_sort_key(bad)


def test_selector_equality_is_identity_for_callables() -> None:
    """Two equivalent lambdas are distinct selectors."""
    assert KeySelector(lambda p: p.points) != KeySelector(lambda p: p.points)
    assert PropertyName("points") == PropertyName("points")


@pytest.mark.parametrize(
    "low, high",
    [
        ("apple", "banana"),
        (1, 2),
        (1.5, 2),
        (False, True),
        (date(2020, 1, 1), date(2021, 1, 1)),
    ],
)
def test_default_compare_total_order(low: Any, high: Any) -> None:
    assert default_compare(low, high) < 0
    assert default_compare(high, low) > 0
    assert default_compare(low, low) == 0


def test_property_name_reads_mappings_and_attributes() -> None:
    key = PropertyName("points")
    assert key.extract({"points": 3}) == 3
    assert key.extract(Player("x", "PT", 7)) == 7


def test_descriptor_negates_for_descending() -> None:
    a, b = Player("a", "PT", 1), Player("b", "PT", 2)
    descriptor: SortDescriptor[Player] = SortDescriptor("points")

    assert descriptor.compare(a, b) < 0
    descriptor.direction = SortDirection.DESCENDING
    assert descriptor.compare(a, b) > 0


def test_descriptor_uses_comparator_verbatim() -> None:
    a, b = Player("bo", "PT", 1), Player("anna", "PT", 2)
    descriptor: SortDescriptor[Player] = SortDescriptor(by_name_length)

    assert descriptor.compare(a, b) == -2
    descriptor.toggle()
    assert descriptor.compare(a, b) == 2


def test_descriptor_uses_value_comparer_for_selectors() -> None:
    """A secondary value comparer replaces the default ordering of selected values."""
    a, b = Player("a", "PT", 1), Player("b", "PT", 2)
    descriptor: SortDescriptor[Player] = SortDescriptor(
        "points", value_comparer=lambda x, y: y - x
    )

    assert descriptor.compare(a, b) > 0


def test_toggle_flips_direction_and_publishes_once() -> None:
    hits: list[int] = []
    descriptor: SortDescriptor[Player] = SortDescriptor("points")
    descriptor.changed.subscribe(lambda: hits.append(1))

    descriptor.toggle()
    assert descriptor.direction is SortDirection.DESCENDING
    descriptor.toggle()
    assert descriptor.direction is SortDirection.ASCENDING

    assert len(hits) == 2


def test_selector_property_returns_original_expression() -> None:
    assert SortDescriptor("points").selector == "points"
    assert SortDescriptor(by_points).selector is by_points


def test_opposite_direction() -> None:
    assert SortDirection.ASCENDING.opposite() is SortDirection.DESCENDING
    assert SortDirection.DESCENDING.opposite() is SortDirection.ASCENDING
