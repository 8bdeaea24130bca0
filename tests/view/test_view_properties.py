# topmark:header:start
#
#   project      : CollectionView
#   file         : test_view_properties.py
#   file_relpath : tests/view/test_view_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the consistency of the derived stages.

For arbitrary records, filter thresholds, sort descriptors and paging state:
1) the filtered stage is exactly the raw records accepted by every filter, in order;
2) the sorted stage is a permutation of the filtered stage, ordered by the last descriptor;
3) the paged stage is the matching slice of the sorted stage;
4) recomputing without a mutation changes nothing.
"""

from __future__ import annotations

from collections import Counter

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from collectionview import CollectionView, SortDirection
from tests.helpers import ChangeRecorder, Player
from tests.strategies_collectionview import s_paging, s_players, s_sort_spec

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow


def _build(
    records: list[Player],
    min_points: int,
    sort_spec: list[tuple[str, SortDirection]],
    paging: tuple[int, int],
) -> CollectionView[Player]:
    view: CollectionView[Player] = CollectionView(records)
    with view.batch_update():
        view.filters.add("points", lambda p: p.points >= min_points)
        view.filters.add("active", lambda p: p.active)
        for field, direction in sort_spec:
            view.sorting.add(field, direction)
        view.page(*paging)
    return view


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(
    records=s_players(),
    min_points=st.integers(min_value=0, max_value=6),
    sort_spec=s_sort_spec(),
    paging=s_paging(),
)
def test_stages_are_consistent(
    records: list[Player],
    min_points: int,
    sort_spec: list[tuple[str, SortDirection]],
    paging: tuple[int, int],
) -> None:
    """Every stage is derived from the one before it."""
    view = _build(records, min_points, sort_spec, paging)
    page_index, page_size = paging

    expected_filtered = [p for p in records if p.points >= min_points and p.active]
    assert list(view.filtered_view) == expected_filtered

    assert Counter(view.sorted_view) == Counter(view.filtered_view)
    if sort_spec:
        field, direction = sort_spec[-1]
        keys = [getattr(p, field) for p in view.sorted_view]
        assert keys == sorted(keys, reverse=direction is SortDirection.DESCENDING)
    else:
        assert view.sorted_view == view.filtered_view

    start = page_index * page_size
    assert view.paged_view == view.sorted_view[start : start + page_size]
    assert len(view.paged_view) <= page_size
    assert view.total_count == len(expected_filtered)


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(records=s_players(), sort_spec=s_sort_spec(), paging=s_paging())
def test_recompute_is_idempotent(
    records: list[Player],
    sort_spec: list[tuple[str, SortDirection]],
    paging: tuple[int, int],
) -> None:
    """Running the pipeline again without a mutation yields the same stages."""
    view = _build(records, 0, sort_spec, paging)
    before = (view.filtered_view, view.sorted_view, view.paged_view)

    view.apply_filters()

    assert (view.filtered_view, view.sorted_view, view.paged_view) == before


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(records=s_players(), paging=s_paging())
def test_paging_mutation_publishes_one_event(
    records: list[Player], paging: tuple[int, int]
) -> None:
    """A single paging call is observed as exactly one change."""
    view: CollectionView[Player] = CollectionView(records)
    recorder = ChangeRecorder()
    view.changed.subscribe(recorder)

    view.page(*paging)

    assert recorder.count == 1
    assert recorder.last == view.view


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(records=s_players(max_size=60), page_size=st.integers(min_value=1, max_value=12))
def test_walking_all_pages_visits_every_record_once(
    records: list[Player], page_size: int
) -> None:
    """Navigating forward from the first page concatenates to the sorted stage."""
    view: CollectionView[Player] = CollectionView(records)
    view.page(0, page_size)

    seen: list[Player] = list(view.view)
    while view.can_navigate_to_next_page:
        view.go_to_next_page()
        seen.extend(view.view)

    assert seen == list(view.sorted_view)
