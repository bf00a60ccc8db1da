# tests/test_pagination.py
import math

import pytest

from app.ticket.pagination import PageState, PaginationMetadata


@pytest.mark.parametrize(
    "total_items, page_size",
    [(0, 10), (1, 10), (10, 10), (11, 10), (12, 4), (28, 10), (5, 1), (99, 7)],
)
def test_total_pages_is_ceiling_division(total_items, page_size):
    meta = PaginationMetadata(current=1, page_size=page_size, total_items=total_items)
    assert meta.total_pages == math.ceil(total_items / page_size)


def test_page_size_must_be_positive():
    with pytest.raises(ValueError):
        PaginationMetadata(current=1, page_size=0, total_items=10)


def test_empty_list_is_compact():
    meta = PaginationMetadata(current=1, page_size=10, total_items=0)
    assert meta.page_state == PageState.COMPACT
    assert meta.page_list() == []
    assert not meta.has_previous
    assert not meta.has_next


def test_short_list_shows_every_page():
    meta = PaginationMetadata(current=2, page_size=10, total_items=30)
    assert meta.window_size == 5
    assert meta.page_state == PageState.COMPACT
    assert meta.page_list() == [1, 2, 3]


def test_near_the_start_shows_every_page():
    meta = PaginationMetadata(current=3, page_size=10, total_items=200)
    assert meta.page_state == PageState.START
    assert meta.page_list() == list(range(1, 21))


def test_center_window_follows_current_page():
    meta = PaginationMetadata(current=10, page_size=10, total_items=200)
    assert meta.page_state == PageState.CENTER
    assert meta.page_list() == [8, 9, 10, 11, 12]


@pytest.mark.parametrize("current, expected", [(16, [14, 15, 16, 17, 18, 19, 20]), (20, [18, 19, 20])])
def test_end_window_runs_to_last_page(current, expected):
    meta = PaginationMetadata(current=current, page_size=10, total_items=200)
    assert meta.page_state == PageState.END
    assert meta.page_list() == expected


def test_end_window_uses_pages_not_items():
    meta = PaginationMetadata(current=19, page_size=10, total_items=195)
    assert meta.total_pages == 20
    assert max(meta.page_list()) == 20


def test_skip_take_and_neighbours():
    meta = PaginationMetadata(current=3, page_size=10, total_items=45)
    assert meta.skip == 20
    assert meta.take == 10
    assert meta.has_previous
    assert meta.has_next

    last = PaginationMetadata(current=5, page_size=10, total_items=45)
    assert not last.has_next


def test_small_page_size_still_has_a_window():
    meta = PaginationMetadata(current=4, page_size=1, total_items=10)
    assert meta.window_size == 1
    assert meta.page_state == PageState.CENTER
    assert meta.page_list() == [4]


@pytest.mark.parametrize("requested", [21, 50])
def test_page_past_the_end_lands_on_last_page(requested):
    meta = PaginationMetadata(current=requested, page_size=10, total_items=200)
    assert meta.current == 20
    assert meta.page_state == PageState.END
    assert meta.page_list() == [18, 19, 20]
    assert not meta.has_next


def test_page_before_the_start_lands_on_first_page():
    meta = PaginationMetadata(current=0, page_size=10, total_items=45)
    assert meta.current == 1
    assert meta.skip == 0
    assert not meta.has_previous
