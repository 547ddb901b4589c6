from __future__ import annotations

import datetime as dt
import itertools

import pytest

from core.models import Pagination, TaskFilter
from core.view_model import derive_view, filter_tasks, matches, paginate, parse_filter_date

from .fakes import make_task


def _mirror():
    return [
        make_task("a", priority="High", completed=True, created="2024-03-01T09:00:00Z"),
        make_task("b", priority="Medium", created="2024-03-05T23:59:59Z"),
        make_task("c", priority="Low", created="2024-03-06T00:00:00Z"),
        make_task("d", priority="High", created="2024-03-10T12:00:00Z"),
        make_task("e", priority="Low", completed=True, created="2024-02-28T12:00:00Z"),
    ]


@pytest.mark.parametrize(
    "priority,status,from_date,to_date",
    list(
        itertools.product(
            ["All", "High", "Medium", "Low"],
            ["All", "Completed", "Pending"],
            [None, dt.date(2024, 3, 1)],
            [None, dt.date(2024, 3, 5)],
        )
    ),
)
def test_filtered_set_is_subset_satisfying_every_predicate(priority, status, from_date, to_date):
    mirror = _mirror()
    filters = TaskFilter(priority, status, from_date, to_date)
    result = filter_tasks(mirror, filters)

    assert all(t in mirror for t in result)
    for t in result:
        assert priority == "All" or t.priority == priority
        assert status == "All" or (status == "Completed") == t.completed
        if from_date:
            assert t.created_at.date() >= from_date
        if to_date:
            assert t.created_at.date() <= to_date
    # nothing that matches was dropped
    assert [t for t in mirror if matches(t, filters)] == result


def test_to_date_is_inclusive_through_end_of_day():
    last_second = make_task("x", created="2024-03-05T23:59:59Z")
    next_midnight = make_task("y", created="2024-03-06T00:00:00Z")
    filters = TaskFilter(to_date=dt.date(2024, 3, 5))

    assert matches(last_second, filters)
    assert not matches(next_midnight, filters)


def test_from_date_starts_at_midnight():
    filters = TaskFilter(from_date=dt.date(2024, 3, 6))
    assert matches(make_task("x", created="2024-03-06T00:00:00Z"), filters)
    assert not matches(make_task("y", created="2024-03-05T23:59:59Z"), filters)


def test_filter_keeps_mirror_order():
    mirror = _mirror()
    result = filter_tasks(mirror, TaskFilter(status="Pending"))
    assert [t.id for t in result] == ["b", "c", "d"]


def test_twelve_items_five_per_page():
    items = [make_task(str(i)) for i in range(12)]

    first = paginate(items, Pagination(1, 5))
    assert [t.id for t in first.rows] == ["0", "1", "2", "3", "4"]
    assert first.total_pages == 3
    assert not first.has_previous
    assert first.has_next

    last = paginate(items, Pagination(3, 5))
    assert [t.id for t in last.rows] == ["10", "11"]
    assert last.has_previous
    assert not last.has_next
    assert last.label == "Page 3 of 3"


def test_empty_result_reports_zero_pages_and_disables_navigation():
    page = paginate([], Pagination(1, 10))
    assert page.rows == []
    assert page.total_pages == 0
    assert page.current_page == 1
    assert not page.has_next
    assert not page.has_previous
    assert page.label == "Page 1 of 0"


def test_stale_page_is_clamped_to_last_page():
    items = [make_task(str(i)) for i in range(6)]
    page = paginate(items, Pagination(4, 5))
    assert page.current_page == 2
    assert [t.id for t in page.rows] == ["5"]


def test_next_and_previous_clamp():
    p = Pagination(1, 5)
    assert p.previous_page().current_page == 1
    assert p.next_page(3).current_page == 2
    assert Pagination(3, 5).next_page(3).current_page == 3
    # no results: stays on page 1
    assert p.next_page(0).current_page == 1


@pytest.mark.parametrize("start_page", [1, 2, 7])
@pytest.mark.parametrize("size", [5, 10, 15])
def test_changing_page_size_resets_to_first_page(start_page, size):
    p = Pagination(start_page, 5).with_entries_per_page(size)
    assert p.current_page == 1
    assert p.entries_per_page == size


def test_page_size_must_be_offered_option():
    with pytest.raises(ValueError):
        Pagination(1, 7)
    with pytest.raises(ValueError):
        Pagination(1, 5).with_entries_per_page(20)


def test_derive_view_filters_then_paginates():
    mirror = _mirror() * 3  # 15 tasks, 6 of them High
    page = derive_view(mirror, TaskFilter(priority="High"), Pagination(2, 5))
    assert page.filtered_count == 6
    assert page.total_pages == 2
    assert len(page.rows) == 1
    assert page.rows[0].priority == "High"


def test_parse_filter_date():
    assert parse_filter_date(" 2024-03-05 ") == dt.date(2024, 3, 5)
    assert parse_filter_date("") is None
    assert parse_filter_date("   ") is None
    with pytest.raises(ValueError):
        parse_filter_date("05/03/2024")
