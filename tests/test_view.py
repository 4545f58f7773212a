# tests/test_view.py

from __future__ import annotations

from datetime import date, timedelta

import pytest

from todo_tracker.todos.models import Priority, Todo
from todo_tracker.todos.view import (
    Filter,
    compute_counts,
    derive_view,
    is_overdue,
    matches_search,
    sort_by_priority,
)

TODAY = date(2024, 5, 10)


def _todo(id: int, title: str = "t", *, completed: bool = False, due: date | None = None,
          priority: Priority = Priority.LOW) -> Todo:
    return Todo(id=id, title=title, completed=completed, due_date=due, priority=priority)


def test_overdue_boundary() -> None:
    assert is_overdue(_todo(1, due=TODAY), TODAY)
    assert is_overdue(_todo(2, due=TODAY - timedelta(days=1)), TODAY)
    assert not is_overdue(_todo(3, due=TODAY + timedelta(days=1)), TODAY)
    assert not is_overdue(_todo(4, due=TODAY - timedelta(days=30), completed=True), TODAY)
    assert not is_overdue(_todo(5), TODAY)


def test_search_is_case_insensitive_substring() -> None:
    milk = _todo(1, "Buy Milk")

    assert matches_search(milk, "milk")
    assert matches_search(milk, "Y M")
    assert matches_search(milk, "")
    assert not matches_search(milk, "bread")


def test_sort_high_medium_low_and_stable() -> None:
    todos = [
        _todo(1, priority=Priority.LOW),
        _todo(2, priority=Priority.HIGH),
        _todo(3, priority=Priority.MEDIUM),
        _todo(4, priority=Priority.HIGH),
    ]
    original = list(todos)

    out = sort_by_priority(todos)

    assert [t.priority for t in out] == [Priority.HIGH, Priority.HIGH, Priority.MEDIUM, Priority.LOW]
    assert [t.id for t in out] == [2, 4, 3, 1]
    assert todos == original


@pytest.mark.parametrize(
    ("flt", "expected_ids"),
    [
        (Filter.ALL, [3, 2, 1, 4]),
        (Filter.ACTIVE, [3, 1, 4]),
        (Filter.DONE, [2]),
        (Filter.OVERDUE, [3]),
    ],
)
def test_filters(flt: Filter, expected_ids: list[int]) -> None:
    todos = (
        _todo(4, "later", due=TODAY + timedelta(days=2)),
        _todo(3, "rent", due=TODAY, priority=Priority.HIGH),
        _todo(2, "paid", completed=True, due=TODAY - timedelta(days=1), priority=Priority.MEDIUM),
        _todo(1, "misc", priority=Priority.MEDIUM),
    )

    view = derive_view(todos, "", flt, today=TODAY)

    assert [i.todo.id for i in view.items] == expected_ids


def test_search_is_anded_with_filter() -> None:
    todos = (
        _todo(1, "Buy milk"),
        _todo(2, "Buy bread", completed=True),
        _todo(3, "Sell milk", completed=True),
    )

    view = derive_view(todos, "MILK", Filter.DONE, today=TODAY)

    assert [i.todo.id for i in view.items] == [3]


def test_counts_ignore_search_and_filter() -> None:
    todos = (
        _todo(1, "Buy milk", due=TODAY),
        _todo(2, "Buy bread", completed=True),
        _todo(3, "Walk dog"),
    )

    plain = derive_view(todos, "", Filter.ALL, today=TODAY)
    searched = derive_view(todos, "zzz", Filter.DONE, today=TODAY)

    assert plain.counts == searched.counts
    assert plain.counts == compute_counts(todos, TODAY)
    assert (plain.counts.total, plain.counts.active, plain.counts.completed, plain.counts.overdue) == (3, 2, 1, 1)
    assert searched.items == ()
    assert {f: searched.counts.badge(f) for f in Filter} == {
        Filter.ALL: 3,
        Filter.ACTIVE: 2,
        Filter.DONE: 1,
        Filter.OVERDUE: 1,
    }


def test_items_are_annotated_with_overdue() -> None:
    todos = (_todo(1, due=TODAY), _todo(2, due=TODAY + timedelta(days=1)))

    view = derive_view(todos, today=TODAY)

    assert {i.todo.id: i.overdue for i in view.items} == {1: True, 2: False}


def test_pay_rent_completed_is_not_overdue() -> None:
    rent = _todo(1, "Pay rent", completed=True, due=TODAY, priority=Priority.HIGH)

    assert derive_view((rent,), "", Filter.OVERDUE, today=TODAY).items == ()
