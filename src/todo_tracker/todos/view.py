# src/todo_tracker/todos/view.py

from __future__ import annotations

"""
Derived view over the client-held todo list.

Everything here is a pure function of (todos, search term, filter, today):
- the filtered + priority-sorted list that is actually rendered,
- the aggregate counts that drive the stats line and the filter badges.

Counts are always computed over the unfiltered list, so badges do not move
when the search term changes. Nothing here mutates its input.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from .models import Todo


class Filter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    DONE = "done"
    OVERDUE = "overdue"


@dataclass(frozen=True, slots=True)
class TodoCounts:
    total: int
    completed: int
    active: int
    overdue: int

    def badge(self, flt: Filter) -> int:
        """Number shown next to a filter button (search-independent)."""
        return _BADGES[flt](self)


_BADGES: dict[Filter, Callable[[TodoCounts], int]] = {
    Filter.ALL: lambda c: c.total,
    Filter.ACTIVE: lambda c: c.active,
    Filter.DONE: lambda c: c.completed,
    Filter.OVERDUE: lambda c: c.overdue,
}


@dataclass(frozen=True, slots=True)
class TodoItemView:
    todo: Todo
    overdue: bool


@dataclass(frozen=True, slots=True)
class TodoView:
    items: tuple[TodoItemView, ...]
    counts: TodoCounts
    search_term: str
    filter: Filter


def is_overdue(todo: Todo, today: date) -> bool:
    """Due today or earlier and not completed. A due date of today already counts."""
    return todo.due_date is not None and not todo.completed and todo.due_date <= today


def matches_search(todo: Todo, search_term: str) -> bool:
    if not search_term:
        return True
    return search_term.casefold() in todo.title.casefold()


_FILTERS: dict[Filter, Callable[[Todo, date], bool]] = {
    Filter.ALL: lambda t, today: True,
    Filter.ACTIVE: lambda t, today: not t.completed,
    Filter.DONE: lambda t, today: t.completed,
    Filter.OVERDUE: is_overdue,
}


def filter_todos(
    todos: Sequence[Todo], search_term: str, flt: Filter, today: date
) -> list[Todo]:
    pred = _FILTERS[flt]
    return [t for t in todos if pred(t, today) and matches_search(t, search_term)]


def sort_by_priority(todos: Sequence[Todo]) -> list[Todo]:
    """High first, then Medium, then Low; equal priorities keep their order (sorted() is stable)."""
    return sorted(todos, key=lambda t: t.priority.urgency)


def compute_counts(todos: Sequence[Todo], today: date) -> TodoCounts:
    completed = sum(1 for t in todos if t.completed)
    return TodoCounts(
        total=len(todos),
        completed=completed,
        active=len(todos) - completed,
        overdue=sum(1 for t in todos if is_overdue(t, today)),
    )


def derive_view(
    todos: Sequence[Todo],
    search_term: str = "",
    flt: Filter = Filter.ALL,
    *,
    today: date | None = None,
) -> TodoView:
    if today is None:
        today = date.today()

    visible = sort_by_priority(filter_todos(todos, search_term, flt, today))
    return TodoView(
        items=tuple(TodoItemView(todo=t, overdue=is_overdue(t, today)) for t in visible),
        counts=compute_counts(todos, today),
        search_term=search_term,
        filter=flt,
    )
