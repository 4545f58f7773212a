# src/todo_tracker/todos/state.py

from __future__ import annotations

"""
Client-held todo list state and its reducer.

TodoListState is immutable. The only way to get a new state is reduce(state, action)
with one of the actions below; the controller (TodoBoard) owns the current value.

List order: newest first, as the API returns it. New todos go to the front;
updated/toggled todos replace the record with the same id in place.
"""

from dataclasses import dataclass, field, replace

from .models import Todo
from .view import Filter


@dataclass(frozen=True, slots=True)
class TodoListState:
    todos: tuple[Todo, ...] = ()
    search_term: str = ""
    filter: Filter = Filter.ALL
    notice: str | None = None
    loaded: bool = False


# ---- actions ----


@dataclass(frozen=True, slots=True)
class TodosLoaded:
    todos: tuple[Todo, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TodoAdded:
    todo: Todo


@dataclass(frozen=True, slots=True)
class TodoReplaced:
    todo: Todo


@dataclass(frozen=True, slots=True)
class TodoRemoved:
    todo_id: int


@dataclass(frozen=True, slots=True)
class SearchChanged:
    search_term: str


@dataclass(frozen=True, slots=True)
class FilterChanged:
    filter: Filter


@dataclass(frozen=True, slots=True)
class OperationFailed:
    message: str


@dataclass(frozen=True, slots=True)
class NoticeCleared:
    pass


Action = (
    TodosLoaded
    | TodoAdded
    | TodoReplaced
    | TodoRemoved
    | SearchChanged
    | FilterChanged
    | OperationFailed
    | NoticeCleared
)


def reduce(state: TodoListState, action: Action) -> TodoListState:
    match action:
        case TodosLoaded(todos=todos):
            return replace(state, todos=tuple(todos), loaded=True, notice=None)
        case TodoAdded(todo=todo):
            rest = tuple(t for t in state.todos if t.id != todo.id)
            return replace(state, todos=(todo, *rest), notice=None)
        case TodoReplaced(todo=todo):
            return replace(
                state,
                todos=tuple(todo if t.id == todo.id else t for t in state.todos),
                notice=None,
            )
        case TodoRemoved(todo_id=todo_id):
            return replace(
                state,
                todos=tuple(t for t in state.todos if t.id != todo_id),
                notice=None,
            )
        case SearchChanged(search_term=term):
            return replace(state, search_term=term)
        case FilterChanged(filter=flt):
            return replace(state, filter=flt)
        case OperationFailed(message=message):
            return replace(state, notice=message)
        case NoticeCleared():
            return replace(state, notice=None)
    raise TypeError(f"Unknown action: {action!r}")
