# src/todo_tracker/core/board.py

"""
TodoBoard: the client-side controller.

It owns the single TodoListState value, performs one API call per user action,
and moves the state forward only through todos.state.reduce(). A failed call never
touches the held list; it records a notice the front end shows to the user.
"""

from __future__ import annotations

import logging
from datetime import date

from ..todos.models import Priority, Todo
from ..todos.state import (
    Action,
    FilterChanged,
    NoticeCleared,
    OperationFailed,
    SearchChanged,
    TodoAdded,
    TodoListState,
    TodoRemoved,
    TodoReplaced,
    TodosLoaded,
    reduce,
)
from ..todos.view import Filter, TodoView, derive_view
from .errors import NotFound, TodoError
from .ports import TodoGateway

logger = logging.getLogger(__name__)


class TodoBoard:
    def __init__(self, gateway: TodoGateway, state: TodoListState | None = None) -> None:
        self._gateway = gateway
        self._state = state or TodoListState()

    @property
    def state(self) -> TodoListState:
        return self._state

    def _dispatch(self, action: Action) -> TodoListState:
        self._state = reduce(self._state, action)
        return self._state

    def _fail(self, what: str, err: TodoError) -> bool:
        logger.info("%s failed: %s", what, err)
        self._dispatch(OperationFailed(f"{what} failed: {err}"))
        return False

    # ---- user actions (one request each) ----

    def refresh(self) -> bool:
        """Full refetch; the only time the held list is replaced wholesale."""
        try:
            todos = self._gateway.list_todos()
        except TodoError as e:
            return self._fail("Loading todos", e)
        self._dispatch(TodosLoaded(tuple(todos)))
        logger.debug("Loaded %d todos", len(todos))
        return True

    def add(
        self,
        title: str,
        *,
        due_date: date | None = None,
        priority: Priority | None = None,
    ) -> Todo | None:
        if not title.strip():
            self._dispatch(OperationFailed("Title must not be empty."))
            return None
        try:
            todo = self._gateway.create_todo(title, due_date=due_date, priority=priority)
        except TodoError as e:
            self._fail("Adding todo", e)
            return None
        self._dispatch(TodoAdded(todo))
        return todo

    def toggle(self, todo_id: int) -> Todo | None:
        try:
            todo = self._gateway.toggle_todo(todo_id)
        except TodoError as e:
            self._fail("Updating todo status", e)
            return None
        self._dispatch(TodoReplaced(todo))
        return todo

    def update(
        self,
        todo_id: int,
        *,
        title: str,
        priority: Priority,
        due_date: date | None = None,
    ) -> Todo | None:
        if not title.strip():
            self._dispatch(OperationFailed("Title must not be empty."))
            return None
        try:
            todo = self._gateway.update_todo(
                todo_id, title=title, priority=priority, due_date=due_date
            )
        except TodoError as e:
            self._fail("Saving todo", e)
            return None
        self._dispatch(TodoReplaced(todo))
        return todo

    def delete(self, todo_id: int) -> bool:
        try:
            self._gateway.delete_todo(todo_id)
        except NotFound:
            # Already gone on the server: drop it locally as well.
            pass
        except TodoError as e:
            return self._fail("Deleting todo", e)
        self._dispatch(TodoRemoved(todo_id))
        return True

    # ---- local view inputs ----

    def set_search(self, term: str) -> None:
        self._dispatch(SearchChanged(term))

    def set_filter(self, flt: Filter) -> None:
        self._dispatch(FilterChanged(flt))

    def clear_notice(self) -> None:
        self._dispatch(NoticeCleared())

    def find(self, todo_id: int) -> Todo | None:
        for t in self._state.todos:
            if t.id == todo_id:
                return t
        return None

    def view(self, *, today: date | None = None) -> TodoView:
        s = self._state
        return derive_view(s.todos, s.search_term, s.filter, today=today)
