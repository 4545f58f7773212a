# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used across layers.

- TodoRepo: what the HTTP server needs from storage (TodoStore implements it).
- TodoGateway: what the client controller needs from the API (TodoClient implements it).

Keeping these as Protocols lets tests swap in in-memory fakes.
"""

from datetime import date
from typing import Protocol

from ..todos.models import Priority, Todo


class TodoRepo(Protocol):
    def count_todos(self) -> int: ...
    def list_todos(self, search: str | None = None) -> list[Todo]: ...
    def create_todo(
            self,
            title: str,
            *,
            due_date: date | None = None,
            priority: Priority | None = None,
    ) -> Todo: ...
    def toggle_todo(self, todo_id: int) -> Todo: ...
    def update_todo(
            self,
            todo_id: int,
            *,
            title: str,
            priority: Priority,
            due_date: date | None = None,
    ) -> Todo: ...
    def delete_todo(self, todo_id: int) -> None: ...


class TodoGateway(Protocol):
    """Client-side view of the API. Same operations, raised errors from core.errors."""

    def list_todos(self, search: str | None = None) -> list[Todo]: ...
    def create_todo(
            self,
            title: str,
            *,
            due_date: date | None = None,
            priority: Priority | None = None,
    ) -> Todo: ...
    def toggle_todo(self, todo_id: int) -> Todo: ...
    def update_todo(
            self,
            todo_id: int,
            *,
            title: str,
            priority: Priority,
            due_date: date | None = None,
    ) -> Todo: ...
    def delete_todo(self, todo_id: int) -> None: ...
