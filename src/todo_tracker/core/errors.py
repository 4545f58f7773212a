# src/todo_tracker/core/errors.py

"""
Error taxonomy shared by the store, the HTTP server and the API client.

The server maps each class to an HTTP status; the client maps statuses back,
so callers on both sides catch the same exception types.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all todo_tracker failures."""

    kind = "error"


class ValidationFailed(TodoError):
    """Malformed or missing required input."""

    kind = "validation_failed"


class NotFound(TodoError):
    """A mutation targeted an id that does not exist."""

    kind = "not_found"

    def __init__(self, todo_id: int, message: str | None = None) -> None:
        super().__init__(message or f"Todo {todo_id} not found")
        self.todo_id = todo_id


class StorageUnavailable(TodoError):
    """The durable store cannot be reached or a statement failed."""

    kind = "storage_unavailable"


class ApiUnavailable(TodoError):
    """Client side: the API could not be reached or answered with an unexpected status."""

    kind = "api_unavailable"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
