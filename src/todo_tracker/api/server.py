# src/todo_tracker/api/server.py

"""
HTTP API over TodoStore.

Endpoints:
    GET    /todos[?search=]     -> array of Todo (newest first)
    POST   /todos               -> created Todo
    PUT    /todos/{id}/toggle   -> updated Todo
    PUT    /todos/{id}          -> updated Todo (full replace of title/due_date/priority)
    DELETE /todos/{id}          -> {"message": "Todo deleted"} (also for unknown ids)
    GET    /health              -> {"status": "ok", "total": n}

Errors are JSON {"error": <kind>, "detail": <message>}:
    validation_failed -> 422, not_found -> 404, storage_unavailable -> 503.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator

from ..core.errors import NotFound, StorageUnavailable, TodoError, ValidationFailed
from ..core.ports import TodoRepo
from ..todos.models import Priority
from ..todos.store import TodoStore

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[TodoError], int] = {
    ValidationFailed: 422,
    NotFound: 404,
    StorageUnavailable: 503,
}


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TodoCreate(BaseModel):
    title: str
    due_date: Optional[date] = None
    priority: Optional[Priority] = None

    @field_validator("due_date", "priority", mode="before")
    @classmethod
    def blank_optional_to_none(cls, value: Any) -> Any:
        # An empty string means "not given" for the optional fields.
        return _blank_to_none(value)


class TodoUpdate(BaseModel):
    title: str
    due_date: Optional[date] = None
    priority: Priority

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_to_none(cls, value: Any) -> Any:
        return _blank_to_none(value)


# ─────────────────────────────────────────────────────────────
#  Error Handlers
# ─────────────────────────────────────────────────────────────

def _error_response(status_code: int, kind: str, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "detail": detail})


async def _handle_todo_error(request: Request, exc: TodoError) -> JSONResponse:
    status_code = 500
    for cls, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, cls):
            status_code = code
            break

    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind, exc)
    return _error_response(status_code, exc.kind, str(exc))


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg", "invalid")))
    detail = "; ".join(parts) or "invalid request"
    logger.info("%s %s rejected (validation_failed): %s", request.method, request.url.path, detail)
    return _error_response(422, ValidationFailed.kind, detail)


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(settings=None, store: TodoRepo | None = None) -> FastAPI:
    """
    Build the FastAPI app.

    settings: anything with db_path / require_title / cors_origins (Settings or a test namespace).
    store: injected repo; when None a TodoStore is opened at settings.db_path.
    """
    if store is None:
        if settings is None:
            raise ValueError("create_app needs settings or a store")
        store = TodoStore(
            settings.db_path,
            require_title=bool(getattr(settings, "require_title", False)),
        )

    app = FastAPI(title=str(getattr(settings, "app_name", "todo")), version="1.0.0")
    app.state.store = store

    origins = list(getattr(settings, "cors_origins", []) or [])
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    app.add_exception_handler(TodoError, _handle_todo_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)

    def repo(request: Request) -> TodoRepo:
        return request.app.state.store

    # ─────────────────────────────────────────────────────────
    #  Routes
    # ─────────────────────────────────────────────────────────

    @app.get("/health")
    def health(request: Request):
        return {"status": "ok", "total": repo(request).count_todos()}

    @app.get("/todos")
    def list_todos(request: Request, search: Optional[str] = None):
        todos = repo(request).list_todos(search or None)
        return [t.to_dict() for t in todos]

    @app.post("/todos")
    def create_todo(request: Request, body: TodoCreate):
        todo = repo(request).create_todo(body.title, due_date=body.due_date, priority=body.priority)
        return todo.to_dict()

    @app.put("/todos/{todo_id}/toggle")
    def toggle_todo(request: Request, todo_id: int):
        return repo(request).toggle_todo(todo_id).to_dict()

    @app.put("/todos/{todo_id}")
    def update_todo(request: Request, todo_id: int, body: TodoUpdate):
        todo = repo(request).update_todo(
            todo_id,
            title=body.title,
            due_date=body.due_date,
            priority=body.priority,
        )
        return todo.to_dict()

    @app.delete("/todos/{todo_id}")
    def delete_todo(request: Request, todo_id: int):
        repo(request).delete_todo(todo_id)
        return {"message": "Todo deleted"}

    return app
