# src/todo_tracker/api/client.py

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from ..core.errors import ApiUnavailable, NotFound, StorageUnavailable, TodoError, ValidationFailed
from ..todos.models import Priority, Todo

logger = logging.getLogger(__name__)


def _make_timeout(total_s: float) -> httpx.Timeout:
    # connect fails fast; reads may wait for a slow database
    return httpx.Timeout(total_s, connect=min(5.0, total_s))


class TodoClient:
    """
    Synchronous client for the todo HTTP API.

    Every call is one request; nothing is retried or cached. Non-2xx responses
    are mapped back onto core.errors so callers handle the same exceptions the
    server raised. An httpx.Client may be injected (tests pass FastAPI's TestClient).
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5000",
        *,
        timeout_seconds: float = 10.0,
        http: httpx.Client | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url, timeout=_make_timeout(timeout_seconds))

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> TodoClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- low-level helpers ----

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Todo API %s %s unreachable: %s", method, path, e)
            raise ApiUnavailable(f"Todo API is unreachable: {e}") from e

        if resp.is_success:
            return resp.json()

        raise self._error_from_response(resp, method, path)

    @staticmethod
    def _error_from_response(resp: httpx.Response, method: str, path: str) -> TodoError:
        try:
            payload = resp.json()
        except ValueError:
            payload = {}
        detail = ""
        if isinstance(payload, dict):
            detail = str(payload.get("detail") or "")
        detail = detail or resp.reason_phrase or f"HTTP {resp.status_code}"

        logger.info("Todo API %s %s -> %s: %s", method, path, resp.status_code, detail)

        if resp.status_code in (400, 422):
            return ValidationFailed(detail)
        if resp.status_code == 404:
            todo_id = _id_from_path(path)
            return NotFound(todo_id if todo_id is not None else -1, detail)
        if resp.status_code == 503:
            return StorageUnavailable(detail)
        return ApiUnavailable(f"Unexpected response {resp.status_code}: {detail}", status_code=resp.status_code)

    @staticmethod
    def _body(title: str, due_date: date | None, priority: Priority | None) -> dict[str, Any]:
        body: dict[str, Any] = {"title": title}
        if due_date is not None:
            body["due_date"] = due_date.isoformat()
        if priority is not None:
            body["priority"] = priority.value
        return body

    # ---- public API ----

    def list_todos(self, search: str | None = None) -> list[Todo]:
        params = {"search": search} if search else None
        data = self._request("GET", "/todos", params=params)
        return [Todo.from_dict(d) for d in data]

    def create_todo(
        self,
        title: str,
        *,
        due_date: date | None = None,
        priority: Priority | None = None,
    ) -> Todo:
        data = self._request("POST", "/todos", json=self._body(title, due_date, priority))
        return Todo.from_dict(data)

    def toggle_todo(self, todo_id: int) -> Todo:
        return Todo.from_dict(self._request("PUT", f"/todos/{int(todo_id)}/toggle"))

    def update_todo(
        self,
        todo_id: int,
        *,
        title: str,
        priority: Priority,
        due_date: date | None = None,
    ) -> Todo:
        # due_date is always sent: null clears it on the server (replace semantics).
        body = self._body(title, None, priority)
        body["due_date"] = due_date.isoformat() if due_date else None
        return Todo.from_dict(self._request("PUT", f"/todos/{int(todo_id)}", json=body))

    def delete_todo(self, todo_id: int) -> None:
        self._request("DELETE", f"/todos/{int(todo_id)}")


def _id_from_path(path: str) -> int | None:
    for part in path.strip("/").split("/"):
        if part.isdigit():
            return int(part)
    return None
