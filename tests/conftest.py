# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from todo_tracker.api.client import TodoClient
from todo_tracker.api.server import create_app
from todo_tracker.core.board import TodoBoard
from todo_tracker.core.state import AppState
from todo_tracker.todos.store import TodoStore

from .fakes import FakeTodoGateway


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the server factory and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "todos.sqlite3",
        host="127.0.0.1",
        port=5000,
        cors_origins=[],
        require_title=False,
        api_base_url="http://testserver",
        http_timeout_seconds=5.0,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TodoStore:
    # Real SQLite: the SQL is part of what we want to test.
    return TodoStore(settings.db_path)


@pytest.fixture()
def http(settings: SimpleNamespace, store: TodoStore) -> TestClient:
    return TestClient(create_app(settings, store))


@pytest.fixture()
def api_client(http: TestClient) -> TodoClient:
    return TodoClient(http=http)


@pytest.fixture()
def gateway() -> FakeTodoGateway:
    return FakeTodoGateway()


@pytest.fixture()
def state(settings: SimpleNamespace, gateway: FakeTodoGateway) -> AppState:
    """AppState wired with the in-memory gateway."""
    return AppState(settings=settings, board=TodoBoard(gateway))
