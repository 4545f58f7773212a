# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations: TodoStore into the HTTP app (server side),
  TodoClient into TodoBoard/AppState (console side).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..api.client import TodoClient
from ..api.server import create_app
from ..config import get_settings
from ..core.board import TodoBoard
from ..core.state import AppState
from ..todos.store import TodoStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_server_app(*, settings=None) -> FastAPI:
    """
    Build the HTTP app backed by a SQLite TodoStore.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = TodoStore(settings.db_path, require_title=settings.require_title)
    if settings.require_title:
        logger.info("Blank titles will be rejected (TODO_REQUIRE_TITLE is on).")
    return create_app(settings, store)


def create_console_state(*, settings=None, gateway=None) -> AppState:
    """
    Build AppState for the console front end.

    gateway defaults to a TodoClient pointed at settings.api_base_url.
    """
    if settings is None:
        settings = get_settings()

    if gateway is None:
        gateway = TodoClient(
            settings.api_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )

    return AppState(settings=settings, board=TodoBoard(gateway))
