# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .board import TodoBoard


@dataclass
class AppState:
    """What the console front end and its commands share."""

    settings: Any
    board: TodoBoard
