# src/todo_tracker/todos/models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any


class Priority(StrEnum):
    """Three-level priority. Stored and transmitted by its display name."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def urgency(self) -> int:
        """Sort rank: lower sorts first (High before Medium before Low)."""
        return _URGENCY[self]

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        if not raw:
            return cls.LOW
        try:
            return cls(raw)
        except ValueError:
            return cls.LOW


_URGENCY: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


@dataclass(frozen=True, slots=True)
class Todo:
    id: int
    title: str
    completed: bool = False
    due_date: date | None = None
    priority: Priority = Priority.LOW

    def to_dict(self) -> dict[str, Any]:
        """JSON shape used on the wire."""
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "priority": self.priority.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Todo:
        raw_due = data.get("due_date")
        due = date.fromisoformat(str(raw_due)[:10]) if raw_due else None
        return cls(
            id=int(data["id"]),
            title=str(data.get("title") or ""),
            completed=bool(data.get("completed", False)),
            due_date=due,
            priority=Priority.from_db(data.get("priority")),
        )
