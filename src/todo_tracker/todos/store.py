# src/todo_tracker/todos/store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from datetime import date
from pathlib import Path

from ..core.errors import NotFound, StorageUnavailable, ValidationFailed
from .models import Priority, Todo

logger = logging.getLogger(__name__)


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


# SQLite INTEGER is a signed 64-bit value; larger ids cannot exist in the table.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def _storable_id(todo_id: int) -> bool:
    return _MIN_ID <= int(todo_id) <= _MAX_ID


def _parse_due(raw: object) -> date | None:
    if not raw:
        return None
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        logger.warning("Ignoring malformed due_date %r", raw)
        return None


class TodoStore:
    """
    SQLite todo store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns (due_date/priority were added
      after the first release, older files only have id/title/completed)
    - add columns with ALTER TABLE only when needed

    Every public method is one unit of work on its own short-lived connection.
    There is no cache: reads always hit the file.
    """

    def __init__(self, db_path: str | Path = "todos.sqlite3", *, require_title: bool = False) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._require_title = require_title
        self._ensure_schema()
        try:
            total = self.count_todos()
        except StorageUnavailable:
            total = -1
        logger.info("TodoStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        # SQLite's LOWER() only folds ASCII; search must match Python's casefold().
        conn.create_function("casefold", 1, _casefold, deterministic=True)

    @contextlib.contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open todo database {self._db_path}: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error("TodoStore statement failed db=%s: %s", self._db_path, e)
            raise StorageUnavailable(f"Todo database error: {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    due_date TEXT,
                    priority TEXT NOT NULL DEFAULT 'Low'
                )
                """
            )

            cur.execute("PRAGMA table_info(todos)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE todos ADD COLUMN {name} {decl}")
                logger.info("TodoStore migration: added column %s", name)

            add_col("completed", "INTEGER NOT NULL DEFAULT 0")
            add_col("due_date", "TEXT")
            add_col("priority", "TEXT NOT NULL DEFAULT 'Low'")

            conn.commit()

    @staticmethod
    def _row_to_todo(row: sqlite3.Row) -> Todo:
        return Todo(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            completed=bool(row["completed"]),
            due_date=_parse_due(row["due_date"]),
            priority=Priority.from_db(row["priority"]),
        )

    @staticmethod
    def _fetch_one(conn: sqlite3.Connection, todo_id: int) -> Todo | None:
        if not _storable_id(todo_id):
            return None
        row = conn.execute("SELECT * FROM todos WHERE id = ?", (int(todo_id),)).fetchone()
        return TodoStore._row_to_todo(row) if row else None

    def _check_title(self, title: str) -> None:
        if self._require_title and not (title or "").strip():
            raise ValidationFailed("title is required")

    # ---- public API ----

    def count_todos(self) -> int:
        with self._connection() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
            return int(n)

    def get_todo(self, todo_id: int) -> Todo | None:
        with self._connection() as conn:
            return self._fetch_one(conn, todo_id)

    def list_todos(self, search: str | None = None) -> list[Todo]:
        """
        All todos, newest first (id DESC).

        With a non-empty `search`, only titles containing it (case-insensitive).
        """
        query = "SELECT * FROM todos"
        params: list[object] = []

        if search:
            query += " WHERE instr(casefold(title), ?) > 0"
            params.append(search.casefold())

        query += " ORDER BY id DESC"

        with self._connection() as conn:
            rows = conn.execute(query, params).fetchall()
            return [self._row_to_todo(r) for r in rows]

    def create_todo(
        self,
        title: str,
        *,
        due_date: date | None = None,
        priority: Priority | None = None,
    ) -> Todo:
        self._check_title(title)
        prio = priority or Priority.LOW

        with self._connection() as conn:
            cur = conn.execute(
                "INSERT INTO todos (title, due_date, priority) VALUES (?, ?, ?)",
                (title, due_date.isoformat() if due_date else None, prio.value),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise StorageUnavailable("SQLite did not return lastrowid for todos insert")
            todo = self._fetch_one(conn, int(rowid))

        if todo is None:
            raise StorageUnavailable(f"Todo {rowid} vanished right after insert")
        logger.debug("Todo created id=%s priority=%s due_date=%s", todo.id, todo.priority, todo.due_date)
        return todo

    def toggle_todo(self, todo_id: int) -> Todo:
        if not _storable_id(todo_id):
            raise NotFound(todo_id)
        with self._connection() as conn:
            cur = conn.execute(
                "UPDATE todos SET completed = NOT completed WHERE id = ?",
                (int(todo_id),),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise NotFound(todo_id)
            todo = self._fetch_one(conn, todo_id)

        if todo is None:
            raise NotFound(todo_id)
        logger.debug("Todo toggled id=%s completed=%s", todo.id, todo.completed)
        return todo

    def update_todo(
        self,
        todo_id: int,
        *,
        title: str,
        priority: Priority,
        due_date: date | None = None,
    ) -> Todo:
        """
        Replace title, due_date and priority.

        This is a full replace, not a patch: an omitted due_date clears the deadline.
        """
        self._check_title(title)
        if not _storable_id(todo_id):
            raise NotFound(todo_id)

        with self._connection() as conn:
            cur = conn.execute(
                "UPDATE todos SET title = ?, due_date = ?, priority = ? WHERE id = ?",
                (
                    title,
                    due_date.isoformat() if due_date else None,
                    priority.value,
                    int(todo_id),
                ),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise NotFound(todo_id)
            todo = self._fetch_one(conn, todo_id)

        if todo is None:
            raise NotFound(todo_id)
        logger.debug("Todo updated id=%s priority=%s due_date=%s", todo.id, todo.priority, todo.due_date)
        return todo

    def delete_todo(self, todo_id: int) -> None:
        """Delete by id. Deleting a missing id is not an error."""
        if not _storable_id(todo_id):
            logger.debug("Todo delete id=%s out of range, nothing to remove", todo_id)
            return
        with self._connection() as conn:
            cur = conn.execute("DELETE FROM todos WHERE id = ?", (int(todo_id),))
            conn.commit()
            removed = cur.rowcount
        logger.debug("Todo delete id=%s removed=%s", todo_id, removed)
