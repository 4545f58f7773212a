# src/todo_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from datetime import date
from typing import cast

from ..connectors.render import render_stats, render_view
from ..core.state import AppState
from ..todos.models import Priority
from ..todos.view import Filter

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console front end (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}"
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


class UsageError(ValueError):
    pass


def parse_todo_args(args: list[str]) -> tuple[str, date | None, Priority | None]:
    """
    Split "<title words...> [--due YYYY-MM-DD] [--priority Low|Medium|High]".
    Priority is matched case-insensitively.
    """
    title_parts: list[str] = []
    due: date | None = None
    priority: Priority | None = None

    it = iter(args)
    for arg in it:
        if arg in ("--due", "-d"):
            raw = next(it, None)
            if raw is None:
                raise UsageError("--due needs a date (YYYY-MM-DD)")
            try:
                due = date.fromisoformat(raw)
            except ValueError as e:
                raise UsageError(f"Invalid date {raw!r}, expected YYYY-MM-DD") from e
        elif arg in ("--priority", "-p"):
            raw = next(it, None)
            if raw is None:
                raise UsageError("--priority needs Low, Medium or High")
            priority = parse_priority(raw)
        else:
            title_parts.append(arg)

    return " ".join(title_parts), due, priority


def parse_priority(raw: str) -> Priority:
    for p in Priority:
        if p.value.lower() == raw.strip().lower():
            return p
    raise UsageError(f"Invalid priority {raw!r}, expected Low, Medium or High")


def _parse_id(args: list[str], usage: str) -> int:
    if not args:
        raise UsageError(usage)
    try:
        return int(args[0])
    except ValueError as e:
        raise UsageError(f"Invalid id {args[0]!r}. {usage}") from e


def _after_action(state: AppState) -> str:
    """Show the notice if the last action failed, otherwise the refreshed list."""
    notice = state.board.state.notice
    if notice:
        return notice
    return render_view(state.board.view())


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    state.board.clear_notice()
    return render_view(state.board.view())


def cmd_refresh(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Loading todos...")
    state.board.refresh()
    return _after_action(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk
    /add Pay rent --due 2024-05-01 --priority High
    """
    try:
        title, due, priority = parse_todo_args(args)
    except UsageError as e:
        return str(e)
    if not title.strip():
        return "Usage: /add <title> [--due YYYY-MM-DD] [--priority Low|Medium|High]"
    state.board.add(title, due_date=due, priority=priority)
    return _after_action(state)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    try:
        todo_id = _parse_id(args, "Usage: /toggle <id>")
    except UsageError as e:
        return str(e)
    state.board.toggle(todo_id)
    return _after_action(state)


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id> <title> [--due YYYY-MM-DD] [--priority P]

    Replaces title, due date and priority. Without --due the deadline is cleared;
    without --priority the current priority is kept.
    """
    usage = "Usage: /edit <id> <title> [--due YYYY-MM-DD] [--priority Low|Medium|High]"
    try:
        todo_id = _parse_id(args, usage)
        title, due, priority = parse_todo_args(args[1:])
    except UsageError as e:
        return str(e)
    if not title.strip():
        return usage

    if priority is None:
        current = state.board.find(todo_id)
        priority = current.priority if current is not None else Priority.LOW

    state.board.update(todo_id, title=title, priority=priority, due_date=due)
    return _after_action(state)


def cmd_delete(state: AppState, args: list[str]) -> str:
    try:
        todo_id = _parse_id(args, "Usage: /rm <id>")
    except UsageError as e:
        return str(e)
    state.board.delete(todo_id)
    return _after_action(state)


def cmd_search(state: AppState, args: list[str]) -> str:
    state.board.set_search(" ".join(args))
    return render_view(state.board.view())


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.board.state.filter.value}. Use /filter all|active|done|overdue."
    try:
        flt = Filter(args[0].lower())
    except ValueError:
        return "Usage: /filter all|active|done|overdue"
    state.board.set_filter(flt)
    return render_view(state.board.view())


def cmd_stats(state: AppState, args: list[str]) -> str:
    return render_stats(state.board.view())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show todos (current search and filter).", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload todos from the server.")
registry.register(
    "add", cmd_add, help_text="Add a todo: /add <title> [--due YYYY-MM-DD] [--priority Low|Medium|High]."
)
registry.register("toggle", cmd_toggle, help_text="Mark done / not done: /toggle <id>.", aliases=["done"])
registry.register(
    "edit", cmd_edit, help_text="Replace a todo: /edit <id> <title> [--due YYYY-MM-DD] [--priority P]."
)
registry.register("rm", cmd_delete, help_text="Delete a todo: /rm <id>.", aliases=["delete"])
registry.register("search", cmd_search, help_text="Search titles: /search <text> (empty clears).")
registry.register("filter", cmd_filter, help_text="Filter: /filter all|active|done|overdue.")
registry.register("stats", cmd_stats, help_text="Show totals.")
