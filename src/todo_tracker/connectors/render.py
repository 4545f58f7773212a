# src/todo_tracker/connectors/render.py

"""Plain-text rendering of a TodoView for the console."""

from __future__ import annotations

from ..todos.models import Priority
from ..todos.view import Filter, TodoItemView, TodoView

# Text stand-in for the colored priority flag.
PRIORITY_FLAGS: dict[Priority, str] = {
    Priority.LOW: "[!  ] Low",
    Priority.MEDIUM: "[!! ] Medium",
    Priority.HIGH: "[!!!] High",
}


def render_priority(priority: Priority) -> str:
    return PRIORITY_FLAGS[priority]


def render_filter_bar(view: TodoView) -> str:
    parts = []
    for flt in Filter:
        label = f"{flt.value} ({view.counts.badge(flt)})"
        parts.append(f"[{label}]" if flt == view.filter else f" {label} ")
    return " ".join(parts)


def render_stats(view: TodoView) -> str:
    c = view.counts
    return f"Total: {c.total} | Active: {c.active} | Completed: {c.completed} | Overdue: {c.overdue}"


def render_item(item: TodoItemView) -> str:
    t = item.todo
    check = "[x]" if t.completed else "[ ]"
    title = "".join(ch + "̶" for ch in t.title) if t.completed else t.title
    line = f"{t.id:>4} {check} {render_priority(t.priority):<12} {title}"
    if t.due_date is not None:
        line += f"  (due {t.due_date.isoformat()})"
    if item.overdue:
        line += "  OVERDUE"
    return line


def render_view(view: TodoView) -> str:
    lines = [render_filter_bar(view)]
    if view.search_term:
        lines.append(f"Search: {view.search_term!r}")
    if view.items:
        lines.extend(render_item(i) for i in view.items)
    else:
        lines.append("  (no todos)")
    lines.append(render_stats(view))
    return "\n".join(lines)
