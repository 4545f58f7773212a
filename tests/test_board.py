# tests/test_board.py

from __future__ import annotations

from datetime import date

from todo_tracker.api.client import TodoClient
from todo_tracker.core.board import TodoBoard
from todo_tracker.core.errors import NotFound
from todo_tracker.todos.models import Priority, Todo
from todo_tracker.todos.state import TodoListState
from todo_tracker.todos.view import Filter

from .fakes import FakeTodoGateway, offline


def test_refresh_then_add_toggle_update_delete(gateway: FakeTodoGateway) -> None:
    gateway.create_todo("existing")
    board = TodoBoard(gateway)

    assert board.refresh()
    added = board.add("  Buy Milk  ", priority=Priority.HIGH)
    assert added is not None
    assert added.title == "  Buy Milk  "
    assert [t.id for t in board.state.todos] == [added.id, 1]

    toggled = board.toggle(added.id)
    assert toggled is not None and toggled.completed
    assert board.find(added.id) == toggled

    updated = board.update(added.id, title="Buy oat milk", priority=Priority.LOW)
    assert updated is not None
    assert board.find(added.id).title == "Buy oat milk"

    assert board.delete(added.id)
    assert board.find(added.id) is None
    assert board.state.notice is None


def test_blank_title_is_blocked_before_any_request(gateway: FakeTodoGateway) -> None:
    board = TodoBoard(gateway)

    assert board.add("   ") is None
    assert board.update(1, title="", priority=Priority.LOW) is None

    assert gateway.calls == []
    assert board.state.notice == "Title must not be empty."


def test_toggle_failure_leaves_state_unchanged(gateway: FakeTodoGateway) -> None:
    gateway.create_todo("a")
    board = TodoBoard(gateway)
    board.refresh()
    before = board.state.todos

    gateway.fail_with = offline()
    assert board.toggle(1) is None

    assert board.state.todos == before
    assert board.state.notice is not None
    assert board.state.notice.startswith("Updating todo status failed")


def test_every_operation_failure_is_reported(gateway: FakeTodoGateway) -> None:
    board = TodoBoard(gateway)
    gateway.fail_with = offline()

    assert board.refresh() is False
    assert board.state.loaded is False
    assert board.add("x") is None
    assert board.update(1, title="x", priority=Priority.LOW) is None
    assert board.delete(1) is False

    assert board.state.todos == ()
    assert board.state.notice is not None


def test_delete_of_already_removed_todo_drops_it_locally(gateway: FakeTodoGateway) -> None:
    gateway.create_todo("gone")
    board = TodoBoard(gateway)
    board.refresh()

    gateway.fail_with = NotFound(1)
    assert board.delete(1)
    assert board.state.todos == ()


def test_view_uses_search_and_filter(gateway: FakeTodoGateway) -> None:
    board = TodoBoard(gateway)
    board.add("Buy Milk")
    board.add("Walk dog", due_date=date(2024, 1, 1))
    board.add("milk again", priority=Priority.HIGH)

    board.set_search("milk")
    view = board.view(today=date(2024, 1, 1))
    assert [i.todo.title for i in view.items] == ["milk again", "Buy Milk"]
    assert view.counts.total == 3
    assert view.counts.overdue == 1

    board.set_filter(Filter.OVERDUE)
    board.set_search("")
    assert [i.todo.title for i in board.view(today=date(2024, 1, 1)).items] == ["Walk dog"]


def test_pay_rent_scenario_through_http(api_client: TodoClient) -> None:
    board = TodoBoard(api_client)
    board.refresh()

    rent = board.add("Pay rent", due_date=date.today(), priority=Priority.HIGH)
    assert rent is not None and rent.completed is False
    board.set_filter(Filter.OVERDUE)
    assert [i.todo.id for i in board.view().items] == [rent.id]

    board.toggle(rent.id)
    assert board.view().items == ()

    assert board.delete(rent.id)
    assert api_client.list_todos() == []
    assert board.delete(rent.id)
    assert board.state.notice is None


def test_list_reflects_creates_minus_deletes(api_client: TodoClient) -> None:
    board = TodoBoard(api_client)
    made = [board.add(f"t{i}") for i in range(4)]
    board.toggle(made[0].id)
    board.update(made[1].id, title="renamed", priority=Priority.MEDIUM)
    board.delete(made[2].id)

    board.refresh()
    assert len(board.state.todos) == 3
    assert len(api_client.list_todos()) == 3
    assert [t.id for t in board.state.todos] == sorted((t.id for t in board.state.todos), reverse=True)


def test_initial_state_is_injectable(gateway: FakeTodoGateway) -> None:
    state = TodoListState(todos=(Todo(5, "seed"),), loaded=True)
    board = TodoBoard(gateway, state)

    assert board.find(5) is not None


def test_titles_are_sent_as_typed(gateway: FakeTodoGateway) -> None:
    board = TodoBoard(gateway)
    todo = board.add(" padded ")
    board.update(todo.id, title="  edited", priority=Priority.MEDIUM)

    assert gateway.calls == [("create", " padded "), ("update", todo.id)]
    assert gateway.todos[todo.id].title == "  edited"
