# tests/test_api_server.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

from fastapi.testclient import TestClient

from todo_tracker.api.server import create_app


def test_create_without_optional_fields(http: TestClient) -> None:
    resp = http.post("/todos", json={"title": "No deadline task"})

    assert resp.status_code == 200
    body = resp.json()
    assert body == {
        "id": body["id"],
        "title": "No deadline task",
        "completed": False,
        "due_date": None,
        "priority": "Low",
    }


def test_create_treats_empty_optional_strings_as_absent(http: TestClient) -> None:
    body = http.post("/todos", json={"title": "x", "due_date": "", "priority": ""}).json()

    assert body["due_date"] is None
    assert body["priority"] == "Low"


def test_list_orders_newest_first_and_searches(http: TestClient) -> None:
    first = http.post("/todos", json={"title": "Buy Milk"}).json()
    second = http.post("/todos", json={"title": "Call mom"}).json()

    all_ids = [t["id"] for t in http.get("/todos").json()]
    found = http.get("/todos", params={"search": "milk"}).json()

    assert all_ids == [second["id"], first["id"]]
    assert [t["title"] for t in found] == ["Buy Milk"]


def test_pay_rent_scenario(http: TestClient) -> None:
    today = date.today().isoformat()
    created = http.post("/todos", json={"title": "Pay rent", "due_date": today, "priority": "High"}).json()
    assert created["completed"] is False
    assert created["due_date"] == today
    assert created["priority"] == "High"

    toggled = http.put(f"/todos/{created['id']}/toggle").json()
    assert toggled["completed"] is True

    resp = http.delete(f"/todos/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Todo deleted"}
    assert all(t["id"] != created["id"] for t in http.get("/todos").json())

    again = http.delete(f"/todos/{created['id']}")
    assert again.status_code == 200
    assert again.json() == {"message": "Todo deleted"}


def test_update_is_full_replace(http: TestClient) -> None:
    created = http.post(
        "/todos", json={"title": "Draft", "due_date": "2030-01-02", "priority": "Medium"}
    ).json()

    updated = http.put(f"/todos/{created['id']}", json={"title": "Final", "priority": "High"}).json()

    assert updated["id"] == created["id"]
    assert updated["title"] == "Final"
    assert updated["priority"] == "High"
    assert updated["due_date"] is None


def test_update_requires_priority(http: TestClient) -> None:
    created = http.post("/todos", json={"title": "Draft"}).json()

    resp = http.put(f"/todos/{created['id']}", json={"title": "Final"})

    assert resp.status_code == 422
    assert resp.json()["error"] == "validation_failed"


def test_toggle_and_update_unknown_id_are_404(http: TestClient) -> None:
    toggle = http.put("/todos/12345/toggle")
    update = http.put("/todos/12345", json={"title": "x", "priority": "Low"})

    assert toggle.status_code == 404
    assert toggle.json()["error"] == "not_found"
    assert update.status_code == 404


def test_ids_beyond_sqlite_range(http: TestClient) -> None:
    huge = 99999999999999999999

    toggle = http.put(f"/todos/{huge}/toggle")
    update = http.put(f"/todos/{huge}", json={"title": "x", "priority": "Low"})
    delete = http.delete(f"/todos/{huge}")

    assert toggle.status_code == 404
    assert toggle.json()["error"] == "not_found"
    assert update.status_code == 404
    assert delete.status_code == 200
    assert delete.json() == {"message": "Todo deleted"}


def test_malformed_bodies_are_422(http: TestClient) -> None:
    assert http.post("/todos", json={}).status_code == 422
    assert http.post("/todos", json={"title": "x", "priority": "Urgent"}).status_code == 422
    assert http.post("/todos", json={"title": "x", "due_date": "next week"}).status_code == 422
    assert http.put("/todos/abc/toggle").status_code == 422


def test_blank_title_accepted_unless_required(http: TestClient, tmp_path: Path) -> None:
    assert http.post("/todos", json={"title": "  "}).status_code == 200

    strict_settings = SimpleNamespace(
        db_path=tmp_path / "strict.sqlite3", require_title=True, cors_origins=[], app_name="strict"
    )
    strict = TestClient(create_app(strict_settings))
    resp = strict.post("/todos", json={"title": "  "})

    assert resp.status_code == 422
    assert resp.json() == {"error": "validation_failed", "detail": "title is required"}


def test_health_reports_total(http: TestClient) -> None:
    http.post("/todos", json={"title": "a"})
    http.post("/todos", json={"title": "b"})

    assert http.get("/health").json() == {"status": "ok", "total": 2}


def test_cors_allows_configured_origin(settings, store) -> None:
    settings.cors_origins = ["https://todo.example.com"]
    client = TestClient(create_app(settings, store))

    resp = client.get("/todos", headers={"Origin": "https://todo.example.com"})

    assert resp.headers["access-control-allow-origin"] == "https://todo.example.com"
    assert resp.headers["access-control-allow-credentials"] == "true"
