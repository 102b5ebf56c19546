"""End-to-end tests of the task API against an in-memory database."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fastapi.testclient import TestClient


def test_list_starts_empty(client: TestClient) -> None:
    response = client.get("/api/tasks")

    assert response.status_code == 200
    assert response.json() == {"data": []}


def test_create_then_get_round_trip(client: TestClient) -> None:
    created = client.post("/api/tasks", json={"name": "Hello world"})

    assert created.status_code == 200
    task = created.json()["data"]
    assert task["id"] == 1
    assert task["name"] == "Hello world"
    assert task["status"] == "open"
    creation_time = datetime.fromisoformat(task["creation_time"])
    assert creation_time.tzinfo is not None
    assert abs((datetime.now(timezone.utc) - creation_time).total_seconds()) < 60

    fetched = client.get(f"/api/tasks/{task['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == {"data": task}


def test_list_keeps_insertion_order(client: TestClient) -> None:
    client.post("/api/tasks", json={"name": "Hello world"})
    client.post("/api/tasks", json={"name": "Mock 2", "status": "closed"})

    tasks = client.get("/api/tasks").json()["data"]

    assert [(t["id"], t["name"], t["status"]) for t in tasks] == [
        (1, "Hello world", "open"),
        (2, "Mock 2", "closed"),
    ]


def test_patch_name_keeps_other_fields(client: TestClient) -> None:
    original = client.post("/api/tasks", json={"name": "Draft", "status": "closed"}).json()["data"]

    updated = client.patch(f"/api/tasks/{original['id']}", json={"name": "Final"}).json()["data"]

    assert updated == {**original, "name": "Final"}


def test_empty_patch_returns_task_unchanged(client: TestClient) -> None:
    original = client.post("/api/tasks", json={"name": "Steady"}).json()["data"]

    response = client.patch(f"/api/tasks/{original['id']}", json={})

    assert response.status_code == 200
    assert response.json() == {"data": original}


def test_patch_unknown_task_returns_404(client: TestClient) -> None:
    response = client.patch("/api/tasks/77", json={"name": "Ghost"})

    assert response.status_code == 404
    assert response.json() == {"errorMessage": "Task 77 not found"}


def test_delete_is_idempotent_over_http(client: TestClient) -> None:
    task = client.post("/api/tasks", json={"name": "Temporary"}).json()["data"]

    first = client.delete(f"/api/tasks/{task['id']}")
    second = client.delete(f"/api/tasks/{task['id']}")

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json() == {"data": {}}
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_create_with_empty_name_returns_400(client: TestClient) -> None:
    response = client.post("/api/tasks", json={"name": ""})

    assert response.status_code == 400
    assert response.json() == {"errorMessage": "Task name must not be empty"}
    assert client.get("/api/tasks").json() == {"data": []}


def test_unsupported_method_returns_405_envelope(client: TestClient) -> None:
    response = client.put("/api/tasks/1", json={"name": "Nope"})

    assert response.status_code == 405
    assert "errorMessage" in response.json()


@pytest.mark.parametrize("task_id", [2**63, -(2**63) - 1, 10**30])
def test_ids_beyond_sqlite_integer_range_are_absent(client: TestClient, task_id: int) -> None:
    client.post("/api/tasks", json={"name": "Ordinary"})

    fetched = client.get(f"/api/tasks/{task_id}")
    patched = client.patch(f"/api/tasks/{task_id}", json={"name": "Renamed"})
    deleted = client.delete(f"/api/tasks/{task_id}")

    assert fetched.status_code == 404
    assert fetched.json() == {"errorMessage": f"Task {task_id} not found"}
    assert patched.status_code == 404
    assert deleted.status_code == 200
    assert deleted.json() == {"data": {}}
    assert [task["name"] for task in client.get("/api/tasks").json()["data"]] == ["Ordinary"]
