"""Tests for TaskRouter envelopes and error mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tasktrack import StorageError, TaskManager, TaskOut, TaskStatus
from tasktrack.core.api.middleware import add_error_handlers
from tasktrack.modules.task import TaskRouter
from tests._stubs import TaskManagerStub, singleton_factory


def _app_for(manager: object) -> FastAPI:
    app = FastAPI()
    add_error_handlers(app)
    app.include_router(
        TaskRouter.create(prefix="/api/tasks", tags=["Tasks"], manager_factory=singleton_factory(manager))
    )
    return app


@pytest.fixture
def stub_client() -> TestClient:
    """Client for a task router backed by an in-memory manager stub."""
    seeded = TaskOut(
        id=1,
        name="Seeded",
        status=TaskStatus.OPEN,
        creation_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    return TestClient(_app_for(TaskManagerStub(items=[seeded])))


def test_list_wraps_tasks_in_data_envelope(stub_client: TestClient) -> None:
    response = stub_client.get("/api/tasks")

    assert response.status_code == 200
    assert response.json() == {
        "data": [{"id": 1, "name": "Seeded", "status": "open", "creation_time": "2024-01-01T00:00:00Z"}]
    }


def test_get_returns_task(stub_client: TestClient) -> None:
    response = stub_client.get("/api/tasks/1")

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Seeded"


def test_get_unknown_task_returns_404_envelope(stub_client: TestClient) -> None:
    response = stub_client.get("/api/tasks/99")

    assert response.status_code == 404
    assert response.json() == {"errorMessage": "Task 99 not found"}


def test_get_with_non_integer_id_returns_400(stub_client: TestClient) -> None:
    response = stub_client.get("/api/tasks/abc")

    assert response.status_code == 400
    assert "task_id" in response.json()["errorMessage"]


def test_create_returns_200_with_task(stub_client: TestClient) -> None:
    response = stub_client.post("/api/tasks", json={"name": "Fresh"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == 2
    assert data["status"] == "open"


def test_create_without_name_returns_400(stub_client: TestClient) -> None:
    response = stub_client.post("/api/tasks", json={"status": "closed"})

    assert response.status_code == 400
    assert response.json() == {"errorMessage": "Task name is required"}


def test_create_with_unknown_status_returns_400(stub_client: TestClient) -> None:
    response = stub_client.post("/api/tasks", json={"name": "Odd", "status": "pending"})

    assert response.status_code == 400
    assert "status" in response.json()["errorMessage"]


def test_create_with_malformed_json_returns_400(stub_client: TestClient) -> None:
    response = stub_client.post(
        "/api/tasks", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "errorMessage" in response.json()


def test_patch_updates_only_present_fields(stub_client: TestClient) -> None:
    response = stub_client.patch("/api/tasks/1", json={"status": "closed"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Seeded"
    assert data["status"] == "closed"


def test_delete_returns_empty_data(stub_client: TestClient) -> None:
    response = stub_client.delete("/api/tasks/1")

    assert response.status_code == 200
    assert response.json() == {"data": {}}


def test_storage_error_returns_500_envelope() -> None:
    mock_manager = Mock(spec=TaskManager)
    mock_manager.list_all = AsyncMock(side_effect=StorageError("Storage failure during task list: locked"))

    client = TestClient(_app_for(mock_manager))
    response = client.get("/api/tasks")

    assert response.status_code == 500
    assert response.json() == {"errorMessage": "Storage failure during task list: locked"}


def test_errors_do_not_stop_later_requests() -> None:
    mock_manager = Mock(spec=TaskManager)
    mock_manager.list_all = AsyncMock(side_effect=[StorageError("boom"), []])

    client = TestClient(_app_for(mock_manager))

    assert client.get("/api/tasks").status_code == 500
    second = client.get("/api/tasks")
    assert second.status_code == 200
    assert second.json() == {"data": []}


def test_manager_receives_parsed_patch() -> None:
    mock_manager = Mock(spec=TaskManager)
    mock_manager.update = AsyncMock(
        return_value=TaskOut(
            id=5,
            name="Renamed",
            status=TaskStatus.OPEN,
            creation_time=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
    )

    client = TestClient(_app_for(mock_manager))
    response = client.patch("/api/tasks/5", json={"name": "Renamed", "status": None})

    assert response.status_code == 200
    task_id, patch = mock_manager.update.call_args.args
    assert task_id == 5
    assert patch.changes() == {"name": "Renamed"}
