"""Tests for task_service_api example using TestClient.

The example seeds two tasks on startup and serves the bundled frontend.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from examples.task_service_api import app


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    """Create FastAPI TestClient for testing with lifespan context."""
    with TestClient(app) as test_client:
        yield test_client


def test_landing_page(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "<title>tasktrack</title>" in response.text


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "healthy"


def test_seeded_tasks_listed(client: TestClient) -> None:
    response = client.get("/api/tasks")
    assert response.status_code == 200

    tasks = response.json()["data"]
    assert [(task["name"], task["status"]) for task in tasks][:2] == [
        ("Try the task API", "open"),
        ("Read the docs", "closed"),
    ]


def test_create_and_close_task(client: TestClient) -> None:
    created = client.post("/api/tasks", json={"name": "From the example"}).json()["data"]
    closed = client.patch(f"/api/tasks/{created['id']}", json={"status": "closed"}).json()["data"]

    assert closed["status"] == "closed"
    assert closed["creation_time"] == created["creation_time"]

    assert client.delete(f"/api/tasks/{created['id']}").json() == {"data": {}}
    assert client.get(f"/api/tasks/{created['id']}").status_code == 404
