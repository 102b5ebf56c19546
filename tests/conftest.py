"""Test configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tasktrack import Database, DbAddress, TaskManager, TaskRepository
from tasktrack.api import create_app


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create and initialize in-memory database for testing."""
    db = Database(DbAddress.memory())
    await db.init()
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
async def manager(database: Database) -> AsyncGenerator[TaskManager, None]:
    """Task manager bound to a session on the in-memory database."""
    async with database.session() as session:
        yield TaskManager(TaskRepository(session))


@pytest.fixture
def frontend_root(tmp_path: Path) -> Path:
    """A minimal frontend bundle on disk."""
    root = tmp_path / "dist"
    root.mkdir()
    (root / "index.html").write_text("<html><body>tasktrack</body></html>")
    (root / "app.js").write_text("console.log('tasktrack');")
    return root


@pytest.fixture
def client(frontend_root: Path) -> Iterator[TestClient]:
    """Client for the full service on an in-memory database, lifespan included."""
    app = create_app(database=":memory:", frontend_root=str(frontend_root))
    with TestClient(app) as test_client:
        yield test_client
