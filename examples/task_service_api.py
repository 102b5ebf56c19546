"""FastAPI service exposing the task API with pre-seeded tasks and the bundled frontend.

Run:
    fastapi dev examples/task_service_api.py

Then visit:
    http://localhost:8000/            - Frontend
    http://localhost:8000/api/tasks   - Task list
    http://localhost:8000/api/health  - Health check
    http://localhost:8000/docs        - API documentation
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from tasktrack import Database, TaskManager, TaskPatch, TaskRepository, TaskStatus
from tasktrack.api import ServiceBuilder, ServiceInfo

FRONTEND_ROOT = Path(__file__).resolve().parent.parent / "frontend" / "dist"


async def seed_tasks(app: FastAPI) -> None:
    """Insert a couple of starter tasks when the store is empty."""
    database: Database | None = getattr(app.state, "database", None)
    if database is None:
        return

    async with database.session() as session:
        manager = TaskManager(TaskRepository(session))
        if await manager.list_all():
            return

        await manager.insert(TaskPatch(name="Try the task API"))
        await manager.insert(TaskPatch(name="Read the docs", status=TaskStatus.CLOSED))


app = (
    ServiceBuilder(
        info=ServiceInfo(
            display_name="Task Service",
            summary="Task tracking with a bundled frontend",
        ),
        database=":memory:",
    )
    .with_logging()
    .with_health()
    .with_tasks()
    .with_frontend(FRONTEND_ROOT)
    .on_startup(seed_tasks)
    .build()
)

if __name__ == "__main__":
    from tasktrack.api import run_app

    run_app(app)
