"""ServiceBuilder: the core builder plus the task CRUD router."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any, Self

from fastapi import FastAPI

from tasktrack.core.api.service_builder import BaseServiceBuilder, ServiceInfo, normalize_prefix
from tasktrack.modules.task import TaskManager, TaskRouter

from .dependencies import get_task_manager

type ManagerFactory = Callable[..., Coroutine[Any, Any, TaskManager]]


@dataclass(slots=True, frozen=True)
class _TaskMount:
    path: str = "/tasks"
    tags: list[str] = field(default_factory=lambda: ["Tasks"])
    manager_factory: ManagerFactory = get_task_manager


class ServiceBuilder(BaseServiceBuilder):
    """Builds the task-tracking service; call ``with_tasks()`` to expose {api_prefix}/tasks."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._tasks: _TaskMount | None = None

    def with_tasks(
        self,
        *,
        path: str = "/tasks",
        tags: list[str] | None = None,
        manager_factory: ManagerFactory | None = None,
    ) -> Self:
        """Mount task CRUD at {api_prefix}{path}; manager_factory swaps the per-request TaskManager."""
        self._tasks = _TaskMount(
            path=normalize_prefix(path),
            tags=list(tags or ["Tasks"]),
            manager_factory=manager_factory or get_task_manager,
        )
        return self

    def _register_module_routers(self, app: FastAPI) -> None:
        if self._tasks is None:
            return
        app.include_router(
            TaskRouter.create(
                prefix=f"{self.api_prefix}{self._tasks.path}",
                tags=self._tasks.tags,
                manager_factory=self._tasks.manager_factory,
            )
        )


def create_app(
    *,
    database: str = ":memory:",
    frontend_root: str | None = None,
    api_prefix: str = "/api",
    include_logging: bool = False,
    **kwargs: Any,
) -> FastAPI:
    """Health, tasks and, when frontend_root is given, the static bundle at '/'."""
    builder = ServiceBuilder(
        info=ServiceInfo(display_name="tasktrack", summary="Task tracking service"),
        database=database,
        api_prefix=api_prefix,
        include_logging=include_logging,
        **kwargs,
    )
    builder.with_health().with_tasks()
    if frontend_root is not None:
        builder.with_frontend(frontend_root)
    return builder.build()
