"""Task CRUD router wrapping every payload in the data envelope."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from fastapi import Depends

from tasktrack.core.api.router import Router
from tasktrack.core.schemas import DataEnvelope, EmptyData, ErrorEnvelope

from .manager import TaskManager
from .schemas import TaskOut, TaskPatch

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorEnvelope, "description": "Invalid request"},
    404: {"model": ErrorEnvelope, "description": "Task not found"},
    500: {"model": ErrorEnvelope, "description": "Storage failure"},
}


class TaskRouter(Router):
    """Routes /tasks verbs onto TaskManager operations."""

    def __init__(
        self,
        prefix: str,
        tags: Sequence[str],
        manager_factory: Callable[..., Any],
        **kwargs: Any,
    ) -> None:
        """Initialize task router with a manager factory dependency."""
        self.manager_factory = manager_factory
        super().__init__(prefix=prefix, tags=tags, responses=_ERROR_RESPONSES, **kwargs)

    def _register_routes(self) -> None:
        """Register list, get, create, update and delete routes."""
        manager_dependency = Depends(self.manager_factory)

        @self.router.get("", summary="List tasks", response_model=DataEnvelope[list[TaskOut]])
        async def list_tasks(manager: TaskManager = manager_dependency) -> DataEnvelope[list[TaskOut]]:
            return DataEnvelope(data=await manager.list_all())

        @self.router.get("/{task_id}", summary="Get task", response_model=DataEnvelope[TaskOut])
        async def get_task(task_id: int, manager: TaskManager = manager_dependency) -> DataEnvelope[TaskOut]:
            return DataEnvelope(data=await manager.get(task_id))

        @self.router.post("", summary="Create task", response_model=DataEnvelope[TaskOut])
        async def create_task(
            patch: TaskPatch,
            manager: TaskManager = manager_dependency,
        ) -> DataEnvelope[TaskOut]:
            return DataEnvelope(data=await manager.insert(patch))

        @self.router.patch("/{task_id}", summary="Update task", response_model=DataEnvelope[TaskOut])
        async def update_task(
            task_id: int,
            patch: TaskPatch,
            manager: TaskManager = manager_dependency,
        ) -> DataEnvelope[TaskOut]:
            return DataEnvelope(data=await manager.update(task_id, patch))

        @self.router.delete("/{task_id}", summary="Delete task", response_model=DataEnvelope[EmptyData])
        async def delete_task(task_id: int, manager: TaskManager = manager_dependency) -> DataEnvelope[EmptyData]:
            await manager.delete(task_id)
            return DataEnvelope(data=EmptyData())
