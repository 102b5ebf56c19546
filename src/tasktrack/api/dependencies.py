"""Feature-specific FastAPI dependency injection for managers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.core.api.dependencies import get_session
from tasktrack.modules.task import TaskManager, TaskRepository


async def get_task_manager(session: Annotated[AsyncSession, Depends(get_session)]) -> TaskManager:
    """Get a task manager bound to the request's session."""
    return TaskManager(TaskRepository(session))
