"""Task manager: record-store policy on top of the task repository."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from tasktrack.core.exceptions import NotFoundError, StorageError, ValidationError
from tasktrack.core.logging import get_logger

from .models import Task
from .repository import TaskRepository
from .schemas import TaskOut, TaskPatch, TaskStatus

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Current UTC time truncated to the whole second the store persists."""
    return datetime.now(timezone.utc).replace(microsecond=0)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("task.storage_failed", operation=operation, error=str(e))
        raise StorageError(f"Storage failure during task {operation}: {e}") from e


class TaskManager:
    """Manager for Task entities: defaults, partial updates and error surfacing."""

    def __init__(self, repo: TaskRepository, *, clock: Callable[[], datetime] = utc_now) -> None:
        """Initialize task manager with repository and clock."""
        self.repo = repo
        self.clock = clock

    async def insert(self, patch: TaskPatch) -> TaskOut:
        """Create a task from a patch; name is required, status defaults to open."""
        if patch.name is None:
            raise ValidationError("Task name is required")
        self._validate_name(patch.name)

        with _storage_errors("insert"):
            task = await self.repo.insert(
                name=patch.name,
                status=patch.status or TaskStatus.OPEN,
                creation_time=self.clock(),
            )

        logger.info("task.created", task_id=task.id, status=task.status.value)
        return self._to_output_schema(task)

    async def get(self, id: int) -> TaskOut:
        """Return the task with the given id."""
        with _storage_errors("get"):
            task = await self.repo.find_by_id(id)
        if task is None:
            raise NotFoundError(f"Task {id} not found")
        return self._to_output_schema(task)

    async def update(self, id: int, patch: TaskPatch) -> TaskOut:
        """Apply the present fields of a patch; an empty patch leaves the task untouched."""
        changes = patch.changes()
        if not changes:
            logger.debug("task.update_empty", task_id=id)
            return await self.get(id)

        if "name" in changes:
            self._validate_name(changes["name"])

        with _storage_errors("update"):
            task = await self.repo.update_by_id(id, changes)
        if task is None:
            raise NotFoundError(f"Task {id} not found")

        logger.info("task.updated", task_id=id, fields=sorted(changes))
        return self._to_output_schema(task)

    async def delete(self, id: int) -> None:
        """Ensure no task with the given id exists."""
        with _storage_errors("delete"):
            removed = await self.repo.delete_by_id(id)
        logger.info("task.deleted", task_id=id, existed=bool(removed))

    async def list_all(self) -> list[TaskOut]:
        """Return every task in insertion order."""
        with _storage_errors("list"):
            tasks = await self.repo.find_all()
        return [self._to_output_schema(task) for task in tasks]

    @staticmethod
    def _validate_name(name: str) -> None:
        if not name.strip():
            raise ValidationError("Task name must not be empty")

    @staticmethod
    def _to_output_schema(task: Task) -> TaskOut:
        return TaskOut.model_validate(task)
