"""Task feature - the task record store and its HTTP routes."""

from .manager import TaskManager
from .models import Task
from .repository import TaskRepository
from .router import TaskRouter
from .schemas import TaskOut, TaskPatch, TaskStatus

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPatch",
    "TaskOut",
    "TaskRepository",
    "TaskManager",
    "TaskRouter",
]
