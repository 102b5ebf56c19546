"""tasktrack - task tracking service with a core framework and a task feature module."""

# Core framework
from tasktrack.core import (
    Base,
    ConfigurationError,
    DataEnvelope,
    Database,
    DbAddress,
    ErrorEnvelope,
    NotFoundError,
    StorageError,
    TaskTrackError,
    ValidationError,
)

# Task feature
from tasktrack.modules.task import Task, TaskManager, TaskOut, TaskPatch, TaskRepository, TaskStatus

__all__ = [
    # Core framework
    "Database",
    "DbAddress",
    "Base",
    "DataEnvelope",
    "ErrorEnvelope",
    "TaskTrackError",
    "NotFoundError",
    "ValidationError",
    "StorageError",
    "ConfigurationError",
    # Task feature
    "Task",
    "TaskStatus",
    "TaskPatch",
    "TaskOut",
    "TaskRepository",
    "TaskManager",
]
