"""Exception hierarchy shared by the record store and the HTTP layer."""

from __future__ import annotations


class TaskTrackError(Exception):
    """Base class for all tasktrack errors, carrying the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """Initialize error with a human-readable message."""
        super().__init__(message)
        self.message = message


class NotFoundError(TaskTrackError):
    """Raised when an entity referenced by id does not exist."""

    status_code = 404


class ValidationError(TaskTrackError):
    """Raised when caller-supplied data breaks an entity rule."""

    status_code = 400


class StorageError(TaskTrackError):
    """Raised when the storage engine, pool or query fails."""

    status_code = 500


class ConfigurationError(TaskTrackError):
    """Raised at startup when the service cannot be configured; fatal."""
