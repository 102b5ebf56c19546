"""Core framework components - database, models, types, errors and logging."""

from .database import Database, DbAddress
from .exceptions import ConfigurationError, NotFoundError, StorageError, TaskTrackError, ValidationError
from .logging import configure_logging, get_logger
from .models import Base
from .schemas import DataEnvelope, EmptyData, ErrorEnvelope
from .types import EpochSecondsType, StrEnumType

__all__ = [
    # Database
    "Database",
    "DbAddress",
    # Models
    "Base",
    # Types
    "EpochSecondsType",
    "StrEnumType",
    # Schemas
    "DataEnvelope",
    "EmptyData",
    "ErrorEnvelope",
    # Errors
    "TaskTrackError",
    "NotFoundError",
    "ValidationError",
    "StorageError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
