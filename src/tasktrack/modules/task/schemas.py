"""Task schemas: status enumeration, partial-update payload and output record."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(StrEnum):
    """Lifecycle state of a task."""

    OPEN = "open"
    CLOSED = "closed"


class TaskPatch(BaseModel):
    """Partial task payload; an absent or null field means 'unchanged' (update) or 'default' (create)."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, description="Task name, required when creating")
    status: TaskStatus | None = Field(default=None, description="Task status, defaults to 'open' on create")

    def changes(self) -> dict[str, Any]:
        """Column/value pairs for the fields present in this patch."""
        return {column: value for column, value in (("name", self.name), ("status", self.status)) if value is not None}


class TaskOut(BaseModel):
    """Persisted task record."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Store-assigned identifier")
    name: str = Field(description="Task name")
    status: TaskStatus = Field(description="Task status")
    creation_time: datetime = Field(description="Insertion time (UTC)")
