"""Task repository for database access and querying."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import delete as sql_delete
from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Task
from .schemas import TaskStatus

# SQLite INTEGER is a signed 64-bit value; no row can carry an id outside it
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def _storable(id: int) -> bool:
    return MIN_ID <= id <= MAX_ID


class TaskRepository:
    """Repository for Task entities; every write commits its own transaction."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task repository with database session."""
        self.s = session
        self.model = Task

    async def insert(self, *, name: str, status: TaskStatus, creation_time: datetime) -> Task:
        """Insert one row and return it as stored."""
        stmt = (
            insert(self.model)
            .values(name=name, status=status, creation_time=creation_time)
            .returning(self.model)
        )
        result = await self.s.scalars(stmt)
        task = result.one()
        await self.s.commit()
        return task

    async def find_by_id(self, id: int) -> Task | None:
        """Find a task by id, always reading through to the database."""
        if not _storable(id):
            return None
        stmt = select(self.model).where(self.model.id == id).execution_options(populate_existing=True)
        result = await self.s.scalars(stmt)
        return result.one_or_none()

    async def update_by_id(self, id: int, values: Mapping[str, Any]) -> Task | None:
        """Set the given columns on one row; returns None when the id does not exist."""
        if not _storable(id):
            return None
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**values)
            .returning(self.model)
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        result = await self.s.scalars(stmt)
        task = result.one_or_none()
        await self.s.commit()
        return task

    async def delete_by_id(self, id: int) -> int:
        """Delete one row if present and return the number of rows removed."""
        if not _storable(id):
            return 0
        stmt = sql_delete(self.model).where(self.model.id == id).execution_options(synchronize_session=False)
        result = await self.s.execute(stmt)
        await self.s.commit()
        return result.rowcount

    async def find_all(self) -> list[Task]:
        """Find all tasks in insertion order."""
        result = await self.s.scalars(select(self.model).order_by(self.model.id))
        return list(result.all())
