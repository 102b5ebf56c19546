"""Task ORM model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Text

from tasktrack.core.models import Base
from tasktrack.core.types import EpochSecondsType, StrEnumType

from .schemas import TaskStatus


class Task(Base):
    """ORM model for a tracked task."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TaskStatus] = mapped_column(
        StrEnumType(TaskStatus, length=5),
        nullable=False,
        default=TaskStatus.OPEN,
        server_default=TaskStatus.OPEN.value,
    )
    creation_time: Mapped[datetime] = mapped_column(EpochSecondsType, nullable=False)

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, name={self.name!r}, status={self.status!r})"
