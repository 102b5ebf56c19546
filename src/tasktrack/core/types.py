"""Custom SQLAlchemy column types for tasktrack."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.types import TypeDecorator


class EpochSecondsType(TypeDecorator[datetime]):
    """SQLAlchemy custom type for UTC datetimes stored as integer epoch seconds."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value: datetime | int | None, dialect: Any) -> int | None:
        """Convert datetime to whole seconds since the epoch for database storage."""
        if value is None:
            return None
        if isinstance(value, int):
            return value
        if value.tzinfo is None:
            # Naive datetimes are taken to already be UTC
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())

    def process_result_value(self, value: int | None, dialect: Any) -> datetime | None:
        """Convert epoch seconds from database to an aware UTC datetime."""
        if value is None:
            return None
        return datetime.fromtimestamp(value, tz=timezone.utc)


class StrEnumType[EnumT: StrEnum](TypeDecorator[EnumT]):
    """SQLAlchemy custom type storing a StrEnum by value, rejecting unknown values both ways."""

    impl = String
    cache_ok = True

    def __init__(self, enum_cls: type[EnumT], length: int | None = None) -> None:
        """Initialize type with the enum class and an optional column length."""
        self.enum_cls = enum_cls
        super().__init__(length=length or max(len(member.value) for member in enum_cls))

    def process_bind_param(self, value: EnumT | str | None, dialect: Any) -> str | None:
        """Convert enum member or raw value to its string value for database storage."""
        if value is None:
            return None
        return self.enum_cls(value).value

    def process_result_value(self, value: str | None, dialect: Any) -> EnumT | None:
        """Convert stored string back into an enum member."""
        if value is None:
            return None
        return self.enum_cls(value)
