"""SQLite storage: addresses, the async engine and its single-connection pool."""

from __future__ import annotations

import sqlite3
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, ConnectionPoolEntry

from .logging import get_logger
from .models import Base

logger = get_logger(__name__)

MEMORY = ":memory:"

DEFAULT_POOL_TIMEOUT = 5.0
DEFAULT_POOL_RECYCLE = 300


@dataclass(frozen=True, slots=True)
class DbAddress:
    """Location of the SQLite database: a filesystem path, or in-memory when path is None."""

    path: Path | None = None

    @classmethod
    def memory(cls) -> DbAddress:
        """Address of a fresh in-memory database."""
        return cls(path=None)

    @classmethod
    def from_path(cls, path: str | Path) -> DbAddress:
        """Address of a file database."""
        return cls(path=Path(path))

    @classmethod
    def parse(cls, value: str | Path) -> DbAddress:
        """Parse a path, or the literal ':memory:', into an address."""
        if str(value) == MEMORY:
            return cls.memory()
        return cls.from_path(value)

    @property
    def is_memory(self) -> bool:
        """Whether this address points at an in-memory database."""
        return self.path is None

    @property
    def url(self) -> str:
        """SQLAlchemy async connection URL."""
        if self.path is None:
            return f"sqlite+aiosqlite:///{MEMORY}"
        return f"sqlite+aiosqlite:///{self.path}"

    def __str__(self) -> str:
        return MEMORY if self.path is None else str(self.path)


# Applied to every new DBAPI connection; journal_mode is per file and set once in init()
CONNECT_PRAGMAS: tuple[str, ...] = (
    "foreign_keys=ON",
    "synchronous=NORMAL",
    "busy_timeout=30000",
    "temp_store=MEMORY",
)


def _install_sqlite_connect_pragmas(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def apply_pragmas(dbapi_conn: sqlite3.Connection, _record: ConnectionPoolEntry) -> None:
        cursor = dbapi_conn.cursor()
        try:
            for pragma in CONNECT_PRAGMAS:
                cursor.execute(f"PRAGMA {pragma}")
        finally:
            cursor.close()


class Database:
    """Async SQLAlchemy database connection manager with a single-connection pool."""

    def __init__(
        self,
        address: DbAddress | str | Path,
        *,
        echo: bool = False,
        pool_timeout: float = DEFAULT_POOL_TIMEOUT,
        pool_recycle: int = DEFAULT_POOL_RECYCLE,
    ) -> None:
        """Connect to the database at address, creating the file if it does not exist."""
        self.address = address if isinstance(address, DbAddress) else DbAddress.parse(address)
        self.url = self.address.url
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle

        if self.address.path is not None and not self.address.path.exists():
            logger.info("database.creating", path=str(self.address.path))
            self.address.path.parent.mkdir(parents=True, exist_ok=True)
            self.address.path.touch()

        self.engine: AsyncEngine = create_async_engine(self.url, echo=echo, **self._pool_options())
        _install_sqlite_connect_pragmas(self.engine)
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("database.connected", address=str(self.address))

    def _pool_options(self) -> dict[str, Any]:
        """One pooled connection for every address, so sessions take turns on it."""
        return {
            "poolclass": AsyncAdaptedQueuePool,
            "pool_size": 1,
            "max_overflow": 0,
            "pool_timeout": self.pool_timeout,
            # the in-memory database lives and dies with its only connection
            "pool_recycle": -1 if self.address.is_memory else self.pool_recycle,
        }

    async def init(self) -> None:
        """Create missing tables; safe to call any number of times."""
        async with self.engine.begin() as conn:
            if not self.address.is_memory:
                await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)

        logger.info("database.initialized", address=str(self.address), tables=sorted(Base.metadata.tables))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session with expire_on_commit off, closed on exit."""
        async with self._session_factory() as s:
            yield s

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("database.disposed", address=str(self.address))
