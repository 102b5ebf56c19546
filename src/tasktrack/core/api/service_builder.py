"""Fluent builder that assembles the HTTP service from its parts.

The builder collects options first and only touches FastAPI in ``build()``. Everything that needs a running
event loop (opening the database, startup hooks) happens in the lifespan it installs.
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel, ConfigDict

from tasktrack.core import Database, DbAddress
from tasktrack.core.database import DEFAULT_POOL_RECYCLE, DEFAULT_POOL_TIMEOUT
from tasktrack.core.exceptions import ConfigurationError
from tasktrack.core.logging import configure_logging, get_logger

from .frontend import mount_frontend, validate_frontend_root
from .middleware import add_error_handlers, add_logging_middleware
from .routers import HealthRouter
from .routers.health import HealthCheck, check_database

logger = get_logger(__name__)

type LifecycleHook = Callable[[FastAPI], Awaitable[None]]

_CHECK_NAME = re.compile(r"^[A-Za-z0-9_-]+$")


def normalize_prefix(prefix: str) -> str:
    """'/api/', 'api' and '/api' all become '/api'; blank becomes ''."""
    stripped = prefix.strip("/")
    return f"/{stripped}" if stripped else ""


def _as_address(value: DbAddress | str | Path) -> DbAddress:
    return value if isinstance(value, DbAddress) else DbAddress.parse(value)


class ServiceInfo(BaseModel):
    """Title, version and description shown in the OpenAPI document."""

    display_name: str
    version: str = "0.1.0"
    summary: str | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


@dataclass(slots=True)
class _StorageOptions:
    address: DbAddress
    pool_timeout: float = DEFAULT_POOL_TIMEOUT
    pool_recycle: int = DEFAULT_POOL_RECYCLE
    instance: Database | None = None

    def open(self) -> tuple[Database, bool]:
        """Database to use and whether the service owns (and so disposes) it."""
        if self.instance is not None:
            return self.instance, False
        return Database(self.address, pool_timeout=self.pool_timeout, pool_recycle=self.pool_recycle), True


@dataclass(slots=True)
class _LoggingOptions:
    enabled: bool = False
    level: str = "INFO"
    json_output: bool = False


@dataclass(slots=True)
class _HealthOptions:
    prefix: str
    tags: list[str]
    checks: dict[str, HealthCheck] = field(default_factory=dict)


class BaseServiceBuilder:
    """Builds a FastAPI app with storage, error envelopes, logging, health and a frontend mount.

    Subclasses add feature routers by overriding ``_register_module_routers`` and may add their own
    checks in ``_validate_module_configuration``.
    """

    def __init__(
        self,
        *,
        info: ServiceInfo,
        database: DbAddress | str | Path = ":memory:",
        api_prefix: str = "/api",
        include_error_handlers: bool = True,
        include_logging: bool = False,
    ) -> None:
        self.info = info
        self._api_prefix = normalize_prefix(api_prefix)
        self._storage = _StorageOptions(address=_as_address(database))
        self._logging = _LoggingOptions(enabled=include_logging)
        self._error_handlers = include_error_handlers
        self._health: _HealthOptions | None = None
        self._frontend_root: Path | None = None
        self._extra_routers: list[APIRouter] = []
        self._overrides: dict[Callable[..., object], Callable[..., object]] = {}
        self._on_start: list[LifecycleHook] = []
        self._on_stop: list[LifecycleHook] = []

    @property
    def api_prefix(self) -> str:
        """Base path every API router lives under."""
        return self._api_prefix

    def with_database(
        self,
        address: DbAddress | str | Path,
        *,
        pool_timeout: float = DEFAULT_POOL_TIMEOUT,
        pool_recycle: int = DEFAULT_POOL_RECYCLE,
    ) -> Self:
        """Open the given SQLite file (or ':memory:') when the service starts."""
        self._storage.address = _as_address(address)
        self._storage.pool_timeout = pool_timeout
        self._storage.pool_recycle = pool_recycle
        return self

    def with_database_instance(self, database: Database) -> Self:
        """Use an existing Database; it is initialized on startup but never disposed by the service."""
        self._storage.instance = database
        return self

    def with_logging(self, enabled: bool = True, *, level: str = "INFO", json_output: bool = False) -> Self:
        """Configure structlog on startup and log one line per request."""
        self._logging = _LoggingOptions(enabled=enabled, level=level, json_output=json_output)
        return self

    def with_frontend(self, root: str | Path) -> Self:
        self._frontend_root = Path(root)
        return self

    def with_health(
        self,
        *,
        prefix: str | None = None,
        tags: list[str] | None = None,
        checks: dict[str, HealthCheck] | None = None,
        include_database_check: bool = True,
    ) -> Self:
        """Expose GET {api_prefix}/health; the database check is on unless disabled."""
        health = _HealthOptions(
            prefix=prefix if prefix is not None else f"{self._api_prefix}/health",
            tags=list(tags) if tags is not None else ["health"],
            checks=dict(checks or {}),
        )
        if include_database_check:
            health.checks["database"] = check_database
        self._health = health
        return self

    def include_router(self, router: APIRouter) -> Self:
        self._extra_routers.append(router)
        return self

    def override_dependency(self, dependency: Callable[..., object], override: Callable[..., object]) -> Self:
        self._overrides[dependency] = override
        return self

    def on_startup(self, hook: LifecycleHook) -> Self:
        """Run hook(app) after the database is attached to app.state."""
        self._on_start.append(hook)
        return self

    def on_shutdown(self, hook: LifecycleHook) -> Self:
        """Run hook(app) before the database is released."""
        self._on_stop.append(hook)
        return self

    def build(self) -> FastAPI:
        """Assemble the app; raises ConfigurationError if the options cannot produce a working service."""
        self._validate_configuration()
        self._validate_module_configuration()

        app = FastAPI(
            title=self.info.display_name,
            description=self.info.summary or self.info.description or "",
            version=self.info.version,
            lifespan=self._lifespan(),
        )
        app.state.database = None

        if self._error_handlers:
            add_error_handlers(app)
        if self._logging.enabled:
            add_logging_middleware(app)

        if self._health is not None:
            app.include_router(
                HealthRouter.create(prefix=self._health.prefix, tags=self._health.tags, checks=self._health.checks)
            )

        self._register_module_routers(app)
        for router in self._extra_routers:
            app.include_router(router)
        app.dependency_overrides.update(self._overrides)

        # catch-all, must be mounted after every API route
        if self._frontend_root is not None:
            mount_frontend(app, self._frontend_root, api_prefix=self._api_prefix)

        return app

    def _validate_module_configuration(self) -> None:
        """Hook for subclasses."""

    def _register_module_routers(self, app: FastAPI) -> None:
        """Hook for subclasses."""

    def _validate_configuration(self) -> None:
        if self._frontend_root is not None:
            validate_frontend_root(self._frontend_root)
            if not self._api_prefix:
                raise ConfigurationError("An API prefix is required when serving a frontend at '/'")

        if self._health is not None:
            bad = [name for name in self._health.checks if not _CHECK_NAME.match(name)]
            if bad:
                raise ConfigurationError(
                    f"Health check names {bad} contain invalid characters; use letters, digits, '_' or '-'"
                )

    def _lifespan(self) -> Callable[[FastAPI], Any]:
        storage = self._storage
        log_options = self._logging
        on_start = tuple(self._on_start)
        on_stop = tuple(self._on_stop)

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            if log_options.enabled:
                configure_logging(log_options.level, json_output=log_options.json_output)

            database, owned = storage.open()
            await database.init()
            app.state.database = database
            logger.info("service.started", service=app.title, database=str(database.address))

            for hook in on_start:
                await hook(app)
            try:
                yield
            finally:
                for hook in on_stop:
                    await hook(app)
                app.state.database = None
                if owned:
                    await database.dispose()
                logger.info("service.stopped", service=app.title)

        return lifespan

    @classmethod
    def create(cls, *, info: ServiceInfo, **kwargs: Any) -> FastAPI:
        """Shorthand for ``cls(info=info, **kwargs).build()``."""
        return cls(info=info, **kwargs).build()
