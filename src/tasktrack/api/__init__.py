"""Public HTTP surface: the task-aware ServiceBuilder and everything needed to customize it."""

from tasktrack.core.api import (
    BaseServiceBuilder,
    FrontendFiles,
    HealthRouter,
    HealthState,
    HealthStatus,
    Router,
    ServiceInfo,
    add_error_handlers,
    add_logging_middleware,
    get_database,
    get_session,
    mount_frontend,
    run_app,
)
from tasktrack.core.logging import add_request_context, clear_request_context, configure_logging, get_logger
from tasktrack.modules.task import TaskRouter

from .dependencies import get_task_manager
from .service_builder import ServiceBuilder, create_app

__all__ = [
    "BaseServiceBuilder",
    "FrontendFiles",
    "HealthRouter",
    "HealthState",
    "HealthStatus",
    "Router",
    "ServiceBuilder",
    "ServiceInfo",
    "TaskRouter",
    "add_error_handlers",
    "add_logging_middleware",
    "add_request_context",
    "clear_request_context",
    "configure_logging",
    "create_app",
    "get_database",
    "get_logger",
    "get_session",
    "get_task_manager",
    "mount_frontend",
    "run_app",
]
