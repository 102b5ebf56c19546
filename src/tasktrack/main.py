"""Process entry point: settings, app wiring and the HTTP listener."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from fastapi import FastAPI

from tasktrack.api import ServiceBuilder, ServiceInfo
from tasktrack.config import Settings
from tasktrack.core.api import run_app
from tasktrack.core.exceptions import ConfigurationError
from tasktrack.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_app(settings: Settings) -> FastAPI:
    """Build the service described by settings; raises ConfigurationError if it cannot start."""
    return (
        ServiceBuilder(
            info=ServiceInfo(display_name="tasktrack", summary="Task tracking service"),
            api_prefix=settings.api_prefix,
        )
        .with_database(settings.database, pool_timeout=settings.pool_timeout, pool_recycle=settings.pool_recycle)
        .with_logging(level=settings.log_level, json_output=settings.log_format == "json")
        .with_health()
        .with_tasks()
        .with_frontend(settings.frontend_root)
        .build()
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line overrides for the environment settings."""
    parser = argparse.ArgumentParser(prog="tasktrack", description="Serve the task tracking API and frontend.")
    parser.add_argument("--host", help="interface to listen on")
    parser.add_argument("--port", type=int, help="port to listen on")
    parser.add_argument("--root", dest="frontend_root", help="frontend bundle directory")
    parser.add_argument("--database", help="SQLite file path, or :memory:")
    parser.add_argument("--log-level", dest="log_level", help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def load_settings(argv: Sequence[str] | None = None) -> Settings:
    """Environment settings with command-line overrides applied."""
    args = parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return Settings(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the service until interrupted; returns the process exit code."""
    settings = load_settings(argv)
    configure_logging(settings.log_level, json_output=settings.log_format == "json")

    try:
        app = build_app(settings)
    except ConfigurationError as e:
        logger.error("service.configuration_failed", error=e.message)
        return 1

    logger.info("service.listening", url=f"http://{settings.host}:{settings.port}", root=settings.frontend_root)
    run_app(app, host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
