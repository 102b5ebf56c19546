"""Utilities for running FastAPI applications."""

from __future__ import annotations

from fastapi import FastAPI


def run_app(app: FastAPI | str, *, host: str = "127.0.0.1", port: int = 8080, reload: bool = False) -> None:
    """Serve the app with uvicorn; logging is left to structlog."""
    import uvicorn

    if reload and not isinstance(app, str):
        raise ValueError("reload requires the app as an import string, e.g. 'module:app'")

    uvicorn.run(app, host=host, port=port, reload=reload, log_config=None)
