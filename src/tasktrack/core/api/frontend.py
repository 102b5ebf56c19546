"""Static hosting for the bundled frontend."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

from tasktrack.core.exceptions import ConfigurationError
from tasktrack.core.logging import get_logger

logger = get_logger(__name__)


class FrontendFiles(StaticFiles):
    """StaticFiles serving index.html at the root and never answering for API paths."""

    def __init__(self, *, directory: str | Path, api_prefix: str) -> None:
        """Initialize with the frontend root and the API prefix to leave alone."""
        self.api_prefix = api_prefix.strip("/")
        super().__init__(directory=directory, html=True, check_dir=True)

    async def get_response(self, path: str, scope: Scope) -> Response:
        """Serve a file, refusing anything under the API prefix."""
        if self.api_prefix and (path == self.api_prefix or path.startswith(f"{self.api_prefix}/")):
            # Reached only when no API route matched path and method
            if scope["method"] not in ("GET", "HEAD"):
                raise HTTPException(status_code=405, detail="Method Not Allowed")
            raise HTTPException(status_code=404, detail=f"No API route for /{path}")
        return await super().get_response(path, scope)


def validate_frontend_root(root: str | Path) -> Path:
    """Resolve the frontend root, failing if it is missing."""
    path = Path(root)
    if not path.is_dir():
        raise ConfigurationError(f"Frontend root directory {path} does not exist")
    if not (path / "index.html").is_file():
        logger.warning("frontend.index_missing", root=str(path))
    return path


def mount_frontend(app: FastAPI, root: str | Path, *, api_prefix: str) -> None:
    """Mount the frontend at '/'; must run after every API router is included."""
    path = validate_frontend_root(root)
    app.mount("/", FrontendFiles(directory=path, api_prefix=api_prefix), name="frontend")
    logger.info("frontend.mounted", root=str(path))
