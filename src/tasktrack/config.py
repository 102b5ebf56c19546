"""Process settings read from the environment (TASKTRACK_*) or a .env file."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Startup parameters for the tasktrack service."""

    model_config = SettingsConfigDict(env_prefix="TASKTRACK_", env_file=".env", extra="ignore")

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)
    frontend_root: str = "frontend/dist"
    database: str = "db.sqlite"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    pool_timeout: float = Field(default=5.0, gt=0)
    pool_recycle: int = Field(default=300, gt=0)
