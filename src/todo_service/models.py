"""Pydantic models for service configuration.

The optional YAML config is parsed into these models at startup.  Invalid
configs fail fast with clear error messages before the server binds a port.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ServiceInfo(BaseModel):
    title: str = "To-Do List API"
    description: str = "A simple CRUD API for managing to-do items"
    api_version: str = "1.0.0"
    docs_url: str | None = "/api-docs"


class ServerSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(3000, ge=1, le=65535)


class CorsSettings(BaseModel):
    enabled: bool = True
    allow_origins: list[str] = ["*"]


class Settings(BaseModel):
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level


class ServiceConfig(BaseModel):
    """Root model — represents the entire service YAML file."""

    version: str = "1.0"
    service: ServiceInfo = ServiceInfo()
    server: ServerSettings = ServerSettings()
    cors: CorsSettings = CorsSettings()
    settings: Settings = Settings()


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Read *path* into a ``ServiceConfig``; ``None`` means all defaults."""
    if path is None:
        return ServiceConfig()

    raw: Any = yaml.safe_load(Path(path).read_text())
    logger.debug("Loaded config file %s", path)
    # an empty file parses to None
    return ServiceConfig.model_validate(raw or {})
