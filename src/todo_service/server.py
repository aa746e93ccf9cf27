"""Server runner — loads config, sets up logging and serves the app.

Reads the (optional) YAML config, applies command-line overrides, builds the
FastAPI app with a fresh ``TodoStore`` and hands it to uvicorn.
"""

from __future__ import annotations

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from todo_service.api import create_app
from todo_service.models import ServiceConfig, load_config
from todo_service.store import TodoStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class TodoServer:
    """Load a service config and run the HTTP server."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        *,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> None:
        self._config_path = Path(config_path) if config_path is not None else None
        self._host = host
        self._port = port
        self._log_level = log_level

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> ServiceConfig:
        """Return the validated config with command-line overrides applied."""
        data = load_config(self._config_path).model_dump()
        if self._host is not None:
            data["server"]["host"] = self._host
        if self._port is not None:
            data["server"]["port"] = self._port
        if self._log_level is not None:
            data["settings"]["log_level"] = self._log_level
        # re-validate so overrides go through the same checks as the file
        return ServiceConfig.model_validate(data)

    def build(self, config: ServiceConfig) -> FastAPI:
        """Create the app with a store that lives as long as the process."""
        return create_app(config, TodoStore())

    def run(self) -> None:
        """Configure logging and serve until interrupted."""
        config = self.load()

        logging.basicConfig(level=config.settings.log_level, format=LOG_FORMAT)

        app = self.build(config)
        base_url = f"http://{config.server.host}:{config.server.port}"
        logger.info("Server running on %s", base_url)
        if config.service.docs_url:
            logger.info("API docs: %s%s", base_url, config.service.docs_url)

        uvicorn.run(
            app,
            host=config.server.host,
            port=config.server.port,
            log_level=config.settings.log_level.lower(),
        )
