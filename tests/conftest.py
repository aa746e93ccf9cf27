"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_service.api import create_app
from todo_service.store import TodoStore


@pytest.fixture()
def store() -> TodoStore:
    """A fresh, empty store per test."""
    return TodoStore()


@pytest.fixture()
def client(store: TodoStore) -> Iterator[TestClient]:
    """Test client bound to the ``store`` fixture."""
    with TestClient(create_app(store=store)) as c:
        yield c


@pytest.fixture()
def seeded_client(client: TestClient) -> TestClient:
    """Client whose store already holds two todos (ids 1 and 2)."""
    client.post("/todos", json={"title": "Buy groceries"})
    client.post("/todos", json={"title": "Already done", "completed": True})
    return client


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """Write a small service config to a temp file and return its path."""
    path = tmp_path / "service.yaml"
    path.write_text(
        'version: "1.0"\n'
        "server:\n"
        '  host: "0.0.0.0"\n'
        "  port: 8080\n"
        "cors:\n"
        "  enabled: false\n"
        "settings:\n"
        '  log_level: "debug"\n'
    )
    return path
