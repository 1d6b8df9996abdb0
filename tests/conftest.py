# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from todo_api.core.config import Settings
from todo_api.db.session import Database
from todo_api.main import create_app


@pytest.fixture()
def database(tmp_path: Path) -> Iterator[Database]:
    """A real SQLite database per test, so store behaviour is exercised for real."""
    db = Database(f"sqlite:///{tmp_path / 'todos.db'}").open()
    yield db
    db.close()


@pytest.fixture()
def session(database: Database) -> Iterator[Session]:
    with Session(database.engine) as s:
        yield s


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'api' / 'todos.db'}",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    # entering the context runs startup/shutdown, i.e. opens and closes the database
    with TestClient(create_app(settings)) as c:
        yield c
