from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todo_api.database import Database
from todo_api.main import create_app


@pytest.fixture()
def database(tmp_path: Path):
    """Database on a throwaway SQLite file, tables created."""
    db = Database(f"sqlite:///{tmp_path / 'tasks.db'}")
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture()
def client(database: Database):
    with TestClient(create_app(database)) as c:
        yield c


@pytest.fixture()
def broken_client(tmp_path: Path):
    """Client whose store cannot be opened.

    Used without a context manager so the startup hook does not try to create
    the tables.
    """
    db = Database(f"sqlite:///{tmp_path / 'missing' / 'tasks.db'}")
    yield TestClient(create_app(db))
    db.dispose()

