import sqlite3
from pathlib import Path
from typing import Any, List, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from adapters.db.sqlite_adapter import SQLiteAdapter
from app.dependencies import get_browser_service
from app.main import app
from app.services.browser_service import BrowserService
from app.settings import Settings


def make_db(db_path: Path) -> None:
    """Create a small SQLite DB with a rowid table and an INTEGER PRIMARY KEY table."""
    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute("CREATE TABLE items(name TEXT, qty INTEGER);")
        conn.execute(
            "CREATE TABLE people(id INTEGER PRIMARY KEY, name TEXT NOT NULL);"
        )
        conn.executemany(
            "INSERT INTO people(id, name) VALUES (?, ?);",
            [(10, "Ada"), (20, "Grace")],
        )
        conn.commit()
    finally:
        conn.close()


class RecordingAdapter(SQLiteAdapter):
    """SQLiteAdapter that remembers every statement it was asked to run."""

    def __init__(self, path: str):
        super().__init__(path)
        self.statements: List[str] = []

    def _run(self, operation: str, sql: str, params: Sequence[Any], fetch: bool):
        self.statements.append(sql)
        return super()._run(operation, sql, params, fetch)

    @property
    def mutations(self) -> List[str]:
        return [
            s
            for s in self.statements
            if s.split(None, 1)[0].upper() in ("INSERT", "UPDATE", "DELETE")
        ]


@pytest.fixture
def db_path(tmp_path) -> Path:
    path = tmp_path / "browser.db"
    make_db(path)
    return path


@pytest.fixture
def adapter(db_path):
    a = RecordingAdapter(str(db_path))
    try:
        yield a
    finally:
        a.close()


@pytest.fixture
def settings(db_path) -> Settings:
    return Settings(database_path=str(db_path))


@pytest.fixture
def service(settings, adapter) -> BrowserService:
    return BrowserService(settings=settings, db=adapter)


@pytest.fixture
def client(service):
    """TestClient wired to the temporary DB through a dependency override."""
    app.dependency_overrides[get_browser_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_browser_service, None)


@pytest.fixture
def read_db(db_path):
    """Read straight from the file, bypassing the app."""

    def _read(sql: str, params: Sequence[Any] = ()) -> List[Tuple[Any, ...]]:
        conn = sqlite3.connect(str(db_path))
        try:
            return conn.execute(sql, tuple(params)).fetchall()
        finally:
            conn.close()

    return _read
