# tests/conftest.py
import logging
import sqlite3
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from todolist.api import create_app
from todolist.config import Settings, load_settings
from todolist.storage import MigrationRunner, SQLiteDB, TaskRepo

REPO_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = REPO_ROOT / "migrations"

DEFAULT_ENV = {
    "TODO_ENV": "test",
    "TODO_LOG_LEVEL": "warning",
}


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """
    Drops handlers installed by configure_logging so they never outlive a test's streams.
    """
    root = logging.getLogger()
    level = root.level
    yield
    for h in [h for h in root.handlers if getattr(h, "_todolist", False)]:
        root.removeHandler(h)
    root.setLevel(level)


@pytest.fixture()
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """
    Settings for a fresh sqlite db per test, loaded the same way the entrypoint does.
    """
    for k, v in DEFAULT_ENV.items():
        monkeypatch.setenv(k, v)
    monkeypatch.setenv("TODO_DB_PATH", str(tmp_path / "todo_test.db"))
    monkeypatch.setenv("TODO_MIGRATIONS_DIR", str(MIGRATIONS_DIR))
    return load_settings()


@pytest.fixture()
def db(settings: Settings) -> SQLiteDB:
    return SQLiteDB(settings.db_path)


@pytest.fixture()
def conn(db: SQLiteDB, settings: Settings) -> Iterator[sqlite3.Connection]:
    """
    Connection to a migrated database.
    """
    c = db.connect()
    try:
        MigrationRunner(c, settings.migrations_dir).up()
        yield c
    finally:
        c.close()


@pytest.fixture()
def repo(conn: sqlite3.Connection) -> TaskRepo:
    return TaskRepo(conn)


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as c:
        yield c


def insert_task(conn: sqlite3.Connection, text: str, created_at: str = "2024-01-15", status: bool = False) -> int:
    """Inserts a row directly, bypassing the repo."""
    cur = conn.execute(
        "INSERT INTO tasks(task, created_at, status) VALUES (?, ?, ?);",
        (text, created_at, status),
    )
    return int(cur.lastrowid)
