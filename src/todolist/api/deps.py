# src/todolist/api/deps.py
from __future__ import annotations

import sqlite3
from typing import Generator

from fastapi import Depends, Request

from todolist.storage import SQLiteDB, TaskRepo


def get_db(request: Request) -> SQLiteDB:
    """
    Per-request access to SQLiteDB stored on app.state during startup.
    """
    return request.app.state.db  # type: ignore[attr-defined]


def get_conn(
    db: SQLiteDB = Depends(get_db),
) -> Generator[sqlite3.Connection, None, None]:
    conn = db.connect()
    try:
        yield conn
    finally:
        conn.close()


def get_repo(
    conn: sqlite3.Connection = Depends(get_conn),
) -> TaskRepo:
    return TaskRepo(conn)
