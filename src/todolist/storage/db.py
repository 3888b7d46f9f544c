# src/todolist/storage/db.py
from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SQLiteDB:
    """
    Opens connections to the todo database file.

    Connections are in autocommit mode: each TaskRepo call is one statement and
    commits on its own. The web app opens one per request, the cli one per session.
    """
    db_path: Path
    timeout_s: float = 5.0

    def connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(
            str(self.db_path),
            timeout=self.timeout_s,
            isolation_level=None,
        )
        conn.row_factory = sqlite3.Row
        # WAL lets web readers proceed while another request writes a task.
        conn.execute("PRAGMA journal_mode=WAL;")
        return conn


def commit(conn: sqlite3.Connection) -> None:
    conn.execute("COMMIT;")


def rollback(conn: sqlite3.Connection) -> None:
    if conn.in_transaction:
        conn.execute("ROLLBACK;")
