# src/todolist/storage/repo.py
from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Optional

from todolist.domain.errors import NotFoundError, ValidationError
from todolist.domain.models import Task
from todolist.logging import get_logger

_LOG = get_logger(__name__)

_NOT_FOUND_MESSAGE = "Task Id is non-existent"

# SQLite INTEGER is a signed 64-bit value; no row can hold an id outside it.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


@dataclass
class TaskRepo:
    """
    Repository encapsulating all SQL access to the `tasks` table.

    Important invariants:
    - Every operation issues a single parameterized statement (atomic in autocommit mode).
    - Task text is validated before any write; a rejected call leaves the table untouched.
    - read, update, mark_done and delete raise NotFoundError when no row matches the id,
      including ids too large for a SQLite INTEGER.
    """
    conn: sqlite3.Connection

    # -------------------------
    # Read operations
    # -------------------------

    def read(self, task_id: int) -> Task:
        row = self.conn.execute(
            "SELECT task_id, task, created_at, status FROM tasks WHERE task_id = ?;",
            (_storable_id(task_id),),
        ).fetchone()
        if not row:
            raise _not_found(task_id)
        return _row_to_task(row)

    def show_all(self) -> list[Task]:
        """
        Snapshot of every task, in whatever order the database returns them.
        """
        rows = self.conn.execute(
            "SELECT task_id, task, created_at, status FROM tasks;"
        ).fetchall()
        return [_row_to_task(row) for row in rows]

    def count(self, task_id: Optional[int] = None) -> int:
        if task_id is None:
            row = self.conn.execute("SELECT COUNT(*) AS c FROM tasks;").fetchone()
        elif not _in_range(task_id):
            return 0
        else:
            row = self.conn.execute(
                "SELECT COUNT(*) AS c FROM tasks WHERE task_id = ?;", (task_id,)
            ).fetchone()
        return int(row["c"])

    # -------------------------
    # Write operations
    # -------------------------

    def create(self, text: str) -> int:
        """
        Inserts a pending task created today and returns its database-assigned id.
        """
        if _is_empty(text):
            raise ValidationError("Cannot create an empty task", details={"task": text})

        cur = self.conn.execute(
            "INSERT INTO tasks(task, created_at, status) VALUES (?, ?, ?);",
            (text, date.today().isoformat(), False),
        )
        task_id = int(cur.lastrowid)
        _LOG.debug("Created task %d", task_id)
        return task_id

    def update(self, task_id: int, text: str) -> None:
        """
        Overwrites the text of an existing task; created_at and status are left alone.
        """
        if _is_empty(text):
            raise ValidationError(
                "Cannot update with an empty task", details={"task_id": task_id, "task": text}
            )

        updated = self.conn.execute(
            "UPDATE tasks SET task = ? WHERE task_id = ?;",
            (text, _storable_id(task_id)),
        ).rowcount
        if updated == 0:
            raise _not_found(task_id)
        _LOG.debug("Updated task %d", task_id)

    def mark_done(self, task_id: int) -> None:
        # Idempotent: marking an already-done task still matches one row.
        updated = self.conn.execute(
            "UPDATE tasks SET status = ? WHERE task_id = ?;",
            (True, _storable_id(task_id)),
        ).rowcount
        if updated == 0:
            raise _not_found(task_id)
        _LOG.debug("Marked task %d done", task_id)

    def delete(self, task_id: int) -> None:
        deleted = self.conn.execute(
            "DELETE FROM tasks WHERE task_id = ?;",
            (_storable_id(task_id),),
        ).rowcount
        if deleted == 0:
            raise _not_found(task_id)
        _LOG.debug("Deleted task %d", task_id)


def _is_empty(text: Optional[str]) -> bool:
    return text is None or text == ""


def _in_range(task_id: int) -> bool:
    return _MIN_ID <= task_id <= _MAX_ID


def _storable_id(task_id: int) -> int:
    if not _in_range(task_id):
        raise _not_found(task_id)
    return task_id


def _not_found(task_id: int) -> NotFoundError:
    return NotFoundError(_NOT_FOUND_MESSAGE, details={"task_id": task_id})


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        task_id=row["task_id"],
        task=row["task"],
        created_at=row["created_at"],
        status=bool(row["status"]),
    )
