# src/todolist/storage/__init__.py
"""
Storage layer for the todo list (SQLite).

- db: connection factory + pragmas
- migrations: versioned up/down SQL migration runner
- repo: task data access operations
"""

from .db import SQLiteDB
from .migrations import MigrationRunner
from .repo import TaskRepo

__all__ = ["SQLiteDB", "MigrationRunner", "TaskRepo"]
