# src/todolist/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class TodoError(Exception):
    """
    Base domain error.

    The API layer and the interactive cli map these to responses consistently.
    """
    message: str
    code: str = "TODO_ERROR"
    details: Optional[dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ValidationError(TodoError):
    code: str = "VALIDATION_ERROR"


@dataclass
class NotFoundError(TodoError):
    code: str = "NOT_FOUND"


@dataclass
class MigrationError(TodoError):
    code: str = "MIGRATION_ERROR"
