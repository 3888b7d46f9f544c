"""
Domain layer for the todo list.

- models: Pydantic records for tasks and API payloads
- errors: domain-level exceptions
"""

from .models import (
    ErrorResponse,
    Task,
    TaskCreate,
    TaskCreated,
    TaskListResponse,
    TaskUpdate,
)
from .errors import (
    TodoError,
    ValidationError,
    NotFoundError,
    MigrationError,
)

__all__ = [
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskCreated",
    "TaskListResponse",
    "ErrorResponse",
    "TodoError",
    "ValidationError",
    "NotFoundError",
    "MigrationError",
]
