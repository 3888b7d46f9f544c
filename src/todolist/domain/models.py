from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """
    A todo item as stored in the `tasks` table.

    status is False while pending and True once marked done.
    """
    model_config = ConfigDict(extra="forbid")

    task_id: int
    task: str
    created_at: date
    status: bool = False


class TaskCreate(BaseModel):
    # Emptiness is checked in TaskRepo.
    model_config = ConfigDict(extra="forbid")

    task: str


class TaskUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    task: str


class TaskCreated(BaseModel):
    model_config = ConfigDict(extra="forbid")

    task_id: int


class TaskListResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tasks: list[Task]
    total: int


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    error: str
    code: str
    details: dict = Field(default_factory=dict)
