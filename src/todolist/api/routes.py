# src/todolist/api/routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from todolist.domain.errors import NotFoundError, TodoError, ValidationError
from todolist.domain.models import (
    ErrorResponse,
    Task,
    TaskCreate,
    TaskCreated,
    TaskListResponse,
    TaskUpdate,
)
from todolist.storage import TaskRepo

from .deps import get_repo

router = APIRouter()


def _error_response(err: TodoError, http_status: int) -> JSONResponse:
    payload = ErrorResponse(
        error=err.message,
        code=err.code,
        details=err.details or {},
    ).model_dump()
    return JSONResponse(status_code=http_status, content=payload)


def _status_for(err: TodoError) -> int:
    if isinstance(err, NotFoundError):
        return 404
    return 400


@router.get("/healthz")
def healthz() -> dict:
    return {"ok": True}


@router.post("/tasks", response_model=TaskCreated, status_code=201)
def create_task(
    payload: TaskCreate,
    repo: TaskRepo = Depends(get_repo),
):
    try:
        return TaskCreated(task_id=repo.create(payload.task))
    except ValidationError as e:
        return _error_response(e, 400)


@router.get("/tasks", response_model=TaskListResponse)
def list_tasks(repo: TaskRepo = Depends(get_repo)):
    tasks = repo.show_all()
    return TaskListResponse(tasks=tasks, total=len(tasks))


@router.get("/tasks/{task_id}", response_model=Task)
def read_task(task_id: int, repo: TaskRepo = Depends(get_repo)):
    try:
        return repo.read(task_id)
    except NotFoundError as e:
        return _error_response(e, 404)


@router.put("/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    repo: TaskRepo = Depends(get_repo),
):
    try:
        repo.update(task_id, payload.task)
        return repo.read(task_id)
    except TodoError as e:
        return _error_response(e, _status_for(e))


@router.post("/tasks/{task_id}/done", response_model=Task)
def mark_task_done(task_id: int, repo: TaskRepo = Depends(get_repo)):
    try:
        repo.mark_done(task_id)
        return repo.read(task_id)
    except NotFoundError as e:
        return _error_response(e, 404)


@router.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: int, repo: TaskRepo = Depends(get_repo)):
    try:
        repo.delete(task_id)
    except NotFoundError as e:
        return _error_response(e, 404)
    return Response(status_code=204)
