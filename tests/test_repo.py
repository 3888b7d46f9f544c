# tests/test_repo.py
from datetime import date

import pytest

from todolist.domain.errors import NotFoundError, ValidationError
from todolist.storage import TaskRepo

from conftest import insert_task


def test_create_inserts_pending_task_dated_today(repo: TaskRepo, conn):
    task_id = repo.create("some random testing task")
    assert task_id > 0

    row = conn.execute(
        "SELECT task, created_at, status FROM tasks WHERE task_id = ?;", (task_id,)
    ).fetchone()
    assert row["task"] == "some random testing task"
    assert row["created_at"] == date.today().isoformat()
    assert not row["status"]


def test_create_assigns_distinct_ids(repo: TaskRepo):
    first = repo.create("one")
    second = repo.create("two")
    assert first != second


def test_cannot_create_empty_task(repo: TaskRepo):
    with pytest.raises(ValidationError) as exc:
        repo.create("")
    assert str(exc.value) == "Cannot create an empty task"
    assert exc.value.code == "VALIDATION_ERROR"
    assert repo.count() == 0


def test_whitespace_task_is_stored_as_given(repo: TaskRepo):
    task_id = repo.create("  ")
    assert repo.read(task_id).task == "  "

    repo.update(task_id, " \t")
    assert repo.read(task_id).task == " \t"


def test_read_existing_task(repo: TaskRepo, conn):
    task_id = insert_task(conn, "read existing test task")

    task = repo.read(task_id)
    assert task.task_id == task_id
    assert task.task == "read existing test task"
    assert task.created_at == date(2024, 1, 15)
    assert task.status is False


def test_read_for_no_task(repo: TaskRepo):
    with pytest.raises(NotFoundError) as exc:
        repo.read(-10000000)
    assert str(exc.value) == "Task Id is non-existent"
    assert exc.value.details == {"task_id": -10000000}


def test_show_all_empty(repo: TaskRepo):
    assert repo.show_all() == []


def test_show_all_returns_every_task(repo: TaskRepo, conn):
    ids = {insert_task(conn, f"task {i}") for i in range(3)}

    tasks = repo.show_all()
    assert {t.task_id for t in tasks} == ids
    assert all(t.status is False for t in tasks)


def test_update_changes_text_only(repo: TaskRepo, conn):
    task_id = insert_task(conn, "update test task", status=True)

    repo.update(task_id, "updated task")

    task = repo.read(task_id)
    assert task.task == "updated task"
    assert task.created_at == date(2024, 1, 15)
    assert task.status is True


def test_cannot_update_with_empty_task(repo: TaskRepo, conn):
    task_id = insert_task(conn, "update test task")

    with pytest.raises(ValidationError) as exc:
        repo.update(task_id, "")
    assert str(exc.value) == "Cannot update with an empty task"
    assert repo.read(task_id).task == "update test task"


def test_update_missing_task(repo: TaskRepo):
    with pytest.raises(NotFoundError):
        repo.update(-100, "anything")


def test_mark_done(repo: TaskRepo, conn):
    task_id = insert_task(conn, "mark done test task")

    repo.mark_done(task_id)
    assert repo.read(task_id).status is True

    # Idempotent
    repo.mark_done(task_id)
    assert repo.read(task_id).status is True


def test_mark_done_not_existing_task(repo: TaskRepo):
    with pytest.raises(NotFoundError):
        repo.mark_done(-100)


def test_delete(repo: TaskRepo, conn):
    task_id = insert_task(conn, "delete test task")
    other_id = insert_task(conn, "keep me")

    repo.delete(task_id)

    assert repo.count(task_id) == 0
    assert repo.count(other_id) == 1


def test_delete_missing_task(repo: TaskRepo, conn):
    task_id = insert_task(conn, "delete twice")
    repo.delete(task_id)

    with pytest.raises(NotFoundError):
        repo.delete(task_id)


def test_buy_milk_lifecycle(repo: TaskRepo):
    task_id = repo.create("buy milk")

    task = repo.read(task_id)
    assert task.task == "buy milk"
    assert task.status is False

    repo.mark_done(task_id)
    assert repo.read(task_id).status is True

    repo.delete(task_id)
    assert repo.count(task_id) == 0


def test_out_of_range_ids_are_not_found(repo: TaskRepo, conn):
    insert_task(conn, "untouched")
    huge = 99999999999999999999999

    for op in (repo.read, repo.mark_done, repo.delete):
        with pytest.raises(NotFoundError):
            op(huge)
    with pytest.raises(NotFoundError):
        repo.update(-huge, "anything")

    assert repo.count(huge) == 0
    assert repo.count() == 1
