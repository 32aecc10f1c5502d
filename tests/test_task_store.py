# tests/test_task_store.py

import pytest
from sqlalchemy import Engine

from task_service.core.database import Base
from task_service.core.exceptions import StorageError, TaskNotFoundError
from task_service.core.task_store import TaskStore


def test_insert_assigns_increasing_ids(store: TaskStore) -> None:
    first = store.insert("Buy milk", "2%", "todo")
    second = store.insert("Walk dog", "", "doing")

    assert first.id > 0
    assert second.id > first.id


def test_insert_then_fetch_by_id_round_trip(store: TaskStore) -> None:
    created = store.insert("Write report", "quarterly numbers", "todo")

    fetched = store.fetch_by_id(created.id)
    assert fetched.to_dict() == {
        "id": created.id,
        "title": "Write report",
        "description": "quarterly numbers",
        "status": "todo",
    }


def test_insert_stores_missing_description_as_empty(store: TaskStore) -> None:
    created = store.insert("No details", None, "todo")

    assert store.fetch_by_id(created.id).description == ""


def test_ids_are_not_reused_after_delete(store: TaskStore) -> None:
    first = store.insert("a", "", "todo")
    second = store.insert("b", "", "todo")
    store.delete(second.id)
    store.delete(first.id)

    third = store.insert("c", "", "todo")
    assert third.id > second.id


def test_fetch_all_returns_rows_ordered_by_id(store: TaskStore) -> None:
    assert store.fetch_all() == []

    ids = [store.insert(f"task {i}", "", "todo").id for i in range(3)]
    assert [task.id for task in store.fetch_all()] == ids


def test_fetch_by_id_missing_raises_not_found(store: TaskStore) -> None:
    with pytest.raises(TaskNotFoundError) as exc_info:
        store.fetch_by_id(999)

    assert exc_info.value.task_id == 999
    assert exc_info.value.message == "Task not found"


def test_update_overwrites_all_fields(store: TaskStore) -> None:
    task_id = store.insert("Draft", "v1", "todo").id

    store.update(task_id, "Final", "", "done")

    store.db.expire_all()
    assert store.fetch_by_id(task_id).to_dict() == {
        "id": task_id,
        "title": "Final",
        "description": "",
        "status": "done",
    }


def test_update_and_delete_missing_row_are_noops(store: TaskStore) -> None:
    kept = store.insert("keep me", "", "todo")

    store.update(12345, "ghost", "", "done")
    store.delete(12345)

    assert [task.id for task in store.fetch_all()] == [kept.id]


def test_delete_removes_row(store: TaskStore) -> None:
    task_id = store.insert("Temporary", "", "todo").id

    store.delete(task_id)

    with pytest.raises(TaskNotFoundError):
        store.fetch_by_id(task_id)


def test_failures_are_wrapped_in_storage_error(store: TaskStore, engine: Engine) -> None:
    Base.metadata.drop_all(bind=engine)

    with pytest.raises(StorageError) as exc_info:
        store.insert("t", "", "todo")
    assert exc_info.value.message == "Failed to create task"
    assert exc_info.value.original_error is not None

    with pytest.raises(StorageError, match="Failed to retrieve tasks"):
        store.fetch_all()
    with pytest.raises(StorageError, match="Failed to retrieve task$"):
        store.fetch_by_id(1)
    with pytest.raises(StorageError, match="Failed to update task"):
        store.update(1, "t", "", "todo")
    with pytest.raises(StorageError, match="Failed to delete task"):
        store.delete(1)
