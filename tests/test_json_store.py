# tests/test_json_store.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from task_tracker.tasks import json_store
from task_tracker.tasks.errors import TaskStoreError
from task_tracker.tasks.json_store import JsonTaskStore
from task_tracker.tasks.task_models import TaskStatus


def test_document_is_rewritten_after_each_mutation(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = JsonTaskStore(path)

    task = store.add_task("Buy milk", "2% milk, 1 gallon", "2024-06-01")
    doc = json.loads(path.read_text("utf-8"))
    assert doc["next_id"] == task.id + 1
    assert doc["tasks"] == [
        {
            "id": task.id,
            "title": "Buy milk",
            "description": "2% milk, 1 gallon",
            "deadline": "2024-06-01",
            "status": "Pending",
            "created_date": task.created_date,
            "deleted": False,
        }
    ]

    store.mark_complete(task.id)
    store.delete_task(task.id)
    doc = json.loads(path.read_text("utf-8"))
    assert doc["tasks"][0]["status"] == "Completed"
    assert doc["tasks"][0]["deleted"] is True
    assert not path.with_suffix(".json.tmp").exists()


def test_state_and_ids_survive_reload(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    first = JsonTaskStore(path)
    a = first.add_task("a", "first")
    b = first.add_task("b", "second")
    first.delete_task(b.id)

    second = JsonTaskStore(path)
    assert [t.id for t in second.list_tasks()] == [a.id]
    assert [t.id for t in second.list_recycle_bin()] == [b.id]

    c = second.add_task("c", "third")
    assert c.id not in {a.id, b.id}
    assert c.id > b.id


def test_persisted_counter_wins_over_list_length(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            {
                "next_id": 10,
                "tasks": [
                    {
                        "id": 3,
                        "title": "left over",
                        "description": "older ids were dropped",
                        "deadline": None,
                        "status": "Pending",
                        "created_date": "2024-01-01 09:00:00",
                        "deleted": False,
                    }
                ],
            }
        ),
        "utf-8",
    )

    store = JsonTaskStore(path)
    assert store.add_task("new", "task").id == 10


def test_counter_is_raised_above_highest_existing_id(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            {
                "next_id": 1,
                "tasks": [
                    {"id": 7, "title": "t", "description": "d", "status": "Pending",
                     "created_date": "2024-01-01 09:00:00", "deleted": False},
                ],
            }
        ),
        "utf-8",
    )

    assert JsonTaskStore(path).add_task("new", "task").id == 8


def test_legacy_list_document_is_accepted(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "title": "Old one", "description": "from before", "deadline": None,
                 "status": "Completed", "createdDate": "2023-12-31 23:59:00", "deleted": False},
                {"id": 2, "title": "Binned", "description": "soft deleted", "deadline": "2024-02-01",
                 "status": "Pending", "createdDate": "2024-01-02 10:00:00", "deleted": True},
            ],
            indent=2,
        ),
        "utf-8",
    )

    store = JsonTaskStore(path)

    [active] = store.list_tasks()
    assert active.title == "Old one"
    assert active.status is TaskStatus.COMPLETED
    assert active.created_date == "2023-12-31 23:59:00"
    [binned] = store.list_recycle_bin()
    assert binned.deadline == "2024-02-01"

    assert store.add_task("next", "one").id == 3
    doc = json.loads(path.read_text("utf-8"))
    assert isinstance(doc, dict)
    assert "created_date" in doc["tasks"][0]


@pytest.mark.parametrize("content", ["{not json", "42", '{"tasks": "nope"}', '[{"title": "no id"}]'])
def test_unreadable_document_starts_empty(tmp_path: Path, caplog, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")

    with caplog.at_level(logging.WARNING, logger="task_tracker"):
        store = JsonTaskStore(path)

    assert store.list_tasks() == []
    assert "Starting with empty task list" in caplog.text
    assert store.add_task("fresh", "start").id == 1


def test_missing_file_is_an_empty_store(tmp_path: Path) -> None:
    store = JsonTaskStore(tmp_path / "nested" / "dir" / "tasks.json")

    assert store.list_tasks() == []
    assert store.count_tasks() == 0


def test_insertion_order_is_kept(tmp_path: Path) -> None:
    store = JsonTaskStore(tmp_path / "tasks.json")
    titles = ["one", "two", "three"]
    for t in titles:
        store.add_task(t, "x")

    assert [t.title for t in store.list_tasks()] == titles


def test_failed_write_raises_and_keeps_memory_consistent(tmp_path: Path, monkeypatch) -> None:
    store = JsonTaskStore(tmp_path / "tasks.json")
    task = store.add_task("kept", "on disk")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(json_store.os, "replace", boom)

    with pytest.raises(TaskStoreError):
        store.add_task("lost", "never written")
    with pytest.raises(TaskStoreError):
        store.mark_complete(task.id)
    with pytest.raises(TaskStoreError):
        store.delete_task(task.id)

    [only] = store.list_tasks()
    assert only.id == task.id
    assert only.status is TaskStatus.PENDING
    assert only.deleted is False

    monkeypatch.undo()
    assert store.add_task("after", "recovery").id == task.id + 1


def test_string_deleted_flags_are_parsed(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "title": "Visible", "description": "hand edited", "status": "Pending",
                 "createdDate": "2024-01-01 09:00:00", "deleted": "false"},
                {"id": 2, "title": "Binned", "description": "hand edited", "status": "Pending",
                 "createdDate": "2024-01-01 09:00:00", "deleted": "True"},
                {"id": 3, "title": "Zero", "description": "hand edited", "status": "Pending",
                 "createdDate": "2024-01-01 09:00:00", "deleted": "0"},
            ]
        ),
        "utf-8",
    )

    store = JsonTaskStore(path)

    assert [t.title for t in store.list_tasks()] == ["Visible", "Zero"]
    assert [t.title for t in store.list_recycle_bin()] == ["Binned"]
