# tasks/json_store.py

from __future__ import annotations

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

from ..core.ports import ConfirmDelete, TaskFilter
from .errors import TaskStoreError
from .task_models import DeleteOutcome, Task, TaskStatus

logger = logging.getLogger(__name__)


def _parse_flag(value: Any) -> bool:
    """Read a boolean that may have been hand-edited as a string ("false", "0")."""
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


class JsonTaskStore:
    """
    File-backed task store.

    The whole collection lives in memory and is rewritten to a single
    pretty-printed JSON document after every mutation:

        {"next_id": 4, "tasks": [{...}, {...}]}

    Ids come from the persisted `next_id` counter, so they are never reused.
    A bare JSON list of tasks (older format, camelCase `createdDate`) is still accepted.

    Limitations:
    - no locking: two processes writing the same file will lose each other's updates
    - a corrupt or unreadable document is logged and treated as an empty task list
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._tasks: list[Task] = []
        self._next_id = 1
        self._load()
        logger.info("JsonTaskStore ready path=%s total=%s", self._path, len(self._tasks))

    def close(self) -> None:
        """Nothing is held open between calls; kept for interface symmetry."""
        return

    # ---- load / save ----

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text("utf-8"))
            tasks, next_id = self._parse_document(data)
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.warning(
                "Error loading task data from %s (%s). Starting with empty task list.",
                self._path,
                e,
            )
            return

        self._tasks = tasks
        highest = max((t.id for t in tasks), default=0)
        self._next_id = max(next_id, highest + 1)

    @classmethod
    def _parse_document(cls, data: Any) -> tuple[list[Task], int]:
        if isinstance(data, list):
            raw_tasks, next_id = data, 1
        elif isinstance(data, dict):
            raw_tasks = data.get("tasks", [])
            next_id = int(data.get("next_id") or 1)
        else:
            raise ValueError(f"unexpected document type {type(data).__name__}")

        if not isinstance(raw_tasks, list):
            raise ValueError("'tasks' must be a list")
        return [cls._record_to_task(r) for r in raw_tasks], next_id

    @staticmethod
    def _record_to_task(raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise ValueError("task record must be an object")
        created = raw.get("created_date", raw.get("createdDate"))
        deadline = raw.get("deadline")
        return Task(
            id=int(raw["id"]),
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            deadline=str(deadline) if deadline else None,
            status=TaskStatus.from_db(raw.get("status")),
            created_date=str(created or ""),
            deleted=_parse_flag(raw.get("deleted", False)),
        )

    def _save(self) -> None:
        doc = {"next_id": self._next_id, "tasks": [t.to_record() for t in self._tasks]}
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise TaskStoreError(f"could not write {self._path}: {e}") from e

    def _find(self, task_id: int, *, deleted: bool) -> Task | None:
        for t in self._tasks:
            if t.id == task_id and t.deleted == deleted:
                return t
        return None

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def add_task(self, title: str, description: str, deadline: str | None = None) -> Task:
        task = Task.create(self._next_id, title=title, description=description, deadline=deadline)
        self._tasks.append(task)
        self._next_id += 1
        try:
            self._save()
        except TaskStoreError:
            # keep memory consistent with what is on disk
            self._tasks.pop()
            self._next_id -= 1
            raise
        logger.debug("Task added id=%s deadline=%s", task.id, task.deadline)
        return replace(task)

    def list_tasks(
        self,
        where: TaskFilter | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[Task]:
        return [
            replace(t)
            for t in self._tasks
            if (include_deleted or not t.deleted) and (where is None or where(t))
        ]

    def get_task(self, task_id: int, *, deleted: bool = False) -> Task | None:
        task = self._find(int(task_id), deleted=deleted)
        return replace(task) if task is not None else None

    def mark_complete(self, task_id: int) -> Task | None:
        task = self._find(int(task_id), deleted=False)
        if task is None:
            return None
        previous = task.status
        task.status = TaskStatus.COMPLETED
        try:
            self._save()
        except TaskStoreError:
            task.status = previous
            raise
        logger.debug("Task completed id=%s", task.id)
        return replace(task)

    def delete_task(self, task_id: int, *, confirm: ConfirmDelete | None = None) -> DeleteOutcome:
        task = self._find(int(task_id), deleted=False)
        if task is None:
            return DeleteOutcome.NOT_FOUND
        if confirm is not None and not confirm(replace(task)):
            return DeleteOutcome.CANCELLED
        self._set_deleted(task, True)
        logger.debug("Task moved to recycle bin id=%s", task.id)
        return DeleteOutcome.DELETED

    def restore_task(self, task_id: int) -> Task | None:
        task = self._find(int(task_id), deleted=True)
        if task is None:
            return None
        self._set_deleted(task, False)
        logger.debug("Task restored id=%s", task.id)
        return replace(task)

    def _set_deleted(self, task: Task, value: bool) -> None:
        task.deleted = value
        try:
            self._save()
        except TaskStoreError:
            task.deleted = not value
            raise

    def search_tasks(self, keyword: str) -> list[Task]:
        return self.list_tasks(lambda t: t.matches(keyword))

    def list_recycle_bin(self) -> list[Task]:
        return self.list_tasks(lambda t: t.deleted, include_deleted=True)
