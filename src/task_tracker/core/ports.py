# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the controller.

The controller depends on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol

from ..tasks.task_models import DeleteOutcome, Task

TaskFilter = Callable[[Task], bool]
ConfirmDelete = Callable[[Task], bool]
PromptFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class TaskRepo(Protocol):
    """Task persistence. Implemented by JsonTaskStore and SqliteTaskStore."""

    def add_task(self, title: str, description: str, deadline: str | None = None) -> Task: ...

    def list_tasks(
            self,
            where: TaskFilter | None = None,
            *,
            include_deleted: bool = False,
    ) -> list[Task]: ...

    def get_task(self, task_id: int, *, deleted: bool = False) -> Task | None: ...

    def mark_complete(self, task_id: int) -> Task | None: ...

    def delete_task(self, task_id: int, *, confirm: ConfirmDelete | None = None) -> DeleteOutcome: ...

    def restore_task(self, task_id: int) -> Task | None: ...

    def search_tasks(self, keyword: str) -> list[Task]: ...

    def list_recycle_bin(self) -> list[Task]: ...

    def count_tasks(self) -> int: ...

    def close(self) -> None: ...
