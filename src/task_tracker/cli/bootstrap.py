# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it picks the storage backend named
in Settings and builds it.
"""

from __future__ import annotations

import logging

from ..config import BACKENDS, DEFAULT_BACKEND, Settings, get_settings
from ..core.ports import TaskRepo
from ..tasks.json_store import JsonTaskStore
from ..tasks.task_store import SqliteTaskStore

logger = logging.getLogger(__name__)


def create_task_store(*, settings: Settings | None = None) -> TaskRepo:
    """
    Build the task store selected by settings.backend.

    Unknown backend names fall back to the JSON file store.
    """
    if settings is None:
        settings = get_settings()

    backend = settings.backend
    if backend not in BACKENDS:
        logger.warning("Unknown backend %r; falling back to %s.", backend, DEFAULT_BACKEND)
        backend = DEFAULT_BACKEND

    if backend == "sqlite":
        return SqliteTaskStore(settings.tasks_db_path)
    return JsonTaskStore(settings.tasks_file)
