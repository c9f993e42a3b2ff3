# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from task_tracker.config import Settings
from task_tracker.logging_setup import _ConsoleNoiseFilter
from task_tracker.tasks.json_store import JsonTaskStore
from task_tracker.tasks.task_store import SqliteTaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every path into the per-test tmp dir (no env reads)."""
    return Settings(
        app_name="task-tracker-test",
        log_level="WARNING",
        log_to_file=False,
        backend="json",
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.json",
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture(params=["json", "sqlite"])
def store(request, tmp_path: Path):
    """
    Both backends behind the same TaskRepo interface.

    Behavioural tests run against each of them; backend-specific tests
    live in test_json_store.py / test_sqlite_store.py.
    """
    if request.param == "sqlite":
        return SqliteTaskStore(tmp_path / "tasks.sqlite3")
    return JsonTaskStore(tmp_path / "tasks.json")


@pytest.fixture()
def restore_root_logging():
    """Undo setup_logging() side effects on the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler) or any(
            isinstance(f, _ConsoleNoiseFilter) for f in h.filters
        ):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)
