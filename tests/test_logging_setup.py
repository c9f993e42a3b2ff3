# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

from task_tracker.logging_setup import _ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_app_logs_and_quiets_others() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("task_tracker.tasks.json_store", logging.DEBUG))
    assert f.filter(_record("task_tracker", logging.INFO))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("task_tracker_other", logging.INFO))


def test_setup_logging_installs_console_and_file_handlers(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO)

    root = logging.getLogger()
    file_handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1

    logging.getLogger("task_tracker.test").debug("debug line for the file")
    file_handlers[0].flush()
    assert "debug line for the file" in (tmp_path / "logs" / "task-tracker.log").read_text("utf-8")


def test_setup_logging_without_log_dir_writes_no_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=None)

    root = logging.getLogger()
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
    assert len(root.handlers) == 1
