# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Parses command-line overrides, initializes logging, builds the task store
and runs the interactive menu in the main thread.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..config import BACKENDS, Settings, get_settings
from ..core.ports import TaskRepo
from ..logging_setup import setup_logging
from .bootstrap import create_task_store
from .controller import TaskController

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-tracker",
        description="Interactive personal task tracker.",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        help="Storage backend (default: TASK_TRACKER_BACKEND or json)",
    )
    parser.add_argument(
        "--data-dir",
        help="Directory for task data and logs (default: TASK_TRACKER_DATA_DIR)",
    )
    parser.add_argument(
        "--log-level",
        help="Console log level, e.g. DEBUG, INFO, WARNING (default: TASK_TRACKER_LOG_LEVEL)",
    )
    return parser


def _shutdown(store: TaskRepo | None) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    if store is None:
        return
    try:
        store.close()
    except Exception:
        logger.debug("Task store close failed.", exc_info=True)


def run(settings: Settings) -> int:
    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_dir = settings.data_dir if settings.log_to_file else None
    try:
        setup_logging(log_dir=log_dir, console_level=console_level)
    except OSError as e:
        setup_logging(log_dir=None, console_level=console_level)
        logger.warning("Cannot write log file under %s (%s); logging to console only.", log_dir, e)

    logger.info("Starting %s (backend=%s)...", settings.app_name, settings.backend)

    store: TaskRepo | None = None
    try:
        store = create_task_store(settings=settings)
        TaskController(store).run()
    except Exception:
        logger.exception("Unrecoverable error, shutting down.")
        print("An error occurred. See the log for details.", file=sys.stderr)
        return 1
    finally:
        _shutdown(store)
        logger.info("Bye.")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings().with_overrides(
        backend=args.backend,
        data_dir=args.data_dir,
        log_level=args.log_level,
    )
    sys.exit(run(settings))


if __name__ == "__main__":
    main()
