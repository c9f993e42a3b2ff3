# src/task_tracker/cli/render.py

from __future__ import annotations

from collections.abc import Iterable

from ..tasks.task_models import Task

RULE_WIDTH = 100
NO_TASKS = "No tasks found."

# (header, column width)
COLUMNS: tuple[tuple[str, int], ...] = (
    ("ID", 5),
    ("TITLE", 20),
    ("STATUS", 10),
    ("CREATED DATE", 20),
    ("DEADLINE", 15),
    ("DESCRIPTION", 25),
)
TITLE_MAX = 18
DESCRIPTION_MAX = 23


def _row(cells: Iterable[str]) -> str:
    return " ".join(cell.ljust(width) for cell, (_, width) in zip(cells, COLUMNS))


def format_task_row(task: Task) -> str:
    return _row(
        (
            str(task.id),
            task.title[:TITLE_MAX],
            task.status.value,
            task.created_date,
            task.deadline or "N/A",
            task.description[:DESCRIPTION_MAX],
        )
    )


def format_task_table(tasks: list[Task]) -> str:
    """Fixed-width table of tasks, or NO_TASKS for an empty list."""
    if not tasks:
        return NO_TASKS

    lines = [
        "",
        "=" * RULE_WIDTH,
        _row(header for header, _ in COLUMNS),
        "-" * RULE_WIDTH,
    ]
    lines.extend(format_task_row(t) for t in tasks)
    lines.append("=" * RULE_WIDTH)
    lines.append("")
    return "\n".join(lines)
