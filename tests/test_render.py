# tests/test_render.py

from __future__ import annotations

from task_tracker.cli.render import NO_TASKS, format_task_row, format_task_table
from task_tracker.tasks.task_models import Task, TaskStatus


def _task(**overrides) -> Task:
    fields = dict(
        id=1,
        title="Buy milk",
        description="2% milk, 1 gallon",
        deadline="2024-06-01",
        status=TaskStatus.PENDING,
        created_date="2024-05-30 08:15:00",
        deleted=False,
    )
    fields.update(overrides)
    return Task(**fields)


def test_empty_list_renders_message() -> None:
    assert format_task_table([]) == NO_TASKS == "No tasks found."


def test_row_uses_fixed_columns() -> None:
    row = format_task_row(_task())

    assert row[0:6] == "1     "
    assert row[6:27] == "Buy milk".ljust(21)
    assert row[27:38] == "Pending".ljust(11)
    assert row[38:59] == "2024-05-30 08:15:00".ljust(21)
    assert row[59:75] == "2024-06-01".ljust(16)
    assert row[75:].rstrip() == "2% milk, 1 gallon"


def test_long_fields_are_truncated_and_missing_deadline_shows_na() -> None:
    row = format_task_row(
        _task(title="x" * 40, description="y" * 40, deadline=None, status=TaskStatus.COMPLETED)
    )

    assert "x" * 18 in row and "x" * 19 not in row
    assert "y" * 23 in row and "y" * 24 not in row
    assert "N/A" in row
    assert "Completed" in row


def test_table_has_header_and_rules() -> None:
    lines = format_task_table([_task(), _task(id=2, title="Second")]).splitlines()

    assert lines[1] == "=" * 100
    assert lines[2].split() == ["ID", "TITLE", "STATUS", "CREATED", "DATE", "DEADLINE", "DESCRIPTION"]
    assert lines[3] == "-" * 100
    assert lines[4].startswith("1 ")
    assert lines[5].startswith("2 ")
    assert lines[6] == "=" * 100
