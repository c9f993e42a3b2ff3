# src/task_tracker/cli/controller.py

"""
Interactive menu loop.

The controller only talks to a TaskRepo; reading input and printing output
go through injected callables so the loop can be driven from tests.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..core.ports import OutputFn, PromptFn, TaskRepo
from ..tasks.errors import TaskStoreError
from ..tasks.task_models import DeleteOutcome, Task
from .render import format_task_table

logger = logging.getLogger(__name__)

MenuAction = Callable[[], None]

EXIT_CHOICE = "8"
CONFIRM_ANSWERS = frozenset({"y", "yes"})
TASK_ID_RE = re.compile(r"-?[0-9]+")


class TaskController:
    def __init__(
        self,
        store: TaskRepo,
        *,
        prompt: PromptFn | None = None,
        out: OutputFn | None = None,
    ) -> None:
        self.store = store
        self._prompt = input if prompt is None else prompt
        self._out = print if out is None else out
        self._menu: dict[str, tuple[str, MenuAction | None]] = {
            "1": ("Add Task", self.add_task),
            "2": ("List Tasks", self.list_tasks),
            "3": ("Mark Task as Complete", self.mark_complete),
            "4": ("Delete Task", self.delete_task),
            "5": ("Search Tasks by Keyword", self.search_tasks),
            "6": ("View Recycle Bin", self.view_recycle_bin),
            "7": ("Restore Task from Recycle Bin", self.restore_task),
            EXIT_CHOICE: ("Exit", None),
        }

    def build_menu(self) -> str:
        lines = ["", "TASK MANAGER"]
        for key, (label, _) in self._menu.items():
            lines.append(f"{key}. {label}")
        return "\n".join(lines)

    def run(self) -> None:
        """Show the menu and dispatch choices until Exit (or EOF / Ctrl+C)."""
        logger.info("Task controller started.")
        while True:
            self._out(self.build_menu())
            try:
                choice = self._prompt(f"Enter your choice (1-{len(self._menu)}): ").strip()
                if choice == EXIT_CHOICE:
                    break
                self.dispatch(choice)
            except EOFError:
                logger.info("Input closed, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("KeyboardInterrupt, exiting.")
                self._out("")
                break

        self._out("Exiting Task Manager. Goodbye!")
        logger.info("Task controller finished.")

    def dispatch(self, choice: str) -> None:
        label, action = self._menu.get(choice, (choice, None))
        if action is None:
            self._out("Invalid choice. Please try again.")
            return

        try:
            action()
        except TaskStoreError as e:
            logger.exception("Storage failure during %r.", label)
            self._out(f"Storage error: {e}")

    # ---- input helpers ----

    def _ask_task_id(self, text: str) -> int | None:
        raw = self._prompt(text).strip()
        if not TASK_ID_RE.fullmatch(raw):
            self._out(f"Invalid task ID: {raw!r}")
            return None
        return int(raw)

    def _confirm_delete(self, task: Task) -> bool:
        answer = self._prompt(f"Are you sure you want to delete task '{task.title}'? (y/n): ")
        return answer.strip().lower() in CONFIRM_ANSWERS

    def _show(self, tasks: list[Task]) -> None:
        self._out(format_task_table(tasks))

    # ---- menu actions ----

    def add_task(self) -> None:
        title = self._prompt("Enter task title: ")
        description = self._prompt("Enter task description: ")
        deadline = self._prompt("Enter deadline (YYYY-MM-DD) or leave blank: ").strip() or None
        try:
            task = self.store.add_task(title, description, deadline)
        except ValueError as e:
            self._out(f"Task not added: {e}.")
            return
        self._out(f"Task '{task.title}' added successfully!")

    def list_tasks(self) -> None:
        self._show(self.store.list_tasks())

    def mark_complete(self) -> None:
        task_id = self._ask_task_id("Enter task ID to mark as complete: ")
        if task_id is None:
            return
        task = self.store.mark_complete(task_id)
        if task is None:
            self._out(f"Task with ID {task_id} not found.")
            return
        self._out(f"Task '{task.title}' marked as completed!")

    def delete_task(self) -> None:
        task_id = self._ask_task_id("Enter task ID to delete: ")
        if task_id is None:
            return

        deleted_title = ""

        def confirm(task: Task) -> bool:
            nonlocal deleted_title
            deleted_title = task.title
            return self._confirm_delete(task)

        outcome = self.store.delete_task(task_id, confirm=confirm)
        if outcome is DeleteOutcome.NOT_FOUND:
            self._out(f"Task with ID {task_id} not found or already deleted.")
        elif outcome is DeleteOutcome.CANCELLED:
            self._out("Deletion canceled.")
        else:
            self._out(f"Task '{deleted_title}' moved to recycle bin.")

    def search_tasks(self) -> None:
        keyword = self._prompt("Enter keyword to search in title/description: ")
        self._show(self.store.search_tasks(keyword))

    def view_recycle_bin(self) -> None:
        self._show(self.store.list_recycle_bin())

    def restore_task(self) -> None:
        task_id = self._ask_task_id("Enter task ID to restore: ")
        if task_id is None:
            return
        task = self.store.restore_task(task_id)
        if task is None:
            self._out(f"Task with ID {task_id} not found in recycle bin.")
            return
        self._out(f"Task '{task.title}' restored from recycle bin.")
