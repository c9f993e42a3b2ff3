# tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from ..core.ports import ConfirmDelete, TaskFilter
from .errors import TaskStoreError
from .task_models import DeleteOutcome, Task, TaskStatus

logger = logging.getLogger(__name__)

# Range of a SQLite INTEGER; ids outside it cannot exist in the table.
SQLITE_MIN_INT = -(2**63)
SQLITE_MAX_INT = 2**63 - 1


def _contains_ci(haystack: str | None, needle: str | None) -> int:
    if haystack is None or needle is None:
        return 0
    return int(needle.casefold() in haystack.casefold())


class SqliteTaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Listings are ordered newest first (created_date DESC, id DESC).

    Each method opens its own short-lived connection; sqlite3 errors are
    re-raised as TaskStoreError.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except TaskStoreError:
            total = -1
        logger.info("SqliteTaskStore ready db=%s total=%s", self._db_path, total)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        conn.create_function("contains_ci", 2, _contains_ci, deterministic=True)

    @contextlib.contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise TaskStoreError(f"cannot open {self._db_path}: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            raise TaskStoreError(f"database error on {self._db_path}: {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._session() as conn:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    deadline TEXT,
                    status TEXT NOT NULL DEFAULT 'Pending',
                    created_date TEXT NOT NULL,
                    deleted INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("SqliteTaskStore migration: added column %s", name)

            add_col("deadline", "TEXT")
            add_col("status", "TEXT NOT NULL DEFAULT 'Pending'")
            add_col("created_date", "TEXT NOT NULL DEFAULT ''")
            add_col("deleted", "INTEGER NOT NULL DEFAULT 0")

            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_deleted_created "
                "ON tasks(deleted, created_date)"
            )
            conn.commit()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            deadline=row["deadline"] or None,
            status=TaskStatus.from_db(row["status"]),
            created_date=str(row["created_date"] or ""),
            deleted=bool(row["deleted"]),
        )

    @staticmethod
    def _storable_id(task_id: int) -> bool:
        return SQLITE_MIN_INT <= int(task_id) <= SQLITE_MAX_INT

    def _fetch_one(self, conn: sqlite3.Connection, task_id: int, *, deleted: bool) -> Task | None:
        if not self._storable_id(task_id):
            return None
        row = conn.execute(
            "SELECT * FROM tasks WHERE id = ? AND deleted = ?",
            (int(task_id), int(deleted)),
        ).fetchone()
        return self._row_to_task(row) if row else None

    def _set_deleted(self, task_id: int, *, value: bool) -> Task | None:
        if not self._storable_id(task_id):
            return None
        with self._session() as conn:
            cur = conn.execute(
                "UPDATE tasks SET deleted = ? WHERE id = ? AND deleted = ?",
                (int(value), int(task_id), int(not value)),
            )
            conn.commit()
            if cur.rowcount != 1:
                return None
            return self._fetch_one(conn, task_id, deleted=value)

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._session() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def add_task(self, title: str, description: str, deadline: str | None = None) -> Task:
        # id 0 is a placeholder; the row id is assigned by SQLite
        draft = Task.create(0, title=title, description=description, deadline=deadline)

        with self._session() as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks(title, description, deadline, status, created_date, deleted)
                VALUES (?, ?, ?, ?, ?, 0)
                """,
                (
                    draft.title,
                    draft.description,
                    draft.deadline,
                    draft.status.value,
                    draft.created_date,
                ),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise TaskStoreError("SQLite did not return lastrowid for tasks insert")

        draft.id = int(rowid)
        logger.debug("Task added id=%s deadline=%s", draft.id, draft.deadline)
        return draft

    def list_tasks(
        self,
        where: TaskFilter | None = None,
        *,
        include_deleted: bool = False,
    ) -> list[Task]:
        sql = "SELECT * FROM tasks"
        if not include_deleted:
            sql += " WHERE deleted = 0"
        sql += " ORDER BY created_date DESC, id DESC"

        with self._session() as conn:
            tasks = [self._row_to_task(r) for r in conn.execute(sql).fetchall()]
        if where is None:
            return tasks
        return [t for t in tasks if where(t)]

    def get_task(self, task_id: int, *, deleted: bool = False) -> Task | None:
        if not self._storable_id(task_id):
            return None
        with self._session() as conn:
            return self._fetch_one(conn, task_id, deleted=deleted)

    def mark_complete(self, task_id: int) -> Task | None:
        if not self._storable_id(task_id):
            return None
        with self._session() as conn:
            cur = conn.execute(
                "UPDATE tasks SET status = ? WHERE id = ? AND deleted = 0",
                (TaskStatus.COMPLETED.value, int(task_id)),
            )
            conn.commit()
            if cur.rowcount != 1:
                return None
            logger.debug("Task completed id=%s", task_id)
            return self._fetch_one(conn, task_id, deleted=False)

    def delete_task(self, task_id: int, *, confirm: ConfirmDelete | None = None) -> DeleteOutcome:
        task = self.get_task(task_id)
        if task is None:
            return DeleteOutcome.NOT_FOUND
        # No connection is held while waiting for the answer.
        if confirm is not None and not confirm(task):
            return DeleteOutcome.CANCELLED
        if self._set_deleted(task_id, value=True) is None:
            return DeleteOutcome.NOT_FOUND
        logger.debug("Task moved to recycle bin id=%s", task_id)
        return DeleteOutcome.DELETED

    def restore_task(self, task_id: int) -> Task | None:
        task = self._set_deleted(task_id, value=False)
        if task is not None:
            logger.debug("Task restored id=%s", task_id)
        return task

    def search_tasks(self, keyword: str) -> list[Task]:
        with self._session() as conn:
            rows = conn.execute(
                """
                SELECT *
                FROM tasks
                WHERE deleted = 0
                  AND (contains_ci(title, ?) OR contains_ci(description, ?))
                ORDER BY created_date DESC, id DESC
                """,
                (keyword, keyword),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def list_recycle_bin(self) -> list[Task]:
        with self._session() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE deleted = 1 ORDER BY created_date DESC, id DESC"
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

