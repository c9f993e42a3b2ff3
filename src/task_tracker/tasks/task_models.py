# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

CREATED_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Only PENDING -> COMPLETED is exposed; there is no way back.
    """

    PENDING = "Pending"
    COMPLETED = "Completed"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING


class DeleteOutcome(StrEnum):
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    DELETED = "deleted"


def now_local() -> str:
    return datetime.now().strftime(CREATED_DATE_FORMAT)


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str
    deadline: str | None
    status: TaskStatus
    created_date: str
    deleted: bool = False

    @classmethod
    def create(
        cls,
        task_id: int,
        *,
        title: str,
        description: str,
        deadline: str | None = None,
        created_date: str | None = None,
    ) -> Task:
        """
        Build a fresh Pending task.

        Title and description are required (non-blank); a blank deadline is stored as None.
        """
        title = (title or "").strip()
        description = (description or "").strip()
        if not title:
            raise ValueError("title is required")
        if not description:
            raise ValueError("description is required")

        deadline = (deadline or "").strip() or None
        return cls(
            id=int(task_id),
            title=title,
            description=description,
            deadline=deadline,
            status=TaskStatus.PENDING,
            created_date=created_date or now_local(),
            deleted=False,
        )

    def matches(self, keyword: str) -> bool:
        """Case-insensitive substring match on title or description."""
        needle = keyword.casefold()
        return needle in self.title.casefold() or needle in self.description.casefold()

    def to_record(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "deadline": self.deadline,
            "status": self.status.value,
            "created_date": self.created_date,
            "deleted": self.deleted,
        }
