# src/todo_app/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from ..errors import ArgumentError

DEFAULT_DATE_FORMAT = "%d-%m-%Y"


class Priority(StrEnum):
    """
    Task urgency.

    Notes:
    - stored on disk as the lowercase value ("low" / "medium" / "high")
    - only used for display and sorting, never for scheduling
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: str | None) -> Priority:
        """Parse user input ("High", " low ") into a Priority or raise ArgumentError."""
        token = (raw or "").strip().lower()
        try:
            return cls(token)
        except ValueError:
            choices = "|".join(p.value for p in cls)
            raise ArgumentError(f"Invalid priority {raw!r} (expected {choices}).") from None


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


def parse_due_date(raw: str, fmt: str = DEFAULT_DATE_FORMAT) -> date:
    try:
        return datetime.strptime(raw.strip(), fmt).date()
    except ValueError:
        example = date(2024, 12, 22).strftime(fmt)
        raise ArgumentError(f"Invalid date {raw!r} (expected format like {example}).") from None


def format_due_date(value: date | None, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return value.strftime(fmt) if value is not None else "-"


@dataclass(slots=True)
class Task:
    id: int
    title: str
    priority: Priority = Priority.MEDIUM
    description: str | None = None
    due_date: date | None = None
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "due_date": self.due_date.isoformat() if self.due_date is not None else None,
            "done": self.done,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Task:
        """
        Build a Task from one element of the persisted JSON array.

        Raises ValueError on any shape problem; the store turns it into ReadError.
        Absent "description" / "due_date" keys read as None.
        """
        if not isinstance(data, dict):
            raise ValueError(f"task entry must be an object, got {type(data).__name__}")

        task_id = data.get("id")
        # bool is an int subclass; reject it explicitly.
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise ValueError(f"invalid id {task_id!r}")

        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"task {task_id}: invalid title {title!r}")

        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise ValueError(f"task {task_id}: invalid description {description!r}")

        raw_priority = data.get("priority")
        try:
            priority = Priority(raw_priority)
        except ValueError:
            raise ValueError(f"task {task_id}: invalid priority {raw_priority!r}") from None

        raw_due = data.get("due_date")
        due_date: date | None = None
        if raw_due is not None:
            if not isinstance(raw_due, str):
                raise ValueError(f"task {task_id}: invalid due_date {raw_due!r}")
            due_date = date.fromisoformat(raw_due)

        done = data.get("done", False)
        if not isinstance(done, bool):
            raise ValueError(f"task {task_id}: invalid done flag {done!r}")

        return cls(
            id=task_id,
            title=title,
            priority=priority,
            description=description,
            due_date=due_date,
            done=done,
        )
