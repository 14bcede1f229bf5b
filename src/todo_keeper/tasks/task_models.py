# src/todo_keeper/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskFilter(StrEnum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        """Empty -> ALL; an unknown name raises ValueError."""
        if not raw:
            return cls.ALL
        return cls(raw.strip().lower())

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.PENDING:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


@dataclass(frozen=True, slots=True)
class Task:
    """
    One to-do item, owned by a username (the owner is the collection key,
    not a field).

    deadline/created_at are epoch seconds; formatting is the front-end's job.
    notification_id is the scheduler handle of the live reminder, if any.
    """

    id: str
    text: str
    deadline: float
    completed: bool = False
    notification_id: str | None = None
    created_at: float = 0.0

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "deadline": self.deadline,
            "notification_id": self.notification_id,
            "created_at": self.created_at,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Task:
        nid = rec.get("notification_id")
        return cls(
            id=str(rec["id"]),
            text=str(rec.get("text") or ""),
            deadline=float(rec.get("deadline") or 0.0),
            completed=bool(rec.get("completed", False)),
            notification_id=str(nid) if nid else None,
            created_at=float(rec.get("created_at") or 0.0),
        )
