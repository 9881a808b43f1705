# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any


class TaskFilter(StrEnum):
    """Client-side view selection. Has no server-side effect."""

    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | None) -> TaskFilter:
        """Case-insensitive lookup by value; raises ValueError for anything else."""
        key = (raw or "").strip().lower()
        for item in cls:
            if item.value.lower() == key:
                return item
        raise ValueError(f"unknown filter: {raw!r}")

    def matches(self, task: Task) -> bool:
        if self is TaskFilter.ACTIVE:
            return not task.completed
        if self is TaskFilter.COMPLETED:
            return task.completed
        return True


def parse_timestamp(raw: Any) -> datetime:
    """
    Parse a timestamp as sent by the API: an ISO-8601 string or a number of
    epoch milliseconds (the default JSON form of a Java Date).

    Naive values are treated as UTC so every record stays comparable.
    """
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            dt = datetime.fromtimestamp(raw / 1000, timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"invalid timestamp: {raw!r}") from e
    elif isinstance(raw, str) and raw.strip():
        dt = datetime.fromisoformat(raw.strip())
    else:
        raise ValueError(f"invalid timestamp: {raw!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_timestamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    name: str
    completed: bool
    created_at: datetime

    @classmethod
    def from_api(cls, data: Any) -> Task:
        """Build a Task from one JSON record. Raises ValueError on malformed input."""
        if not isinstance(data, dict):
            raise ValueError(f"task record must be an object, got {type(data).__name__}")

        raw_id = data.get("id")
        # bool is an int subclass; a true/false id is still malformed
        if not isinstance(raw_id, int) or isinstance(raw_id, bool):
            raise ValueError(f"task id must be an integer, got {raw_id!r}")

        name = data.get("name")
        if not isinstance(name, str):
            raise ValueError(f"task name must be a string, got {name!r}")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task completed flag must be a boolean, got {completed!r}")

        return cls(
            id=raw_id,
            name=name,
            completed=completed,
            created_at=parse_timestamp(data.get("created_at")),
        )

    def to_api(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "completed": self.completed,
            "created_at": format_timestamp(self.created_at),
        }
