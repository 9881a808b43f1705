# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The controller depends on Protocols instead of concrete implementations.
This keeps the HTTP client and the view swappable and makes testing easier.
"""

from datetime import datetime
from enum import StrEnum
from typing import Protocol

from ..tasks.task_models import Task


class NoticeLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class TaskApi(Protocol):
    """Remote task store (see tasks/task_client.py)."""

    async def list_tasks(self) -> list[Task]: ...
    async def create_task(self, name: str, *, created_at: datetime) -> Task: ...
    async def update_task(self, task: Task) -> Task: ...
    async def delete_task(self, task_id: int) -> None: ...


class Notifier(Protocol):
    """View-side port: transient user-facing notices (title + text)."""

    def notify(self, level: NoticeLevel, title: str, text: str) -> None: ...


class Confirmer(Protocol):
    """View-side port: a blocking yes/no prompt (the delete confirmation)."""

    async def confirm(self, title: str, text: str) -> bool: ...
