# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_list import filter_tasks
from ..tasks.task_models import Task, TaskFilter
from .ports import TaskApi


@dataclass(slots=True)
class EditSession:
    task_id: int
    draft: str


@dataclass
class TodoState:
    """
    View state owned by the controller.

    `tasks` is the single source of truth for rendering. It is only ever
    replaced as a whole, after a remote call succeeds.
    """

    tasks: list[Task] = field(default_factory=list)
    filter: TaskFilter = TaskFilter.ALL
    edit: EditSession | None = None
    loading: bool = True

    # Bumped on mount/unmount; responses tagged with an older value are dropped.
    generation: int = 0
    mounted: bool = False

    def visible_tasks(self) -> list[Task]:
        return filter_tasks(self.tasks, self.filter)

    def editing(self, task_id: int) -> bool:
        return self.edit is not None and self.edit.task_id == task_id


@dataclass
class AppState:
    # Settings are kept on the state for easy access in connectors/commands.
    settings: Any

    api: TaskApi
    controller: Any  # TodoController (kept as Any to avoid import cycles)
