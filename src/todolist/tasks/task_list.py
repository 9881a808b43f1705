# src/todolist/tasks/task_list.py

"""Pure single-pass operations over the local task collection.

None of these mutate their input; each returns a new list.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .task_models import Task, TaskFilter


def sort_newest_first(tasks: Iterable[Task]) -> list[Task]:
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


def find_task(tasks: Iterable[Task], task_id: int) -> Task | None:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def name_taken(tasks: Iterable[Task], name: str, *, exclude_id: int | None = None) -> bool:
    """Exact, case-sensitive match against loaded tasks."""
    return any(t.name == name and t.id != exclude_id for t in tasks)


def append_task(tasks: Sequence[Task], task: Task) -> list[Task]:
    return [*tasks, task]


def replace_task(tasks: Sequence[Task], updated: Task) -> list[Task]:
    return [updated if t.id == updated.id else t for t in tasks]


def remove_task(tasks: Sequence[Task], task_id: int) -> list[Task]:
    return [t for t in tasks if t.id != task_id]


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    return [t for t in tasks if task_filter.matches(t)]
