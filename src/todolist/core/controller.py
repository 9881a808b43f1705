# src/todolist/core/controller.py

from __future__ import annotations

"""
View controller for the task list.

Every user action follows the same shape:
- validate locally (duplicate names, unknown ids),
- issue exactly one remote call and await it,
- on success, reconcile the local collection against its *current* value,
- on failure, leave state untouched and surface a transient notice.

Lifetime:
- mount() starts a new generation and loads the list,
- unmount() advances the generation, so any response still in flight is
  discarded when it lands instead of mutating a view that is gone.
"""

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from ..errors import DuplicateTaskNameError, RemoteOperationError
from ..tasks.task_list import (
    append_task,
    find_task,
    name_taken,
    remove_task,
    replace_task,
    sort_newest_first,
)
from ..tasks.task_models import Task, TaskFilter
from .ports import Confirmer, NoticeLevel, Notifier, TaskApi
from .state import EditSession, TodoState

logger = logging.getLogger(__name__)

MSG_DUPLICATE = "Task name already exists!"
MSG_ADDED = "New task added!"
MSG_UPDATED = "Task updated!"
MSG_DELETED = "Your task has been deleted!"
MSG_FETCH_FAILED = "Error fetching todo list!"
MSG_ADD_FAILED = "Error adding new task!"
MSG_TOGGLE_FAILED = "Error updating task!"
MSG_EDIT_FAILED = "Error saving edited task!"
MSG_DELETE_FAILED = "Error deleting task!"

CONFIRM_DELETE_TITLE = "Are you sure?"
CONFIRM_DELETE_TEXT = "Once deleted, you will not be able to recover this task!"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TodoController:
    def __init__(
        self,
        api: TaskApi,
        notifier: Notifier,
        confirmer: Confirmer,
        *,
        default_filter: TaskFilter = TaskFilter.ALL,
        confirm_deletes: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._api = api
        self._notifier = notifier
        self._confirmer = confirmer
        self._confirm_deletes = confirm_deletes
        self._clock = clock
        self.state = TodoState(filter=default_filter)

    # ---- lifetime ----

    async def mount(self) -> None:
        self.state.generation += 1
        self.state.mounted = True
        self.state.loading = True
        logger.debug("View mounted (generation=%s)", self.state.generation)
        await self.reload()

    def unmount(self) -> None:
        self.state.generation += 1
        self.state.mounted = False
        self.state.edit = None
        logger.debug("View unmounted (generation=%s)", self.state.generation)

    def _alive(self, generation: int) -> bool:
        return self.state.mounted and self.state.generation == generation

    def _stale(self, generation: int, operation: str) -> bool:
        if self._alive(generation):
            return False
        logger.debug("Discarding late %s response (generation=%s)", operation, generation)
        return True

    # ---- notices ----

    def _success(self, text: str) -> None:
        self._notifier.notify(NoticeLevel.SUCCESS, "Success", text)

    def _error(self, text: str) -> None:
        self._notifier.notify(NoticeLevel.ERROR, "Error", text)

    def _remote_failed(self, generation: int, err: RemoteOperationError, text: str) -> None:
        logger.warning("%s (%s)", text, err)
        if self._alive(generation):
            self._error(text)

    def _ensure_unique(self, name: str, *, exclude_id: int | None = None) -> None:
        # Client-side hint only; the server stays authoritative.
        if name_taken(self.state.tasks, name, exclude_id=exclude_id):
            raise DuplicateTaskNameError(name)

    # ---- list ----

    async def reload(self) -> bool:
        gen = self.state.generation
        try:
            tasks = await self._api.list_tasks()
        except RemoteOperationError as e:
            if not self._stale(gen, "list"):
                self.state.loading = False
            self._remote_failed(gen, e, MSG_FETCH_FAILED)
            return False

        if self._stale(gen, "list"):
            return False
        self.state.tasks = sort_newest_first(tasks)
        self.state.loading = False
        logger.info("Loaded %d tasks", len(tasks))
        return True

    # ---- create ----

    async def add_task(self, name: str) -> Task | None:
        name = (name or "").strip()
        if not name:
            return None

        try:
            self._ensure_unique(name)
        except DuplicateTaskNameError as e:
            logger.info("Create rejected locally: %s", e)
            self._error(MSG_DUPLICATE)
            return None

        gen = self.state.generation
        try:
            created = await self._api.create_task(name, created_at=self._clock())
        except RemoteOperationError as e:
            self._remote_failed(gen, e, MSG_ADD_FAILED)
            return None

        if self._stale(gen, "create"):
            return None
        self.state.tasks = append_task(self.state.tasks, created)
        logger.info("Task created id=%s", created.id)
        self._success(MSG_ADDED)
        return created

    # ---- toggle ----

    async def toggle_task(self, task_id: int) -> Task | None:
        task = find_task(self.state.tasks, task_id)
        if task is None:
            return None

        gen = self.state.generation
        try:
            updated = await self._api.update_task(replace(task, completed=not task.completed))
        except RemoteOperationError as e:
            self._remote_failed(gen, e, MSG_TOGGLE_FAILED)
            return None

        if self._stale(gen, "toggle"):
            return None
        self.state.tasks = replace_task(self.state.tasks, updated)
        logger.debug("Task toggled id=%s completed=%s", updated.id, updated.completed)
        return updated

    # ---- inline edit ----

    async def start_edit(self, task_id: int) -> bool:
        task = find_task(self.state.tasks, task_id)
        if task is None:
            return False

        # Opening a second field blurs the first one, which saves it.
        # If that save fails the old session stays open with its draft.
        if self.state.edit is not None and self.state.edit.task_id != task_id:
            await self.commit_edit()
            if self.state.edit is not None:
                return False

        self.state.edit = EditSession(task_id=task.id, draft=task.name)
        return True

    def update_draft(self, text: str) -> None:
        if self.state.edit is not None:
            self.state.edit.draft = text

    def cancel_edit(self) -> None:
        self.state.edit = None

    async def commit_edit(self) -> bool:
        """
        Save the open edit session (blur, confirm key or Save).

        - no session / task gone: session closed, nothing sent
        - empty draft: cancels the edit
        - unchanged draft: closes the session without a request
        - draft clashing with another task's name: rejected, session stays open
        """
        session = self.state.edit
        if session is None:
            return False

        task = find_task(self.state.tasks, session.task_id)
        if task is None:
            self.state.edit = None
            return False

        draft = session.draft.strip()
        if not draft:
            logger.info("Empty draft for task id=%s; edit cancelled", task.id)
            self.state.edit = None
            return False
        if draft == task.name:
            self.state.edit = None
            return False
        try:
            self._ensure_unique(draft, exclude_id=task.id)
        except DuplicateTaskNameError as e:
            logger.info("Rename rejected locally: %s", e)
            self._error(MSG_DUPLICATE)
            return False

        gen = self.state.generation
        try:
            updated = await self._api.update_task(replace(task, name=draft))
        except RemoteOperationError as e:
            self._remote_failed(gen, e, MSG_EDIT_FAILED)
            return False

        if self._stale(gen, "rename"):
            return False
        self.state.tasks = replace_task(self.state.tasks, updated)
        if self.state.edit is not None and self.state.edit.task_id == updated.id:
            self.state.edit = None
        logger.info("Task renamed id=%s", updated.id)
        self._success(MSG_UPDATED)
        return True

    # ---- delete ----

    async def delete_task(self, task_id: int) -> bool:
        if find_task(self.state.tasks, task_id) is None:
            return False

        gen = self.state.generation
        if self._confirm_deletes:
            if not await self._confirmer.confirm(CONFIRM_DELETE_TITLE, CONFIRM_DELETE_TEXT):
                return False
            if self._stale(gen, "confirm"):
                return False

        try:
            await self._api.delete_task(task_id)
        except RemoteOperationError as e:
            self._remote_failed(gen, e, MSG_DELETE_FAILED)
            return False

        if self._stale(gen, "delete"):
            return False
        self.state.tasks = remove_task(self.state.tasks, task_id)
        if self.state.editing(task_id):
            self.state.edit = None
        logger.info("Task deleted id=%s", task_id)
        self._success(MSG_DELETED)
        return True

    # ---- filter ----

    def set_filter(self, task_filter: TaskFilter) -> None:
        self.state.filter = task_filter
