# src/todolist/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for failures a user action can surface as a notice."""


class DuplicateTaskNameError(TodoError):
    """A task with the same name is already loaded; no request was sent."""

    def __init__(self, name: str) -> None:
        super().__init__(f"task name already exists: {name!r}")
        self.name = name


class RemoteOperationError(TodoError):
    """
    The remote call did not happen (network failure, timeout, non-2xx status
    or a malformed response body). Callers do not distinguish the cause.
    """

    def __init__(self, operation: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.status_code = status_code
