# src/todolist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..tasks.task_models import TaskFilter

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str | None]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._keeps_focus: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        keeps_focus: bool = False,
    ) -> None:
        """
        keeps_focus=False means the command moves focus away from an open
        edit field, so the draft is committed before the handler runs.
        """
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if keeps_focus:
            self._keeps_focus.update([key, *(a.lower() for a in aliases)])

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None if the line is not a command
        (or the command has nothing to say).
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s args=%s", name, args)

        controller = state.controller
        if name not in self._keeps_focus and controller.state.edit is not None:
            await controller.commit_edit()

        return await handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append(
            "  (a line without a leading / adds a task, or saves the open edit;\n"
            "   a line starting with / is always a command, so use /add for names like that)"
        )
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    # The console re-renders after every command; nothing extra to say.
    return None


async def cmd_reload(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    if emit:
        emit("Loading...")
    await state.controller.reload()
    return None


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    name = " ".join(args).strip()
    if not name:
        return "Usage: /add <task name>"
    await state.controller.add_task(name)
    return None


def _filter_setter(task_filter: TaskFilter) -> CommandHandler:
    async def _set(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
        state.controller.set_filter(task_filter)
        return None

    return _set


async def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    """
    /filter                 -> show current filter
    /filter all|active|completed
    """
    if not args:
        return f"Filter is {state.controller.state.filter.value}. Use /filter all|active|completed."
    try:
        task_filter = TaskFilter.parse(args[0])
    except ValueError:
        return "Usage: /filter all|active|completed"
    state.controller.set_filter(task_filter)
    return None


async def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /toggle <id>"
    if not _known(state, task_id):
        return f"No task with id {task_id}."
    await state.controller.toggle_task(task_id)
    return None


async def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /edit <id>"
    if not _known(state, task_id):
        return f"No task with id {task_id}."
    if not await state.controller.start_edit(task_id):
        return "The open edit could not be saved. Fix the name, or /cancel it first."
    return "Editing. Type the new name and press Enter (/save keeps the draft, /cancel aborts)."


async def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    if state.controller.state.edit is None:
        return "Nothing is being edited."
    await state.controller.commit_edit()
    return None


async def cmd_cancel(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    if state.controller.state.edit is None:
        return "Nothing is being edited."
    state.controller.cancel_edit()
    return None


async def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str | None:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /delete <id>"
    if not _known(state, task_id):
        return f"No task with id {task_id}."
    await state.controller.delete_task(task_id)
    return None


def _known(state: AppState, task_id: int) -> bool:
    return any(t.id == task_id for t in state.controller.state.tasks)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"], keeps_focus=True)
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"], keeps_focus=True)
registry.register("reload", cmd_reload, help_text="Fetch the task list from the server again.")
registry.register("add", cmd_add, help_text="Add a task: /add <name>.")
registry.register("all", _filter_setter(TaskFilter.ALL), help_text="Show all tasks.")
registry.register("active", _filter_setter(TaskFilter.ACTIVE), help_text="Show active tasks.")
registry.register("completed", _filter_setter(TaskFilter.COMPLETED), help_text="Show completed tasks.")
registry.register("filter", cmd_filter, help_text="Select a filter: /filter all|active|completed.")
registry.register("toggle", cmd_toggle, help_text="Toggle completion: /toggle <id>.", aliases=["done"])
registry.register("edit", cmd_edit, help_text="Rename a task inline: /edit <id>.", keeps_focus=True)
registry.register("save", cmd_save, help_text="Save the task being edited.", keeps_focus=True)
registry.register("cancel", cmd_cancel, help_text="Close the edit field without saving.", keeps_focus=True)
registry.register("delete", cmd_delete, help_text="Delete a task (asks first): /delete <id>.", aliases=["rm"])
