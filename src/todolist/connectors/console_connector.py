# src/todolist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.ports import NoticeLevel
from ..core.state import AppState, TodoState
from ..tasks.task_models import Task, TaskFilter

logger = logging.getLogger(__name__)

STRIKE_ON = "\033[9m"
STRIKE_OFF = "\033[29m"


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _use_ansi() -> bool:
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


async def ainput(prompt: str) -> str:
    """
    input() on a daemon thread.

    A daemon reader never keeps the process alive after the loop exits,
    even when the user never presses Enter again.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(result: str | None, exc: BaseException | None) -> None:
        if fut.done():
            return
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(result or "")

    def _reader() -> None:
        try:
            line = input(prompt)
        except (Exception, KeyboardInterrupt) as e:
            loop.call_soon_threadsafe(_deliver, None, e)
        else:
            loop.call_soon_threadsafe(_deliver, line, None)

    threading.Thread(target=_reader, name="console-input", daemon=True).start()
    return await fut


class ConsoleNotifier:
    """Transient notices printed as a single timestamped line."""

    def notify(self, level: NoticeLevel, title: str, text: str) -> None:
        _print_ts(f"[{title.upper()}] {text}")


class ConsoleConfirmer:
    """y/N prompt read without blocking the event loop."""

    async def confirm(self, title: str, text: str) -> bool:
        try:
            answer = await ainput(f"{title} {text} [y/N]: ")
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer.strip().lower() in ("y", "yes")


def format_tabs(current: TaskFilter) -> str:
    labels = {TaskFilter.ALL: "All Tasks", TaskFilter.ACTIVE: "Active", TaskFilter.COMPLETED: "Completed"}
    parts = [f"[{labels[f]}]" if f is current else f" {labels[f]} " for f in TaskFilter]
    return " ".join(parts)


def format_task(task: Task, *, draft: str | None = None, ansi: bool = False) -> str:
    box = "[x]" if task.completed else "[ ]"
    if draft is not None:
        return f"{box} #{task.id} > {draft}_   (editing: Enter or /save to save)"
    name = task.name
    if task.completed:
        name = f"{STRIKE_ON}{name}{STRIKE_OFF}" if ansi else f"~{name}~"
    return f"{box} #{task.id} {name}"


def render_view(view: TodoState, *, ansi: bool = False) -> str:
    lines = [format_tabs(view.filter)]
    if view.loading:
        lines.append("  Loading...")
        return "\n".join(lines)

    visible = view.visible_tasks()
    if not visible:
        lines.append("  No tasks.")
    for task in visible:
        draft = view.edit.draft if view.edit is not None and view.edit.task_id == task.id else None
        lines.append("  " + format_task(task, draft=draft, ansi=ansi))
    return "\n".join(lines)


async def handle_line(state: AppState, line: str, emit=None) -> str | None:
    """
    Route one console line.

    - "/..." lines go through the command registry
    - while editing, a plain line is the new draft and Enter saves it
    - otherwise a plain line creates a task
    """
    controller = state.controller

    if line.startswith("/"):
        return await command_registry.handle(state, line, emit=emit)

    if controller.state.edit is not None:
        if line:
            controller.update_draft(line)
        await controller.commit_edit()
        return None

    if line:
        await controller.add_task(line)
    return None


async def run_console_loop(state: AppState) -> None:
    controller = state.controller
    ansi = _use_ansi()
    logger.info("Console connector started (api=%s).", getattr(state.settings, "api_base_url", "?"))
    _print_ts("[CONSOLE] Type a task name to add it. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        _print_ts(text)

    print(render_view(controller.state, ansi=ansi), flush=True)
    await controller.mount()

    while True:
        print(render_view(controller.state, ansi=ansi), flush=True)
        prompt = "edit> " if controller.state.edit is not None else "> "
        try:
            user_input = (await ainput(prompt)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
