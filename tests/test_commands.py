# tests/test_commands.py

from __future__ import annotations

import pytest

from todolist.cli.commands import CommandRegistry, registry
from todolist.connectors.console_connector import handle_line, render_view
from todolist.tasks.task_models import TaskFilter


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_command_registry_routes_aliases_and_emit(state) -> None:
    reg = CommandRegistry()
    seen: list[list[str]] = []

    async def handler(state, args, emit):
        seen.append(args)
        if emit is not None:
            emit("note")
        return "ok"

    reg.register("thing", handler, "does a thing", aliases=["t"])
    notes: list[str] = []

    assert await reg.handle(state, "/t a b", emit=notes.append) == "ok"
    assert await reg.handle(state, "/THING", emit=notes.append) == "ok"
    assert seen == [["a", "b"], []]
    assert notes == ["note", "note"]


@pytest.mark.asyncio
async def test_plain_line_adds_task(state, api) -> None:
    await state.controller.mount()

    await handle_line(state, "Buy milk")

    assert api.calls[-1] == ("create", "Buy milk")
    assert any(t.name == "Buy milk" for t in state.controller.state.tasks)


@pytest.mark.asyncio
async def test_filter_commands(state) -> None:
    await state.controller.mount()

    await handle_line(state, "/active")
    assert state.controller.state.filter is TaskFilter.ACTIVE

    await handle_line(state, "/filter completed")
    assert state.controller.state.filter is TaskFilter.COMPLETED

    reply = await handle_line(state, "/filter someday")
    assert reply is not None and reply.startswith("Usage")
    assert state.controller.state.filter is TaskFilter.COMPLETED


@pytest.mark.asyncio
async def test_toggle_and_delete_commands(state, api) -> None:
    await state.controller.mount()

    assert await handle_line(state, "/toggle 1") is None
    assert [t.completed for t in state.controller.state.tasks if t.id == 1] == [True]

    assert await handle_line(state, "/rm #3") is None
    assert all(t.id != 3 for t in state.controller.state.tasks)

    assert await handle_line(state, "/toggle 99") == "No task with id 99."
    assert await handle_line(state, "/delete") == "Usage: /delete <id>"


@pytest.mark.asyncio
async def test_inline_edit_flow(state, api) -> None:
    await state.controller.mount()

    reply = await handle_line(state, "/edit 1")
    assert reply is not None and reply.startswith("Editing")
    assert "> Write report_" in render_view(state.controller.state)

    # Enter on a plain line replaces the draft and saves it.
    await handle_line(state, "Write the report")
    assert state.controller.state.edit is None
    assert [t.name for t in state.controller.state.tasks if t.id == 1] == ["Write the report"]


@pytest.mark.asyncio
async def test_other_command_blurs_and_saves_edit(state, api) -> None:
    await state.controller.mount()
    await handle_line(state, "/edit 3")
    state.controller.update_draft("Water all plants")

    await handle_line(state, "/completed")

    assert state.controller.state.edit is None
    assert [t.name for t in state.controller.state.tasks if t.id == 3] == ["Water all plants"]


@pytest.mark.asyncio
async def test_cancel_keeps_name(state, api) -> None:
    await state.controller.mount()
    await handle_line(state, "/edit 3")
    state.controller.update_draft("Something else")

    await handle_line(state, "/cancel")

    assert state.controller.state.edit is None
    assert [t.name for t in state.controller.state.tasks if t.id == 3] == ["Water plants"]


def test_render_view_marks_filter_and_completion(controller) -> None:
    view = controller.state
    assert "Loading..." in render_view(view)

    view.loading = False
    assert "No tasks." in render_view(view)


@pytest.mark.asyncio
async def test_render_view_lists_visible_tasks(state) -> None:
    await state.controller.mount()
    view = state.controller.state

    text = render_view(view)
    assert text.splitlines()[0].startswith("[All Tasks]")
    assert "[x] #2 ~Call mom~" in text
    assert "[ ] #3 Water plants" in text

    state.controller.set_filter(TaskFilter.ACTIVE)
    text = render_view(view)
    assert "Call mom" not in text
    assert "[Active]" in text


def test_help_lists_commands() -> None:
    text = registry.build_help()
    for name in ("add", "toggle", "edit", "save", "delete", "filter"):
        assert f"/{name}" in text


@pytest.mark.asyncio
async def test_names_starting_with_a_slash_go_through_add(state, api) -> None:
    await state.controller.mount()

    reply = await handle_line(state, "/etc cleanup")
    assert reply is not None and "Unknown command" in reply
    assert api.ops()[-1] == "list"

    await handle_line(state, "/add /etc cleanup")
    assert api.calls[-1] == ("create", "/etc cleanup")

    help_text = registry.build_help()
    assert "always a command" in help_text
    assert "use /add" in help_text


@pytest.mark.asyncio
async def test_edit_switch_reports_an_unsaved_draft(state, api) -> None:
    await state.controller.mount()
    await handle_line(state, "/edit 1")
    state.controller.update_draft("Call mom")

    reply = await handle_line(state, "/edit 3")

    assert reply is not None and "could not be saved" in reply
    assert state.controller.state.edit is not None
    assert state.controller.state.edit.task_id == 1
