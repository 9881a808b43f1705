# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.cli.bootstrap import create_initial_state
from todolist.core.controller import TodoController
from todolist.core.state import AppState
from todolist.tasks.task_models import Task

from .fakes import FakeConfirmer, FakeNotifier, FakeTaskApi

BASE_TS = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def make_task(task_id: int, name: str, *, completed: bool = False, minutes: int = 0) -> Task:
    return Task(
        id=task_id,
        name=name,
        completed=completed,
        created_at=BASE_TS + timedelta(minutes=minutes),
    )


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console view.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        api_base_url="http://api.test",
        http_timeout_seconds=1.0,
        default_filter="All",
        confirm_deletes=True,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi(
        [
            make_task(1, "Write report", minutes=0),
            make_task(2, "Call mom", completed=True, minutes=20),
            make_task(3, "Water plants", minutes=10),
        ]
    )


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def confirmer() -> FakeConfirmer:
    return FakeConfirmer()


@pytest.fixture()
def controller(api: FakeTaskApi, notifier: FakeNotifier, confirmer: FakeConfirmer) -> TodoController:
    return TodoController(api, notifier, confirmer, clock=lambda: BASE_TS + timedelta(hours=1))


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    api: FakeTaskApi,
    notifier: FakeNotifier,
    confirmer: FakeConfirmer,
) -> AppState:
    """AppState wired through the real composition root with deterministic fakes."""
    return create_initial_state(settings=settings, api=api, notifier=notifier, confirmer=confirmer)
