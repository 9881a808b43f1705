# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP client and the console view ports into the controller.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleConfirmer, ConsoleNotifier
from ..core.controller import TodoController
from ..core.ports import Confirmer, Notifier
from ..core.state import AppState
from ..tasks.task_client import TodoApiClient
from ..tasks.task_models import TaskFilter

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def _initial_filter(raw: str) -> TaskFilter:
    try:
        return TaskFilter.parse(raw)
    except ValueError:
        logger.warning("Unknown default filter %r; using All", raw)
        return TaskFilter.ALL


def create_initial_state(
    *,
    settings=None,
    api=None,
    notifier: Notifier | None = None,
    confirmer: Confirmer | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and ports injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to
    get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if api is None:
        api = TodoApiClient(settings.api_base_url, timeout=settings.http_timeout_seconds)

    controller = TodoController(
        api,
        notifier or ConsoleNotifier(),
        confirmer or ConsoleConfirmer(),
        default_filter=_initial_filter(settings.default_filter),
        confirm_deletes=settings.confirm_deletes,
    )
    return AppState(settings=settings, api=api, controller=controller)
