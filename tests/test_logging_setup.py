# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todolist.logging_setup import ConsoleNoiseFilter, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def test_console_filter_floors() -> None:
    f = ConsoleNoiseFilter()

    assert f.filter(_record("todolist.core.controller", logging.DEBUG))
    assert not f.filter(_record("httpx", logging.INFO))
    assert f.filter(_record("httpx", logging.WARNING))
    assert not f.filter(_record("httpcore.connection", logging.DEBUG))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("asyncio", logging.WARNING))
    assert f.filter(_record("asyncio", logging.ERROR))
    # Prefix match is per dotted segment.
    assert not f.filter(_record("todolistish", logging.INFO))


def test_setup_logging_writes_file_and_replaces_own_handlers(
    tmp_path: Path, restore_root_logging
) -> None:
    root = logging.getLogger()
    before = len(root.handlers)

    log_file = setup_logging(log_dir=tmp_path / "logs")
    setup_logging(log_dir=tmp_path / "logs")

    assert log_file == tmp_path / "logs" / "todolist.log"
    assert len(root.handlers) == before + 2

    logging.getLogger("todolist.test").debug("hello file")
    for h in root.handlers:
        h.flush()
    assert "hello file" in log_file.read_text("utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING
