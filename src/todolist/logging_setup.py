# src/todolist/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path

APP_LOGGER = "todolist"

# Minimum console level per logger prefix; anything unlisted needs ERROR.
CONSOLE_FLOORS: Mapping[str, int] = {
    APP_LOGGER: logging.NOTSET,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "py.warnings": logging.ERROR,
}

_OWNED = "_todolist_handler"


def _floor_for(name: str, floors: Mapping[str, int]) -> int:
    best, floor = "", logging.ERROR
    for prefix, level in floors.items():
        if (name == prefix or name.startswith(prefix + ".")) and len(prefix) > len(best):
            best, floor = prefix, level
    return floor


class ConsoleNoiseFilter(logging.Filter):
    """
    Keeps the REPL readable: the prompt and the task list share the terminal
    with stderr, so only app logs and real trouble from libraries get through.
    """

    def __init__(self, floors: Mapping[str, int] | None = None) -> None:
        super().__init__()
        self._floors = dict(CONSOLE_FLOORS if floors is None else floors)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= _floor_for(record.name, self._floors)


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/todolist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send logs to stderr (filtered) and to <log_dir>/todolist.log (everything
    at file_level and above). Returns the log file path.

    Safe to call again: handlers installed by an earlier call are replaced,
    handlers added by anyone else (pytest's caplog, for one) are left alone.
    """
    log_file = Path(log_dir) / f"{APP_LOGGER}.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = _own(logging.StreamHandler(sys.stderr))
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = _own(logging.FileHandler(str(log_file), encoding="utf-8"))
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # The HTTP stack logs every request at INFO; keep that out of the file too.
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    return log_file
