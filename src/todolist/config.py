# src/todolist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time: every value has a local-dev default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TODOLIST"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Remote task API ----
    api_base_url: str
    http_timeout_seconds: float | None

    # ---- View ----
    default_filter: str
    confirm_deletes: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todolist").strip() or "todolist"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_base_url = _env(_k("API_BASE_URL"), "http://localhost:8080").strip().rstrip("/")
        if not api_base_url:
            api_base_url = "http://localhost:8080"

        # 0 (or negative) disables the timeout entirely.
        timeout = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)
        http_timeout_seconds = timeout if timeout > 0 else None

        default_filter = _env(_k("DEFAULT_FILTER"), "All").strip() or "All"
        confirm_deletes = _env_bool(_k("CONFIRM_DELETES"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todolist"))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_base_url=api_base_url,
            http_timeout_seconds=http_timeout_seconds,
            default_filter=default_filter,
            confirm_deletes=confirm_deletes,
            data_dir=data_dir,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
