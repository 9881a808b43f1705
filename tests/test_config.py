# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from todolist.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "TODOLIST_APP_NAME",
        "TODOLIST_API_BASE_URL",
        "TODOLIST_HTTP_TIMEOUT_SECONDS",
        "TODOLIST_DEFAULT_FILTER",
        "TODOLIST_CONFIRM_DELETES",
        "TODOLIST_DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()

    assert s.app_name == "todolist"
    assert s.api_base_url == "http://localhost:8080"
    assert s.http_timeout_seconds == 10.0
    assert s.default_filter == "All"
    assert s.confirm_deletes is True
    assert s.data_dir == Path(".local/todolist")


def test_env_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODOLIST_API_BASE_URL", "https://tasks.example.com/api/")
    monkeypatch.setenv("TODOLIST_HTTP_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("TODOLIST_DEFAULT_FILTER", "active")
    monkeypatch.setenv("TODOLIST_CONFIRM_DELETES", "no")
    monkeypatch.setenv("TODOLIST_DATA_DIR", str(tmp_path))

    s = Settings.from_env()

    assert s.api_base_url == "https://tasks.example.com/api"
    assert s.http_timeout_seconds is None
    assert s.default_filter == "active"
    assert s.confirm_deletes is False
    assert s.data_dir == tmp_path


def test_bad_timeout_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("TODOLIST_HTTP_TIMEOUT_SECONDS", "soon")
    assert Settings.from_env().http_timeout_seconds == 10.0
