# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODOLIST_APP_NAME": "App display name (default: todolist).",
    "TODOLIST_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Remote task API
    "TODOLIST_API_BASE_URL": "Base URL of the task API (default: http://localhost:8080).",
    "TODOLIST_HTTP_TIMEOUT_SECONDS": "Per-request timeout in seconds; 0 disables it (default: 10).",
    # View
    "TODOLIST_DEFAULT_FILTER": "Filter selected on start: All, Active or Completed (default: All).",
    "TODOLIST_CONFIRM_DELETES": "Ask before deleting a task (true/false, default: true).",
    # Paths (gitignored)
    "TODOLIST_DATA_DIR": "Local data directory for todolist.log (default: .local/todolist).",
}
