# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "TODO_DATA_DIR": "Local data dir for the database and todo.log (default: .local/todo).",
    "TODO_DB_PATH": "SQLite file (default: <data_dir>/todos.sqlite3).",
    "DATABASE_URL": "Fallback for TODO_DB_PATH, only sqlite:///path URLs are understood.",
    # HTTP server
    "TODO_HOST": "Bind address for `todo-tracker serve` (default: 127.0.0.1).",
    "TODO_PORT": "Port (default: PORT, then 5000).",
    "TODO_CORS_ORIGINS": "Comma/space separated origins allowed to call the API (default: none).",
    "TODO_REQUIRE_TITLE": "Reject blank titles with 422 (true/false, default: false).",
    # Console client
    "TODO_API_BASE_URL": "API the console talks to (default: http://127.0.0.1:<port>).",
    "TODO_HTTP_TIMEOUT_SECONDS": "Per-request timeout for the console client (default: 10).",
}
