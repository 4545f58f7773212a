# src/todo_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (server and console client).
- Nothing required at import time; every field has a local default.
- A couple of conventional hosting variables (PORT, DATABASE_URL) are honored as fallbacks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TODO"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    """Load a local .env (if present) without overriding the real environment."""
    load_dotenv(override=False)


_load_dotenv()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _to_int(raw: str | None, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def sqlite_path_from_url(url: str | None) -> Optional[Path]:
    """
    Extract a filesystem path from a sqlite URL ("sqlite:///relative.db", "sqlite:////abs.db").

    Returns None for anything that is not a sqlite URL (e.g. a postgres URL left over
    from another deployment), so callers can fall back to the default path.
    """
    if not url:
        return None
    prefix = "sqlite:///"
    if not url.startswith(prefix):
        return None
    rest = url[len(prefix):]
    if not rest:
        return None
    return Path(rest).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    data_dir: Path
    db_path: Path

    # ---- HTTP server ----
    host: str
    port: int
    cors_origins: List[str]
    require_title: bool

    # ---- Console client ----
    api_base_url: str
    http_timeout_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo") or "todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo"))
        db_default = sqlite_path_from_url(os.getenv("DATABASE_URL")) or data_dir / "todos.sqlite3"
        db_path = _env_path(_k("DB_PATH"), db_default)

        host = _env(_k("HOST"), "127.0.0.1").strip() or "127.0.0.1"
        port = _to_int(_first_env(_k("PORT"), "PORT"), 5000)
        cors_origins = _env_list(_k("CORS_ORIGINS"), [])
        # Blank titles are accepted unless explicitly switched on.
        require_title = _env_bool(_k("REQUIRE_TITLE"), False)

        api_base_url = _env(_k("API_BASE_URL"), f"http://127.0.0.1:{port}").rstrip("/")
        http_timeout_seconds = _env_float(_k("HTTP_TIMEOUT_SECONDS"), 10.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            host=host,
            port=port,
            cors_origins=cors_origins,
            require_title=require_title,
            api_base_url=api_base_url,
            http_timeout_seconds=http_timeout_seconds,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
