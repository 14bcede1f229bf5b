# src/todo_keeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every value has a local default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
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

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Notifications ----
    notifications_enabled: bool
    notification_title: str
    notify_min_lead_seconds: float

    # ---- Accounts ----
    password_hash_rounds: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todo-keeper") or "todo-keeper"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        notifications_enabled = _env_bool(_k("NOTIFICATIONS_ENABLED"), True)
        notification_title = _env(_k("NOTIFICATION_TITLE"), "Task reminder")
        notify_min_lead_seconds = max(0.0, _env_float(_k("NOTIFY_MIN_LEAD_SECONDS"), 0.0))

        # 0 -> passlib default rounds.
        password_hash_rounds = max(0, _env_int(_k("PASSWORD_HASH_ROUNDS"), 0))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todo_keeper"))
        store_db_path = _env_path(_k("STORE_DB_PATH"), data_dir / "store.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            notifications_enabled=notifications_enabled,
            notification_title=notification_title,
            notify_min_lead_seconds=notify_min_lead_seconds,
            password_hash_rounds=password_hash_rounds,
            data_dir=data_dir,
            store_db_path=store_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
