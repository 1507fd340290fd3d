# src/taskpulse/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every field has a default.
- Components receive settings (or plain values) by injection, so tests can
  pass a SimpleNamespace instead of importing this module.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKPULSE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    """Load .env from the working directory; real env vars win."""
    load_dotenv(override=False)


_load_dotenv()


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
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    store_db_path: Path

    # ---- Persistence ----
    tasks_key: str
    save_on_inactive: bool

    # ---- Simulated fetch ----
    fetch_delay_seconds: float
    fetch_success_threshold: int

    # ---- Stopwatch ----
    timer_tick_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskpulse").strip() or "taskpulse"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpulse"))
        store_db_path = _env_path(_k("STORE_DB_PATH"), data_dir / "store.sqlite3")

        tasks_key = _env(_k("TASKS_KEY"), "savedTasks").strip() or "savedTasks"
        save_on_inactive = _env_bool(_k("SAVE_ON_INACTIVE"), True)

        fetch_delay_seconds = max(0.0, _env_float(_k("FETCH_DELAY_SECONDS"), 2.0))
        # Roll is 1..10; success when roll <= threshold.
        fetch_success_threshold = max(0, min(10, _env_int(_k("FETCH_SUCCESS_THRESHOLD"), 8)))

        timer_tick_seconds = max(0.01, _env_float(_k("TIMER_TICK_SECONDS"), 1.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            store_db_path=store_db_path,
            tasks_key=tasks_key,
            save_on_inactive=save_on_inactive,
            fetch_delay_seconds=fetch_delay_seconds,
            fetch_success_threshold=fetch_success_threshold,
            timer_tick_seconds=timer_tick_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
