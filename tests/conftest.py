# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpulse.cli.bootstrap import create_initial_state
from taskpulse.core.state import AppState

from .fakes import CountingByteStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpulse-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        store_db_path=tmp_path / "store.sqlite3",
        tasks_key="savedTasks",
        save_on_inactive=True,
        fetch_delay_seconds=0.01,
        fetch_success_threshold=8,
        timer_tick_seconds=0.01,
    )


@pytest.fixture()
def byte_store() -> CountingByteStore:
    return CountingByteStore()


@pytest.fixture()
def state(settings: SimpleNamespace, byte_store: CountingByteStore) -> AppState:
    """
    AppState wired with an in-memory byte-store and no update loop:
    commands run inline on the test thread.
    """
    return create_initial_state(settings=settings, byte_store=byte_store)
