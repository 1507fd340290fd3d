# src/taskpulse/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (byte-store/fetcher/store/stopwatch),
- registers lifecycle participants in a fixed order (tasks first, then stopwatch).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.lifecycle import LifecycleMonitor
from ..core.ports import ByteStore
from ..core.state import AppState
from ..core.update_loop import UpdateLoop
from ..storage.sqlite_store import SqliteByteStore
from ..tasks.data_fetcher import DataFetcher
from ..tasks.stopwatch import Stopwatch
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    byte_store: ByteStore | None = None,
    updates: UpdateLoop | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). If byte_store is None, a SqliteByteStore
    is opened at settings.store_db_path.

    Call this on the update loop thread when one is used: the store loads its
    tasks during construction.
    """
    if settings is None:
        settings = get_settings()

    if byte_store is None:
        _ensure_local_dirs(settings)
        byte_store = SqliteByteStore(settings.store_db_path)

    fetcher = DataFetcher(
        delay_seconds=settings.fetch_delay_seconds,
        success_threshold=settings.fetch_success_threshold,
    )
    store = TaskStore(
        byte_store,
        fetcher=fetcher,
        tasks_key=settings.tasks_key,
        save_on_inactive=settings.save_on_inactive,
    )
    stopwatch = Stopwatch(byte_store, tick_seconds=settings.timer_tick_seconds)

    lifecycle = LifecycleMonitor()
    lifecycle.register(store)
    lifecycle.register(stopwatch)

    return AppState(
        settings=settings,
        byte_store=byte_store,
        store=store,
        stopwatch=stopwatch,
        lifecycle=lifecycle,
        updates=updates,
    )
