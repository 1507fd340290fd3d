# src/taskpulse/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.stopwatch import Stopwatch
from ..tasks.task_store import TaskStore
from .lifecycle import LifecycleMonitor
from .ports import ByteStore
from .update_loop import UpdateLoop


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: Any

    byte_store: ByteStore
    store: TaskStore
    stopwatch: Stopwatch
    lifecycle: LifecycleMonitor

    # None when commands run directly on the caller's thread (tests).
    updates: UpdateLoop | None = None

    def run(self, fn, *args, **kwargs):
        """Run fn on the update loop when there is one, inline otherwise."""
        if self.updates is None:
            return fn(*args, **kwargs)
        return self.updates.call(fn, *args, **kwargs)
