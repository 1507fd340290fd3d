# src/taskpulse/tasks/stopwatch.py

from __future__ import annotations

"""
Seconds counter that survives going to the background.

Ticks are loop.call_later() continuations on the update loop. State is saved
on INACTIVE/BACKGROUND and restored at startup, but a restored stopwatch is
never restarted automatically.
"""

import asyncio
import json
import logging

from ..core.lifecycle import LifecyclePhase
from ..core.ports import ByteStore
from ..errors import PersistenceError

logger = logging.getLogger(__name__)

STATE_KEY = "savedTimerState"


class Stopwatch:
    def __init__(
        self,
        byte_store: ByteStore,
        *,
        tick_seconds: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
        load_on_init: bool = True,
    ) -> None:
        self._byte_store = byte_store
        self._tick = max(0.001, float(tick_seconds))
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

        self.seconds = 0
        self.is_running = False

        if load_on_init:
            self.load_state()
        logger.info("Stopwatch ready at %d seconds", self.seconds)

    @property
    def formatted_time(self) -> str:
        minutes, secs = divmod(self.seconds, 60)
        return f"{minutes:02d}:{secs:02d}"

    def start(self) -> None:
        if self.is_running:
            return
        self.is_running = True
        self._schedule()
        logger.info("Stopwatch started")

    def pause(self) -> None:
        if not self.is_running:
            return
        self.is_running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.info("Stopwatch paused at %d seconds", self.seconds)

    def reset(self) -> None:
        self.pause()
        self.seconds = 0
        logger.info("Stopwatch reset")

    def _schedule(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._tick, self._on_tick)

    def _on_tick(self) -> None:
        self._handle = None
        if not self.is_running:
            return
        self.seconds += 1
        logger.debug("tick %d", self.seconds)
        self._schedule()

    # ---- persistence ----

    def save_state(self) -> bool:
        """Write seconds and the running flag as one record, so they never disagree."""
        record = {"seconds": self.seconds, "is_running": self.is_running}
        try:
            self._byte_store.set(STATE_KEY, json.dumps(record).encode("utf-8"))
        except PersistenceError:
            logger.exception("Failed to save stopwatch state.")
            return False
        logger.info("Stopwatch state saved: %ds running=%s", self.seconds, self.is_running)
        return True

    def load_state(self) -> None:
        try:
            raw = self._byte_store.get(STATE_KEY)
        except PersistenceError:
            logger.exception("Failed to read stopwatch state; starting at zero.")
            return
        if raw is None:
            return

        try:
            record = json.loads(raw.decode("utf-8"))
            seconds = int(record["seconds"])
            was_running = bool(record.get("is_running", False))
        except (UnicodeDecodeError, ValueError, TypeError, KeyError, AttributeError):
            logger.warning("Unreadable stopwatch state %r; starting at zero.", raw)
            self.seconds = 0
            return

        self.seconds = max(0, seconds)
        if was_running and self.seconds > 0:
            logger.info("Stopwatch restored at %ds (was running; left paused)", self.seconds)

    # ---- lifecycle ----

    def on_lifecycle_change(self, phase: LifecyclePhase) -> None:
        match phase:
            case LifecyclePhase.ACTIVE:
                pass
            case LifecyclePhase.INACTIVE | LifecyclePhase.BACKGROUND:
                self.save_state()

    def close(self) -> None:
        self.pause()
