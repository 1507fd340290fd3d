# src/taskpulse/cli/main.py

"""
CLI entrypoint.

Initializes logging, starts the update loop, builds AppState on it, then runs
the console REPL in the main thread (optional). Leaving the app, by /exit,
EOF, Ctrl+C or SIGTERM, moves the lifecycle to BACKGROUND, which saves tasks
and stopwatch state before the process ends.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.lifecycle import LifecyclePhase
from ..core.state import AppState
from ..core.update_loop import UpdateLoop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.run(state.lifecycle.transition, LifecyclePhase.BACKGROUND)
    except Exception:
        logger.exception("Failed to move to background on shutdown.")

    try:
        state.run(state.stopwatch.close)
    except Exception:
        logger.debug("Stopwatch close failed.", exc_info=True)

    try:
        state.byte_store.close()
    except Exception:
        logger.debug("Byte-store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    updates = UpdateLoop()
    updates.start()

    # Built on the update loop: the store loads its tasks in the constructor.
    state = updates.call(create_initial_state, settings=settings, updates=updates)

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()
        if settings.console_enabled:
            # Unblocks input() in the console loop.
            raise KeyboardInterrupt

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
        if not settings.console_enabled:
            signal.signal(signal.SIGINT, _handle_signal)
    except (ValueError, OSError):
        # Not in the main thread, or the platform lacks the signal.
        logger.debug("Signal handlers not installed.", exc_info=True)

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Press Ctrl+C to stop.")
            stop_main.wait()
    finally:
        _shutdown(state)
        updates.stop()
        updates.join(timeout=5.0)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
