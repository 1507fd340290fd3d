# src/taskpulse/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class _FetchResultPrinter:
    """
    Store listener that prints a fetch outcome once loading finishes.

    Runs on the update loop thread, so it only reads store state.

    A cancelled fetch also ends loading but carries no outcome: the error is
    still cleared and received_data is still the list seen when loading
    started, so nothing is printed.
    """

    def __init__(self, store: TaskStore) -> None:
        self._was_loading = store.is_loading
        self._data_at_start: list[str] | None = store.received_data if store.is_loading else None

    def __call__(self, store: TaskStore) -> None:
        was_loading, self._was_loading = self._was_loading, store.is_loading
        if store.is_loading:
            if not was_loading:
                self._data_at_start = store.received_data
            return
        if not was_loading:
            return

        data_at_start, self._data_at_start = self._data_at_start, None
        if store.error_message:
            _print_ts(f"[FETCH] Error: {store.error_message}")
        elif store.received_data and store.received_data is not data_at_start:
            _print_ts(f"[FETCH] Received: {', '.join(store.received_data)}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    unsubscribe = state.run(state.store.subscribe, _FetchResultPrinter(state.store))

    def emit(text: str) -> None:
        _print_ts(text)

    try:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                response = state.run(command_registry.handle, state, user_input, emit=emit)
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response is None:
                response = "Commands start with '/'. Use /help to list them."
            _print_ts(response)
    finally:
        state.run(unsubscribe)

    logger.info("Console connector finished.")
