# src/taskpulse/core/update_loop.py

from __future__ import annotations

"""
The single logical update thread.

All state mutation (task collection, fetch outcomes, lifecycle handling) runs
on one asyncio event loop living in a background thread. Other threads
(console REPL, signal handlers) hand work to it with call().
Timed continuations (fetch delay, stopwatch ticks) are scheduled with
loop.call_later() on the same loop, so they re-enter the same queue.
"""

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UpdateLoop:
    def __init__(self, *, name: str = "taskpulse-updates") -> None:
        self._name = name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._ready = threading.Event()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            raise RuntimeError("UpdateLoop is not started")
        return self._loop

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def in_loop_thread(self) -> bool:
        return self._thread is not None and threading.current_thread() is self._thread

    def start(self) -> None:
        if self.is_running:
            return

        def runner() -> None:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            self._loop = loop
            self._ready.set()
            try:
                loop.run_forever()
            finally:
                with contextlib.suppress(Exception):
                    loop.run_until_complete(loop.shutdown_asyncgens())
                loop.close()
                logger.debug("Update loop closed.")

        self._ready.clear()
        self._thread = threading.Thread(target=runner, name=self._name, daemon=True)
        self._thread.start()

        if not self._ready.wait(timeout=5.0):
            raise RuntimeError("Update loop thread did not start")
        logger.info("Update loop started (thread=%s).", self._name)

    def call(self, fn: Callable[..., T], *args: Any, timeout: float | None = None, **kwargs: Any) -> T:
        """
        Run fn on the loop thread and wait for its result.

        Exceptions raised by fn are re-raised here. Called from the loop
        thread itself, fn runs inline (waiting would deadlock).
        """
        if self.in_loop_thread():
            return fn(*args, **kwargs)

        fut: concurrent.futures.Future[T] = concurrent.futures.Future()

        def run() -> None:
            if not fut.set_running_or_notify_cancel():
                return
            try:
                fut.set_result(fn(*args, **kwargs))
            except BaseException as e:
                fut.set_exception(e)

        self.loop.call_soon_threadsafe(run)
        return fut.result(timeout=timeout)

    def stop(self) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(loop.stop)
        except RuntimeError:
            logger.debug("Update loop already closed.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)
