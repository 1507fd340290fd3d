# src/taskpulse/tasks/data_fetcher.py

from __future__ import annotations

"""
Simulated remote fetch with a delegated outcome.

A DataFetcher performs one deferred "network call" at a time and reports
exactly one outcome to its observer:
- did_receive_data(fetcher, items) on success
- did_fail_with_error(fetcher, error) on failure

The observer is held through a weak reference. The fetcher never keeps its
observer alive; if the observer is gone when the outcome is ready, the
outcome is dropped.
"""

import asyncio
import logging
import random
import weakref
from typing import Any

from ..core.ports import FetchObserver
from ..errors import FetchError
from .task_models import FetchFailure, FetchOutcome, FetchSuccess

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 2.0
DEFAULT_SUCCESS_THRESHOLD = 8

REMOTE_ITEMS: tuple[str, ...] = ("Remote item 1", "Remote item 2", "Remote item 3")


def simulated_error() -> FetchError:
    return FetchError("Simulated connection error", domain="DataFetcher", code=500)


def roll_outcome(rng: random.Random, *, success_threshold: int = DEFAULT_SUCCESS_THRESHOLD) -> FetchOutcome:
    """One uniform draw in [1, 10]; success when the roll is <= success_threshold."""
    roll = rng.randint(1, 10)
    if roll <= success_threshold:
        return FetchSuccess(items=REMOTE_ITEMS)
    return FetchFailure(error=simulated_error())


class DataFetcher:
    def __init__(
        self,
        *,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        success_threshold: int = DEFAULT_SUCCESS_THRESHOLD,
        rng: random.Random | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._delay = max(0.0, float(delay_seconds))
        self._threshold = int(success_threshold)
        self._rng = rng or random.Random()
        self._loop = loop
        self._observer_ref: weakref.ReferenceType[Any] | None = None
        self._handle: asyncio.TimerHandle | None = None
        self._fetching = False

    # ---- observer ----

    @property
    def observer(self) -> FetchObserver | None:
        if self._observer_ref is None:
            return None
        return self._observer_ref()

    @observer.setter
    def observer(self, obs: FetchObserver | None) -> None:
        self.register_observer(obs)

    def register_observer(self, obs: FetchObserver | None) -> None:
        """Replace the current observer (None detaches). Held weakly."""
        self._observer_ref = weakref.ref(obs) if obs is not None else None
        logger.debug("DataFetcher observer set to %r", obs)

    # ---- fetch lifecycle ----

    @property
    def is_fetching(self) -> bool:
        return self._fetching

    def fetch(self) -> bool:
        """
        Start a fetch. Returns False (and does nothing) if one is in flight.

        Must be called on the update loop thread; the outcome is delivered on
        that same loop after the configured delay.
        """
        if self._fetching:
            logger.debug("fetch() ignored: already in flight")
            return False

        loop = self._loop or asyncio.get_running_loop()
        self._fetching = True
        self._handle = loop.call_later(self._delay, self._complete)
        logger.info("DataFetcher: fetch started (delay=%.2fs)", self._delay)
        return True

    def cancel(self) -> None:
        """
        Cooperative cancel: clear the in-flight flag and drop the pending
        timer if it has not fired yet. A delivery already underway is not
        interrupted.
        """
        if not self._fetching:
            return
        self._fetching = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.info("DataFetcher: fetch cancelled")

    def _complete(self) -> None:
        self._handle = None
        if not self._fetching:
            # Cancelled after the timer was already dequeued.
            return

        outcome = roll_outcome(self._rng, success_threshold=self._threshold)
        self._fetching = False
        self._deliver(outcome)

    def _deliver(self, outcome: FetchOutcome) -> None:
        obs = self.observer
        if obs is None:
            logger.info("DataFetcher: no observer, outcome dropped (%s)", type(outcome).__name__)
            return

        match outcome:
            case FetchSuccess(items=items):
                logger.info("DataFetcher: received %d items, notifying observer", len(items))
                obs.did_receive_data(self, list(items))
            case FetchFailure(error=error):
                logger.info("DataFetcher: %s, notifying observer", error)
                obs.did_fail_with_error(self, error)
