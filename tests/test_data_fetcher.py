# tests/test_data_fetcher.py

from __future__ import annotations

import asyncio
import gc
import random

import pytest

from taskpulse.tasks.data_fetcher import REMOTE_ITEMS, DataFetcher, roll_outcome
from taskpulse.tasks.task_models import FetchFailure, FetchSuccess

from .fakes import RecordingObserver, ScriptedRandom

DELAY = 0.01


@pytest.mark.asyncio
async def test_success_is_delivered_after_delay() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([3]))
    observer = RecordingObserver()
    fetcher.register_observer(observer)

    assert fetcher.fetch() is True
    assert fetcher.is_fetching
    assert observer.total_calls == 0

    await asyncio.sleep(DELAY * 5)

    assert observer.received == [list(REMOTE_ITEMS)]
    assert observer.errors == []
    assert observer.fetchers == [fetcher]
    assert not fetcher.is_fetching


@pytest.mark.asyncio
async def test_failure_is_delivered_with_error() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([9]))
    observer = RecordingObserver()
    fetcher.observer = observer

    fetcher.fetch()
    await asyncio.sleep(DELAY * 5)

    assert observer.received == []
    assert len(observer.errors) == 1
    err = observer.errors[0]
    assert str(err) == "Simulated connection error"
    assert err.code == 500
    assert err.domain == "DataFetcher"


@pytest.mark.asyncio
async def test_fetch_while_in_flight_is_ignored() -> None:
    rng = ScriptedRandom([1, 1])
    fetcher = DataFetcher(delay_seconds=DELAY, rng=rng)
    observer = RecordingObserver()
    fetcher.register_observer(observer)

    assert fetcher.fetch() is True
    assert fetcher.fetch() is False
    assert fetcher.fetch() is False

    await asyncio.sleep(DELAY * 5)

    assert observer.total_calls == 1
    assert len(rng.calls) == 1


@pytest.mark.asyncio
async def test_in_flight_flag_is_clear_when_observer_runs() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([1]))
    seen: list[bool] = []

    class FlagReader(RecordingObserver):
        def did_receive_data(self, f, items) -> None:
            seen.append(f.is_fetching)
            super().did_receive_data(f, items)

    observer = FlagReader()
    fetcher.register_observer(observer)
    fetcher.fetch()
    await asyncio.sleep(DELAY * 5)

    assert seen == [False]


@pytest.mark.asyncio
async def test_outcome_without_observer_is_dropped() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([1]))
    fetcher.fetch()
    await asyncio.sleep(DELAY * 5)
    assert not fetcher.is_fetching


@pytest.mark.asyncio
async def test_fetcher_does_not_keep_observer_alive() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([1]))
    observer = RecordingObserver()
    fetcher.register_observer(observer)
    fetcher.fetch()

    del observer
    gc.collect()

    assert fetcher.observer is None
    await asyncio.sleep(DELAY * 5)
    assert not fetcher.is_fetching


@pytest.mark.asyncio
async def test_replacing_observer_detaches_previous() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([1]))
    old, new = RecordingObserver(), RecordingObserver()
    fetcher.register_observer(old)
    fetcher.register_observer(new)

    fetcher.fetch()
    await asyncio.sleep(DELAY * 5)

    assert old.total_calls == 0
    assert new.total_calls == 1


@pytest.mark.asyncio
async def test_cancel_clears_flag_and_skips_delivery() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY, rng=ScriptedRandom([1, 1]))
    observer = RecordingObserver()
    fetcher.register_observer(observer)

    fetcher.fetch()
    fetcher.cancel()
    assert not fetcher.is_fetching

    await asyncio.sleep(DELAY * 5)
    assert observer.total_calls == 0

    # A new fetch after cancel works normally.
    assert fetcher.fetch() is True
    await asyncio.sleep(DELAY * 5)
    assert observer.total_calls == 1


def test_fetch_needs_a_loop() -> None:
    fetcher = DataFetcher(delay_seconds=DELAY)
    with pytest.raises(RuntimeError):
        fetcher.fetch()
    assert not fetcher.is_fetching


def test_roll_boundaries() -> None:
    assert isinstance(roll_outcome(ScriptedRandom([8])), FetchSuccess)
    assert isinstance(roll_outcome(ScriptedRandom([9])), FetchFailure)
    assert isinstance(roll_outcome(ScriptedRandom([1])), FetchSuccess)
    assert isinstance(roll_outcome(ScriptedRandom([10])), FetchFailure)


def test_roll_uses_one_draw_in_one_to_ten() -> None:
    rng = ScriptedRandom([5])
    roll_outcome(rng)
    assert rng.calls == [(1, 10)]


def test_success_rate_is_about_eighty_percent() -> None:
    rng = random.Random(20251021)
    trials = 1000
    successes = sum(isinstance(roll_outcome(rng), FetchSuccess) for _ in range(trials))

    # Binomial(1000, 0.8): sd ~ 12.6, so +-50 is ~4 sd.
    assert 750 <= successes <= 850
    assert 150 <= trials - successes <= 250
