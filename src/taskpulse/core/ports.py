# src/taskpulse/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends and observers swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..errors import FetchError
    from .lifecycle import LifecyclePhase


class ByteStore(Protocol):
    """
    Opaque key/value persistence: bytes in, bytes out.

    get() returns None for a missing key. Backends raise PersistenceError on
    I/O failure; callers decide whether that is fatal.
    """

    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...
    def close(self) -> None: ...


class FetchObserver(Protocol):
    """
    Receiver of DataFetcher outcomes.

    Exactly one of the two callbacks is invoked per fetch() call, on the
    update loop thread. The fetcher passes itself so one observer can tell
    several fetchers apart.
    """

    def did_receive_data(self, fetcher: Any, items: Sequence[str]) -> None: ...
    def did_fail_with_error(self, fetcher: Any, error: FetchError) -> None: ...


class LifecycleParticipant(Protocol):
    """Anything that wants to react to active/inactive/background transitions."""

    def on_lifecycle_change(self, phase: LifecyclePhase) -> None: ...
