# src/taskpulse/storage/memory_store.py

from __future__ import annotations


class MemoryByteStore:
    """Dict-backed byte-store; nothing survives the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def close(self) -> None:
        return
