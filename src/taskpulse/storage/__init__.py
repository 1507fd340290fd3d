"""
Byte-store backends.

- memory_store.py: MemoryByteStore (dict, tests and throwaway runs)
- sqlite_store.py: SqliteByteStore (one kv table, default for the CLI)
"""

from .memory_store import MemoryByteStore
from .sqlite_store import SqliteByteStore

__all__ = ["MemoryByteStore", "SqliteByteStore"]
