"""
taskpulse: a small task list with a delegated remote fetch and lifecycle persistence.

Subpackages:
- tasks/: Task entity, DataFetcher (notifier) and TaskStore (observer + persistence)
- core/: ports, lifecycle phases, identifier helpers, update loop, app state
- storage/: byte-store backends (memory, SQLite)
- cli/ and connectors/: console front-end
"""

__version__ = "0.1.0"
