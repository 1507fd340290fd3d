# src/taskpulse/errors.py

from __future__ import annotations


class TaskPulseError(Exception):
    """Base class for project errors."""


class PersistenceError(TaskPulseError):
    """A byte-store backend failed to read or write."""


class FetchError(TaskPulseError):
    """
    Failure outcome of a simulated remote fetch.

    Mirrors a (domain, code, message) error triple so the observer can show
    a human-readable message and still branch on the code if it wants to.
    """

    def __init__(self, message: str, *, domain: str = "DataFetcher", code: int = 500) -> None:
        super().__init__(message)
        self.domain = domain
        self.code = code

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""

    def __repr__(self) -> str:
        return f"FetchError(domain={self.domain!r}, code={self.code}, message={str(self)!r})"
