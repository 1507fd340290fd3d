# src/taskpulse/core/identity.py

"""
Helpers for anything with an ``id`` attribute.

The formatting depends on the concrete identifier type, so both helpers
dispatch on ``type(item.id)``:
- UUID ids are shortened to their first 8 hex digits
- string ids are shown as-is
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Protocol
from uuid import UUID


class Identifiable(Protocol):
    @property
    def id(self) -> Any: ...


@singledispatch
def _format_id(raw: object) -> str:
    raise TypeError(f"Unsupported identifier type: {type(raw).__name__}")


@_format_id.register
def _(raw: UUID) -> str:
    return f"ID: {str(raw)[:8]}..."


@_format_id.register
def _(raw: str) -> str:
    return f"ID: {raw}"


@singledispatch
def _check_id(raw: object) -> bool:
    raise TypeError(f"Unsupported identifier type: {type(raw).__name__}")


@_check_id.register
def _(raw: UUID) -> bool:
    return str(raw) != ""


@_check_id.register
def _(raw: str) -> bool:
    return raw != ""


def display_id(item: Identifiable) -> str:
    """Short human-readable form of item.id."""
    return _format_id(item.id)


def is_valid_id(item: Identifiable) -> bool:
    """True when item.id is non-empty for its type."""
    return _check_id(item.id)
