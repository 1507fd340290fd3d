# src/taskpulse/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from ..core.identity import display_id, is_valid_id
from ..errors import FetchError

# 1 is the most urgent; ascending sort puts urgent work first.
PRIORITY_HIGH = 1
PRIORITY_MEDIUM = 2
PRIORITY_LOW = 3

_PRIORITY_LABELS: dict[int, str] = {
    PRIORITY_HIGH: "High",
    PRIORITY_MEDIUM: "Medium",
    PRIORITY_LOW: "Low",
}


def priority_label(priority: int) -> str:
    return _PRIORITY_LABELS.get(priority, "No priority")


@dataclass(eq=False, slots=True)
class Task:
    """
    A single to-do item.

    Identity and order are deliberately different things:
    - ==, hash: id only (two snapshots of the same task are equal)
    - <, <=, >, >=: priority only (sorted() is stable for equal priorities)
    """

    title: str
    priority: int
    completed: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: Task) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.priority < other.priority

    def __le__(self, other: Task) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.priority <= other.priority

    def __gt__(self, other: Task) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.priority > other.priority

    def __ge__(self, other: Task) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.priority >= other.priority

    @property
    def priority_text(self) -> str:
        return priority_label(self.priority)

    @property
    def description(self) -> str:
        mark = "x" if self.completed else " "
        return f"[{mark}] [{self.priority_text}] {self.title}"

    def __str__(self) -> str:
        return self.description

    def display_id(self) -> str:
        return display_id(self)

    def is_valid_id(self) -> bool:
        return is_valid_id(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "title": self.title,
            "priority": self.priority,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from a stored record.

        Raises KeyError/TypeError/ValueError on a malformed record; the store
        treats any of those as "unreadable data".
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")

        title = raw["title"]
        priority = raw["priority"]
        completed = raw["completed"]

        if not isinstance(title, str):
            raise TypeError("title must be a string")
        # bool is an int subclass; a stored true/false is not a priority.
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise TypeError("priority must be an integer")
        if not isinstance(completed, bool):
            raise TypeError("completed must be a boolean")

        return cls(
            id=uuid.UUID(str(raw["id"])),
            title=title,
            priority=priority,
            completed=completed,
        )


def default_tasks() -> list[Task]:
    """Seed list used when nothing (readable) has been saved yet."""
    return [
        Task(title="Learn protocols", priority=PRIORITY_HIGH),
        Task(title="Implement delegation", priority=PRIORITY_HIGH),
        Task(title="Use equality and ordering", priority=PRIORITY_MEDIUM, completed=True),
        Task(title="Write protocol extensions", priority=PRIORITY_MEDIUM),
        Task(title="Handle lifecycle phases", priority=PRIORITY_LOW),
    ]


@dataclass(slots=True, frozen=True)
class FetchSuccess:
    items: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class FetchFailure:
    error: FetchError


FetchOutcome = FetchSuccess | FetchFailure
