# tests/test_task_models.py

from __future__ import annotations

import uuid

import pytest

from taskpulse.core.identity import display_id, is_valid_id
from taskpulse.tasks.task_models import Task, default_tasks, priority_label


def test_equality_depends_only_on_id() -> None:
    shared = uuid.uuid4()
    a = Task(id=shared, title="A", priority=1)
    b = Task(id=shared, title="B", priority=5, completed=True)
    c = Task(title="A", priority=1)

    assert a == b
    assert a != c
    assert hash(a) == hash(b)
    assert len({a, b, c}) == 2
    assert b in [c, a]


def test_ordering_uses_priority_only() -> None:
    urgent = Task(title="z", priority=1)
    later = Task(title="a", priority=3)

    assert urgent < later
    assert later > urgent
    assert urgent <= Task(title="other", priority=1)
    assert later >= Task(title="other", priority=3)


def test_sorting_is_stable_for_equal_priorities() -> None:
    tasks = [
        Task(title="first-2", priority=2),
        Task(title="first-1", priority=1),
        Task(title="second-2", priority=2),
        Task(title="second-1", priority=1),
    ]
    assert [t.title for t in sorted(tasks)] == ["first-1", "second-1", "first-2", "second-2"]


def test_description_label() -> None:
    assert str(Task(title="Study", priority=1)) == "[ ] [High] Study"
    assert Task(title="Ship", priority=3, completed=True).description == "[x] [Low] Ship"
    assert Task(title="Later", priority=7).priority_text == "No priority"
    assert priority_label(2) == "Medium"


def test_record_round_trip_keeps_fields() -> None:
    task = Task(title="Persist me", priority=2, completed=True)
    record = task.to_dict()

    assert set(record) == {"id", "title", "priority", "completed"}
    restored = Task.from_dict(record)
    assert restored == task
    assert restored.to_dict() == record


@pytest.mark.parametrize(
    "record",
    [
        {"title": "no id", "priority": 1, "completed": False},
        {"id": "not-a-uuid", "title": "x", "priority": 1, "completed": False},
        {"id": str(uuid.uuid4()), "title": "x", "priority": "1", "completed": False},
        {"id": str(uuid.uuid4()), "title": "x", "priority": True, "completed": False},
        {"id": str(uuid.uuid4()), "title": 3, "priority": 1, "completed": False},
        ["not", "a", "dict"],
    ],
)
def test_from_dict_rejects_malformed_records(record) -> None:
    with pytest.raises((KeyError, TypeError, ValueError)):
        Task.from_dict(record)


def test_default_tasks_are_fresh_each_call() -> None:
    first = default_tasks()
    second = default_tasks()

    assert len(first) == 5
    assert [t.title for t in first] == [t.title for t in second]
    assert not set(first) & set(second)
    assert [t.completed for t in first] == [False, False, True, False, False]


def test_display_id_dispatches_on_id_type() -> None:
    task = Task(title="x", priority=1)
    assert display_id(task) == f"ID: {str(task.id)[:8]}..."
    assert task.display_id() == display_id(task)
    assert task.is_valid_id()


class _Person:
    def __init__(self, id) -> None:
        self.id = id


def test_display_id_for_string_ids() -> None:
    assert display_id(_Person("PER001")) == "ID: PER001"
    assert is_valid_id(_Person("PER001"))
    assert not is_valid_id(_Person(""))


def test_display_id_rejects_unknown_id_types() -> None:
    with pytest.raises(TypeError):
        display_id(_Person(42))
    with pytest.raises(TypeError):
        is_valid_id(_Person(4.2))
