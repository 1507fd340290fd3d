# src/taskpulse/tasks/roster.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Geographic point; two coordinates are equal when both fields match."""

    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"({self.latitude:.4f}, {self.longitude:.4f})"


@dataclass(eq=False, slots=True)
class Student:
    """
    A graded student.

    - ==, hash: student_id only
    - <, <=, >, >=: grade, inverted, so sorted() puts the best grade first
    """

    name: str
    grade: float
    student_id: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.student_id == other.student_id

    def __hash__(self) -> int:
        return hash(self.student_id)

    def __lt__(self, other: Student) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.grade > other.grade

    def __le__(self, other: Student) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.grade >= other.grade

    def __gt__(self, other: Student) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.grade < other.grade

    def __ge__(self, other: Student) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.grade <= other.grade

    def __str__(self) -> str:
        return f"{self.name} ({self.student_id}): {self.grade:.1f}"


SAMPLE_STUDENTS: tuple[Student, ...] = (
    Student("Ana García", 8.5, "S001"),
    Student("Carlos Ruiz", 9.2, "S002"),
    Student("María López", 7.8, "S003"),
    Student("Juan Pérez", 9.5, "S004"),
    Student("Laura Martínez", 8.9, "S005"),
)

KNOWN_PLACES: tuple[Coordinate, ...] = (
    Coordinate(40.7128, -74.0060),
    Coordinate(34.0522, -118.2437),
    Coordinate(41.8781, -87.6298),
)


def ranked(students: tuple[Student, ...] | list[Student] = SAMPLE_STUDENTS) -> list[Student]:
    return sorted(students)
