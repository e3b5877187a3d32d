"""
Central data model definitions used across the project.

This module defines the canonical structure of the scheduling records so that:
- the store, the conflict checks and the queries share the same field names
- the fixed weekly grid (5 days x 5 time slots) is declared in exactly one place

Enum members keep their declaration order; several operations rely on it
(grid rendering, tie-breaking for the most popular course type).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class _ParseableEnum(str, Enum):
    @classmethod
    def parse(cls, text: str):
        """
        Match text against member values and names (case-insensitive).
        Raises ValueError for unknown text.
        """
        needle = str(text).strip().lower()
        for member in cls:
            if needle in (member.value.lower(), member.name.lower()):
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown {cls.__name__}: {text!r} (expected one of: {choices})")

    def __str__(self) -> str:
        return self.value


class DayOfWeek(_ParseableEnum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


class TimeSlot(_ParseableEnum):
    FIRST = "8:30-10:00"
    SECOND = "10:15-11:45"
    THIRD = "12:15-13:45"
    FOURTH = "14:00-15:30"
    FIFTH = "15:45-17:15"

    @classmethod
    def parse(cls, text: str) -> "TimeSlot":
        # "08:30-10:00" is the same slot as "8:30-10:00"
        cleaned = str(text).strip().replace(" ", "")
        if cleaned.startswith("0") and len(cleaned) > 1 and cleaned[1].isdigit():
            cleaned = cleaned[1:]
        return super().parse(cleaned)


class CourseType(_ParseableEnum):
    LECTURE = "Lecture"
    SEMINAR = "Seminar"
    LAB = "Lab"
    PRACTICE = "Practice"


# Size of the weekly grid, used as the utilization denominator.
GRID_SIZE = len(DayOfWeek) * len(TimeSlot)

Slot = Tuple[DayOfWeek, TimeSlot]


@dataclass
class Professor:
    id: int
    name: str
    department: str


@dataclass
class Classroom:
    number: str
    capacity: int
    has_projector: bool


@dataclass
class Course:
    id: int
    name: str
    type: CourseType


@dataclass(frozen=True, eq=False)
class Lesson:
    """
    One weekly booking: a course taught by a professor in a classroom at a slot.

    Lessons are immutable. The store keeps its own copy carrying the
    surrogate lesson_id; the object a caller passes in keeps lesson_id=None.
    Two Lesson objects are only equal if they are the same object, so an
    identical-looking duplicate is never mistaken for a stored record.
    """

    course_id: int
    professor_id: int
    classroom_number: str
    day_of_week: DayOfWeek
    time_slot: TimeSlot
    lesson_id: Optional[int] = None

    @property
    def slot(self) -> Slot:
        return (self.day_of_week, self.time_slot)

    def describe(self) -> str:
        ident = f"#{self.lesson_id} " if self.lesson_id is not None else ""
        return (
            f"{ident}course {self.course_id} / professor {self.professor_id} "
            f"in {self.classroom_number} on {self.day_of_week} {self.time_slot}"
        )
