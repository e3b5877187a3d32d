"""
Conflict detection.

A candidate lesson conflicts with a stored lesson if they share a slot
(same day AND same time slot) and either
    - the same professor (a professor cannot teach two places at once), or
    - the same classroom (a room cannot host two lessons at once).

The professor check always runs first: a candidate that collides on both
dimensions is reported as a professor conflict only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from classplan.model import Lesson
from classplan.store import ScheduleStore


class ConflictType(str, Enum):
    PROFESSOR = "ProfessorConflict"
    CLASSROOM = "ClassroomConflict"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScheduleConflict:
    """
    Returned (never raised) when a booking would break the no-double-booking rule.
    lesson is the existing booking the candidate collides with.
    """

    type: ConflictType
    lesson: Lesson

    def __str__(self) -> str:
        return f"{self.type}: collides with {self.lesson.describe()}"


def _same_professor_slot(a: Lesson, b: Lesson) -> bool:
    return a.professor_id == b.professor_id and a.slot == b.slot


def _same_classroom_slot(a: Lesson, b: Lesson) -> bool:
    return a.classroom_number == b.classroom_number and a.slot == b.slot


def _classify(candidate: Lesson, existing: Lesson) -> Optional[ConflictType]:
    if _same_professor_slot(candidate, existing):
        return ConflictType.PROFESSOR
    if _same_classroom_slot(candidate, existing):
        return ConflictType.CLASSROOM
    return None


def validate_lesson(
    store: ScheduleStore,
    candidate: Lesson,
    exclude: Optional[Lesson] = None,
) -> Optional[ScheduleConflict]:
    """
    Check candidate against every stored lesson.

    exclude is a stored lesson to ignore (compared by identity); reassignment
    passes the lesson being moved so it never collides with its own booking.

    Returns the first professor conflict, else the first classroom conflict,
    else None. Read-only.
    """
    others = [l for l in store.lessons if l is not exclude]

    # First match per dimension, professor before classroom
    for existing in others:
        if _same_professor_slot(candidate, existing):
            return ScheduleConflict(ConflictType.PROFESSOR, existing)

    for existing in others:
        if _same_classroom_slot(candidate, existing):
            return ScheduleConflict(ConflictType.CLASSROOM, existing)

    return None


def find_conflicts(lessons: Iterable[Lesson]) -> list[tuple[Lesson, Lesson, ConflictType]]:
    """
    Find colliding lesson pairs (A, B) in an arbitrary list, each pair once (i<j).
    Used to audit lesson lists that did not go through validate_lesson.
    """
    items = list(lessons)
    conflicts: list[tuple[Lesson, Lesson, ConflictType]] = []

    # O(n^2) is fine, the grid has only 25 slots per room/professor
    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            kind = _classify(items[j], items[i])
            if kind is not None:
                conflicts.append((items[i], items[j], kind))

    return conflicts
