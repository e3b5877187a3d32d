"""
In-memory schedule store.

A ScheduleStore owns the four record collections (professors, classrooms,
courses, lessons) and is the single source of truth for one schedule.
Nothing here is module-level, so tests and callers can build as many
independent schedules as they like.

Design rationale:
- reference data (professors/classrooms/courses) is append-only
- lessons are only added/moved/removed through classplan.mutations, which
  runs the conflict check first; the store itself never checks anything
- stored lessons are frozen copies, so callers holding one cannot change the
  schedule behind the conflict check, and one Lesson can seed several stores
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from classplan.model import Classroom, Course, Lesson, Professor


@dataclass
class ScheduleStore:
    _professors: list[Professor] = field(default_factory=list)
    _classrooms: list[Classroom] = field(default_factory=list)
    _courses: list[Course] = field(default_factory=list)
    _lessons: list[Lesson] = field(default_factory=list)
    _next_lesson_id: int = 1

    # -- reference data -----------------------------------------------------

    def add_professor(self, professor: Professor) -> None:
        self._professors.append(professor)

    def add_classroom(self, classroom: Classroom) -> None:
        self._classrooms.append(classroom)

    def add_course(self, course: Course) -> None:
        self._courses.append(course)

    @property
    def professors(self) -> list[Professor]:
        return list(self._professors)

    @property
    def classrooms(self) -> list[Classroom]:
        return list(self._classrooms)

    @property
    def courses(self) -> list[Course]:
        return list(self._courses)

    @property
    def lessons(self) -> list[Lesson]:
        """Stored lessons in insertion order (a copy of the list, not of the lessons)."""
        return list(self._lessons)

    def get_professor(self, professor_id: int) -> Optional[Professor]:
        return next((p for p in self._professors if p.id == professor_id), None)

    def get_classroom(self, number: str) -> Optional[Classroom]:
        return next((c for c in self._classrooms if c.number == number), None)

    def get_course(self, course_id: int) -> Optional[Course]:
        return next((c for c in self._courses if c.id == course_id), None)

    # -- lessons --------------------------------------------------------------

    def get_lesson(self, lesson_id: int) -> Optional[Lesson]:
        return next((l for l in self._lessons if l.lesson_id == lesson_id), None)

    def lessons_for_course(self, course_id: int) -> list[Lesson]:
        return [l for l in self._lessons if l.course_id == course_id]

    def append_lesson(self, lesson: Lesson) -> Lesson:
        """
        Store a copy of lesson with the next surrogate id and return the copy.
        Ids are never reused, even after cancellations.
        """
        stored = replace(lesson, lesson_id=self._next_lesson_id)
        self._next_lesson_id += 1
        self._lessons.append(stored)
        return stored

    def replace_lesson(self, old: Lesson, new: Lesson) -> None:
        """
        Swap a stored lesson for an updated record, keeping its position.
        Raises ValueError if old is not stored here.
        """
        for i, l in enumerate(self._lessons):
            if l is old:
                self._lessons[i] = new
                return
        raise ValueError(f"Lesson {old.describe()} is not in this store")

    def remove_lessons(self, predicate: Callable[[Lesson], bool]) -> list[Lesson]:
        """
        Remove every lesson matching predicate and return the removed ones.
        """
        removed = [l for l in self._lessons if predicate(l)]
        if removed:
            self._lessons = [l for l in self._lessons if not predicate(l)]
        return removed
