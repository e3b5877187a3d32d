"""
Schedule mutations.

Every operation that could double-book a professor or a classroom runs
validate_lesson first and only touches the store when no conflict is found.
Conflicts and "not found" are returned to the caller as values; nothing here
raises for a rejected booking.

Two ways to address a stored lesson:
- by course id (reassign_classroom / cancel_lesson), kept for callers that
  think of "the lesson of course X"; reassign picks the first lesson of the
  course, cancel removes all of them
- by surrogate lesson id (reassign_lesson_classroom / cancel_lesson_by_id),
  which is unambiguous when a course has several weekly lessons
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from classplan.conflicts import ScheduleConflict, validate_lesson
from classplan.model import Classroom, Course, Lesson, Professor
from classplan.store import ScheduleStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """
    Outcome of a booking or reassignment.

    ok=True: lesson is the record now in the store.
    ok=False with lesson=None means the lesson was not found;
    ok=False with a conflict means the booking/move was rejected.
    Truthy iff ok, so it can be used like the plain boolean.
    """

    ok: bool
    lesson: Optional[Lesson] = None
    conflict: Optional[ScheduleConflict] = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def not_found(self) -> bool:
        return self.lesson is None


def add_professor(store: ScheduleStore, professor: Professor) -> None:
    store.add_professor(professor)


def add_classroom(store: ScheduleStore, classroom: Classroom) -> None:
    store.add_classroom(classroom)


def add_course(store: ScheduleStore, course: Course) -> None:
    store.add_course(course)


def book_lesson(store: ScheduleStore, lesson: Lesson) -> MutationResult:
    """
    Book a lesson. On success result.lesson is the stored copy (with its
    lesson_id); on conflict the store is unchanged and result.lesson is the
    rejected candidate.
    """
    conflict = validate_lesson(store, lesson)
    if conflict is not None:
        logger.info("Schedule conflict for %s: %s", lesson.describe(), conflict)
        return MutationResult(ok=False, lesson=lesson, conflict=conflict)

    stored = store.append_lesson(lesson)
    logger.debug("Booked %s", stored.describe())
    return MutationResult(ok=True, lesson=stored)


def add_lesson(store: ScheduleStore, lesson: Lesson) -> Optional[ScheduleConflict]:
    """
    Book a lesson. Returns None on success, or the conflict that blocked it.
    Use book_lesson to get the stored record and its lesson_id.
    """
    return book_lesson(store, lesson).conflict


def _move(store: ScheduleStore, lesson: Lesson, new_classroom_number: str) -> MutationResult:
    candidate = replace(lesson, classroom_number=new_classroom_number)
    conflict = validate_lesson(store, candidate, exclude=lesson)
    if conflict is not None:
        logger.info("Cannot move %s to %s: %s", lesson.describe(), new_classroom_number, conflict)
        return MutationResult(ok=False, lesson=lesson, conflict=conflict)

    store.replace_lesson(lesson, candidate)
    logger.debug("Moved lesson #%s from %s to %s", lesson.lesson_id, lesson.classroom_number, new_classroom_number)
    return MutationResult(ok=True, lesson=candidate)


def reassign_classroom(store: ScheduleStore, course_id: int, new_classroom_number: str) -> MutationResult:
    """
    Move the first lesson of course_id to another classroom (same day and slot).
    """
    matches = store.lessons_for_course(course_id)
    if not matches:
        logger.info("No lesson scheduled for course %s", course_id)
        return MutationResult(ok=False)
    if len(matches) > 1:
        logger.debug("Course %s has %d lessons, moving the first one", course_id, len(matches))
    return _move(store, matches[0], new_classroom_number)


def reassign_lesson_classroom(store: ScheduleStore, lesson_id: int, new_classroom_number: str) -> MutationResult:
    lesson = store.get_lesson(lesson_id)
    if lesson is None:
        logger.info("No lesson with id %s", lesson_id)
        return MutationResult(ok=False)
    return _move(store, lesson, new_classroom_number)


def cancel_lesson(store: ScheduleStore, course_id: int) -> list[Lesson]:
    """
    Remove ALL lessons of course_id. Returns the removed lessons;
    an empty list means nothing was scheduled (repeat calls are no-ops).
    """
    removed = store.remove_lessons(lambda l: l.course_id == course_id)
    logger.debug("Cancelled %d lesson(s) of course %s", len(removed), course_id)
    return removed


def cancel_lesson_by_id(store: ScheduleStore, lesson_id: int) -> Optional[Lesson]:
    removed = store.remove_lessons(lambda l: l.lesson_id == lesson_id)
    logger.debug("Cancelled %d lesson(s) with id %s", len(removed), lesson_id)
    return removed[0] if removed else None
