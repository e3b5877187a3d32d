"""
Read-only views over a ScheduleStore.
"""

from __future__ import annotations

from collections import Counter
from typing import Optional

from classplan.model import GRID_SIZE, CourseType, DayOfWeek, Lesson, Slot, TimeSlot
from classplan.store import ScheduleStore


def find_available_classrooms(store: ScheduleStore, time_slot: TimeSlot, day_of_week: DayOfWeek) -> list[str]:
    """
    Classroom numbers that are free at (day, slot), in registration order.
    """
    occupied = {l.classroom_number for l in store.lessons if l.slot == (day_of_week, time_slot)}
    return [c.number for c in store.classrooms if c.number not in occupied]


def get_professor_schedule(store: ScheduleStore, professor_id: int) -> list[Lesson]:
    return [l for l in store.lessons if l.professor_id == professor_id]


def get_classroom_utilization(store: ScheduleStore, classroom_number: str) -> float:
    """
    Percentage of the 5x5 weekly grid in which the classroom is booked.
    The denominator is always the full grid, independent of how many
    rooms or lessons exist. Unknown/unused rooms give 0.0.
    """
    occupied = {l.slot for l in store.lessons if l.classroom_number == classroom_number}
    return len(occupied) / GRID_SIZE * 100


def get_most_popular_course_type(store: ScheduleStore) -> Optional[CourseType]:
    """
    Course type with the most scheduled lessons.

    Lessons whose course is unknown are skipped. Ties go to the type declared
    first in CourseType. Returns None when nothing could be counted.
    """
    type_by_course = {}
    for course in store.courses:
        # first registration wins for duplicate ids, like store.get_course
        type_by_course.setdefault(course.id, course.type)

    counts: Counter = Counter()
    for lesson in store.lessons:
        course_type = type_by_course.get(lesson.course_id)
        if course_type is not None:
            counts[course_type] += 1

    best: Optional[CourseType] = None
    for course_type in CourseType:
        if counts[course_type] > 0 and (best is None or counts[course_type] > counts[best]):
            best = course_type
    return best


def get_weekly_grid(
    store: ScheduleStore,
    classroom_number: Optional[str] = None,
    professor_id: Optional[int] = None,
) -> dict[Slot, Lesson]:
    """
    Map (day, slot) -> lesson for one classroom or one professor.
    Exactly one of classroom_number / professor_id must be given.
    """
    if (classroom_number is None) == (professor_id is None):
        raise ValueError("Pass exactly one of classroom_number or professor_id")

    grid: dict[Slot, Lesson] = {}
    for lesson in store.lessons:
        if classroom_number is not None and lesson.classroom_number != classroom_number:
            continue
        if professor_id is not None and lesson.professor_id != professor_id:
            continue
        # invariants guarantee at most one lesson per slot here
        grid.setdefault(lesson.slot, lesson)
    return grid
