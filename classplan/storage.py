"""
Seed-file loading.

A seed file describes one schedule as JSON:

    {
      "professors": [{"id": 1, "name": "...", "department": "..."}],
      "classrooms": [{"number": "101", "capacity": 30, "hasProjector": true}],
      "courses":    [{"id": 1, "name": "...", "type": "Lecture"}],
      "lessons":    [{"courseId": 1, "professorId": 1, "classroomNumber": "101",
                      "dayOfWeek": "Monday", "timeSlot": "8:30-10:00"}]
    }

Design rationale:
- the file is only read, never written back (schedules live in memory)
- lessons are booked through add_lesson, so a seed file can never produce a
  double-booked store; rejected lessons are handed back to the caller
- unlike reference data, a broken file is an error: a silently empty schedule
  would give wrong availability answers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, TypeVar

from classplan.conflicts import ScheduleConflict
from classplan.model import Classroom, Course, CourseType, DayOfWeek, Lesson, Professor, TimeSlot
from classplan.mutations import add_lesson
from classplan.store import ScheduleStore

T = TypeVar("T")

Rejected = list[tuple[Lesson, ScheduleConflict]]


class ScheduleDataError(ValueError):
    """Raised when a seed file is missing, not JSON, or has a malformed record."""


def _default_data_path() -> Path:
    """
    Return the path of the bundled sample schedule inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can pass their own path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "sample_schedule.json"


def _int(value: Any, name: str) -> int:
    """
    Accept JSON integers (and integral floats like 30.0); reject anything that
    int() would silently truncate or coerce, such as 1.7, "12" or true.
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"{name} must be an integer, got {value!r}")


def _bool(value: Any, name: str) -> bool:
    # bool("false") is True, so only real JSON booleans are accepted
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


def _professor(rec: dict[str, Any]) -> Professor:
    return Professor(id=_int(rec["id"], "id"), name=str(rec["name"]), department=str(rec.get("department", "")))


def _classroom(rec: dict[str, Any]) -> Classroom:
    return Classroom(
        number=str(rec["number"]).strip(),
        capacity=_int(rec.get("capacity", 0), "capacity"),
        has_projector=_bool(rec.get("hasProjector", False), "hasProjector"),
    )


def _course(rec: dict[str, Any]) -> Course:
    return Course(id=_int(rec["id"], "id"), name=str(rec["name"]), type=CourseType.parse(rec["type"]))


def _lesson(rec: dict[str, Any]) -> Lesson:
    return Lesson(
        course_id=_int(rec["courseId"], "courseId"),
        professor_id=_int(rec["professorId"], "professorId"),
        classroom_number=str(rec["classroomNumber"]).strip(),
        day_of_week=DayOfWeek.parse(rec["dayOfWeek"]),
        time_slot=TimeSlot.parse(rec["timeSlot"]),
    )


def _records(data: dict[str, Any], key: str, build: Callable[[dict[str, Any]], T]) -> list[T]:
    raw = data.get(key, [])
    if not isinstance(raw, list):
        raise ScheduleDataError(f"'{key}' must be a list")

    out: list[T] = []
    for i, rec in enumerate(raw):
        if not isinstance(rec, dict):
            raise ScheduleDataError(f"{key}[{i}] must be an object")
        try:
            out.append(build(rec))
        except KeyError as exc:
            raise ScheduleDataError(f"{key}[{i}] is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise ScheduleDataError(f"{key}[{i}]: {exc}") from exc
    return out


def parse_schedule(data: Any) -> tuple[ScheduleStore, Rejected]:
    """
    Build a store from already-decoded JSON data.
    Returns the store and the (lesson, conflict) pairs that were not booked.
    """
    if not isinstance(data, dict):
        raise ScheduleDataError("Seed data must be a JSON object")

    store = ScheduleStore()
    for p in _records(data, "professors", _professor):
        store.add_professor(p)
    for c in _records(data, "classrooms", _classroom):
        store.add_classroom(c)
    for c in _records(data, "courses", _course):
        store.add_course(c)

    rejected: Rejected = []
    for lesson in _records(data, "lessons", _lesson):
        conflict = add_lesson(store, lesson)
        if conflict is not None:
            rejected.append((lesson, conflict))

    return store, rejected


def load_schedule(path: str | Path | None = None) -> tuple[ScheduleStore, Rejected]:
    """
    Load a seed file (default: the bundled sample) into a fresh store.
    """
    data_path = Path(path) if path is not None else _default_data_path()

    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ScheduleDataError(f"Seed file not found: {data_path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ScheduleDataError(f"Cannot read seed file {data_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ScheduleDataError(f"Invalid JSON in {data_path}: {exc}") from exc

    return parse_schedule(data)
