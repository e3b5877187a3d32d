"""
Unit tests for loading schedule seed files.

Loader contract:
- missing file / invalid JSON / malformed record -> ScheduleDataError
- missing collections are treated as empty
- lessons are booked through add_lesson; conflicting ones are returned
"""

import json
import tempfile
import unittest
from pathlib import Path

from classplan.conflicts import ConflictType
from classplan.model import CourseType, DayOfWeek, TimeSlot
from classplan.storage import ScheduleDataError, load_schedule, parse_schedule


def _write(d: str, payload: object) -> Path:
    p = Path(d) / "schedule.json"
    p.write_text(json.dumps(payload), encoding="utf-8")
    return p


class TestLoadSchedule(unittest.TestCase):
    def test_bundled_sample_loads(self) -> None:
        store, rejected = load_schedule()
        self.assertEqual(len(store.classrooms), 3)
        self.assertEqual(len(store.lessons), 6)
        self.assertEqual(len(rejected), 1)
        lesson, conflict = rejected[0]
        self.assertEqual(conflict.type, ConflictType.CLASSROOM)
        self.assertIsNone(lesson.lesson_id)

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(ScheduleDataError):
                load_schedule(Path(d) / "missing.json")

    def test_invalid_json(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "broken.json"
            p.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ScheduleDataError):
                load_schedule(p)

    def test_camel_case_fields(self) -> None:
        payload = {
            "classrooms": [{"number": " 101 ", "capacity": 30, "hasProjector": True}],
            "courses": [{"id": 1, "name": "Algorithms", "type": "lecture"}],
            "lessons": [
                {
                    "courseId": 1,
                    "professorId": 7,
                    "classroomNumber": "101",
                    "dayOfWeek": "Tuesday",
                    "timeSlot": "08:30-10:00",
                }
            ],
        }
        with tempfile.TemporaryDirectory() as d:
            store, rejected = load_schedule(_write(d, payload))

        self.assertEqual(rejected, [])
        self.assertEqual(store.professors, [])
        room = store.classrooms[0]
        self.assertEqual(room.number, "101")
        self.assertTrue(room.has_projector)
        self.assertEqual(store.courses[0].type, CourseType.LECTURE)
        lesson = store.lessons[0]
        self.assertEqual(lesson.slot, (DayOfWeek.TUESDAY, TimeSlot.FIRST))
        self.assertEqual(lesson.lesson_id, 1)

    def test_missing_field_is_named(self) -> None:
        with self.assertRaises(ScheduleDataError) as ctx:
            parse_schedule({"lessons": [{"courseId": 1}]})
        self.assertIn("lessons[0]", str(ctx.exception))
        self.assertIn("professorId", str(ctx.exception))

    def test_bad_enum_value(self) -> None:
        with self.assertRaises(ScheduleDataError):
            parse_schedule({"courses": [{"id": 1, "name": "x", "type": "Workshop"}]})

    def test_projector_flag_must_be_boolean(self) -> None:
        with self.assertRaises(ScheduleDataError) as ctx:
            parse_schedule({"classrooms": [{"number": "101", "hasProjector": "false"}]})
        self.assertIn("hasProjector", str(ctx.exception))

    def test_ids_and_capacity_must_be_integral(self) -> None:
        with self.assertRaises(ScheduleDataError) as ctx:
            parse_schedule({"classrooms": [{"number": "101", "capacity": 1.7}]})
        self.assertIn("capacity", str(ctx.exception))
        with self.assertRaises(ScheduleDataError):
            parse_schedule({"professors": [{"id": "1", "name": "x"}]})
        with self.assertRaises(ScheduleDataError):
            parse_schedule({"courses": [{"id": True, "name": "x", "type": "Lab"}]})

    def test_integral_float_is_accepted(self) -> None:
        store, _ = parse_schedule({"classrooms": [{"number": "101", "capacity": 30.0}]})
        self.assertEqual(store.classrooms[0].capacity, 30)

    def test_wrong_shapes(self) -> None:
        with self.assertRaises(ScheduleDataError):
            parse_schedule([])
        with self.assertRaises(ScheduleDataError):
            parse_schedule({"classrooms": {"number": "101"}})
        with self.assertRaises(ScheduleDataError):
            parse_schedule({"classrooms": ["101"]})


if __name__ == "__main__":
    unittest.main()
