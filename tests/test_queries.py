import unittest

from classplan.model import GRID_SIZE, Classroom, Course, CourseType, DayOfWeek, Lesson, TimeSlot
from classplan.mutations import add_lesson, cancel_lesson
from classplan.queries import (
    find_available_classrooms,
    get_classroom_utilization,
    get_most_popular_course_type,
    get_professor_schedule,
    get_weekly_grid,
)
from classplan.store import ScheduleStore

MON = DayOfWeek.MONDAY
FIRST = TimeSlot.FIRST


def _store_with_rooms(*numbers: str) -> ScheduleStore:
    store = ScheduleStore()
    for n in numbers:
        store.add_classroom(Classroom(n, 30, False))
    return store


class TestAvailability(unittest.TestCase):
    def test_registration_order_is_kept(self) -> None:
        store = _store_with_rooms("305", "101", "204")
        self.assertEqual(find_available_classrooms(store, FIRST, MON), ["305", "101", "204"])

    def test_free_and_occupied_partition_all_rooms(self) -> None:
        store = _store_with_rooms("101", "102", "103", "104")
        add_lesson(store, Lesson(1, 1, "102", MON, FIRST))
        add_lesson(store, Lesson(2, 2, "104", MON, FIRST))
        add_lesson(store, Lesson(3, 3, "101", MON, TimeSlot.SECOND))

        free = find_available_classrooms(store, FIRST, MON)
        occupied = {l.classroom_number for l in store.lessons if l.slot == (MON, FIRST)}
        self.assertEqual(free, ["101", "103"])
        self.assertFalse(set(free) & occupied)
        self.assertEqual(set(free) | occupied, {c.number for c in store.classrooms})


class TestProfessorSchedule(unittest.TestCase):
    def test_insertion_order(self) -> None:
        store = ScheduleStore()
        a = Lesson(1, 1, "101", DayOfWeek.FRIDAY, FIRST)
        b = Lesson(2, 2, "101", MON, FIRST)
        c = Lesson(3, 1, "102", MON, FIRST)
        for lesson in (a, b, c):
            add_lesson(store, lesson)
        self.assertEqual([l.course_id for l in get_professor_schedule(store, 1)], [1, 3])
        self.assertEqual(get_professor_schedule(store, 9), [])


class TestUtilization(unittest.TestCase):
    def test_unused_room_is_zero(self) -> None:
        store = _store_with_rooms("101")
        self.assertEqual(get_classroom_utilization(store, "101"), 0.0)
        self.assertEqual(get_classroom_utilization(store, "nope"), 0.0)

    def test_full_week_is_hundred(self) -> None:
        store = _store_with_rooms("101")
        course_id = 0
        for day in DayOfWeek:
            for slot in TimeSlot:
                course_id += 1
                self.assertIsNone(add_lesson(store, Lesson(course_id, course_id, "101", day, slot)))
        self.assertEqual(get_classroom_utilization(store, "101"), 100.0)

    def test_formula(self) -> None:
        store = _store_with_rooms("101", "102")
        for i, slot in enumerate(list(TimeSlot)[:3]):
            add_lesson(store, Lesson(i, i, "101", MON, slot))
        add_lesson(store, Lesson(9, 9, "102", MON, FIRST))
        self.assertAlmostEqual(get_classroom_utilization(store, "101"), 100 * 3 / GRID_SIZE)
        cancel_lesson(store, 0)
        self.assertAlmostEqual(get_classroom_utilization(store, "101"), 8.0)


class TestMostPopularCourseType(unittest.TestCase):
    def setUp(self) -> None:
        self.store = ScheduleStore()
        self.store.add_course(Course(1, "Algorithms", CourseType.LECTURE))
        self.store.add_course(Course(2, "Lab work", CourseType.LAB))
        self.store.add_course(Course(3, "Reading group", CourseType.SEMINAR))
        self._slots = ((d, s) for d in DayOfWeek for s in TimeSlot)

    def _book(self, course_id: int) -> None:
        day, slot = next(self._slots)
        self.assertIsNone(add_lesson(self.store, Lesson(course_id, 1, "101", day, slot)))

    def test_empty_schedule(self) -> None:
        self.assertIsNone(get_most_popular_course_type(self.store))

    def test_highest_count_wins(self) -> None:
        for course_id in (2, 2, 1, 3, 2):
            self._book(course_id)
        self.assertEqual(get_most_popular_course_type(self.store), CourseType.LAB)

    def test_tie_goes_to_first_declared_type(self) -> None:
        # Lab booked first, but Lecture is declared before Lab
        for course_id in (2, 3, 1, 3, 2, 1):
            self._book(course_id)
        self.assertEqual(get_most_popular_course_type(self.store), CourseType.LECTURE)

    def test_unknown_courses_are_skipped(self) -> None:
        for course_id in (99, 99, 99, 3):
            self._book(course_id)
        self.assertEqual(get_most_popular_course_type(self.store), CourseType.SEMINAR)

    def test_only_unknown_courses(self) -> None:
        self._book(99)
        self.assertIsNone(get_most_popular_course_type(self.store))


class TestWeeklyGrid(unittest.TestCase):
    def test_grid_by_room_and_professor(self) -> None:
        store = _store_with_rooms("101", "102")
        a = Lesson(1, 1, "101", MON, FIRST)
        b = Lesson(2, 1, "102", DayOfWeek.TUESDAY, FIRST)
        add_lesson(store, a)
        add_lesson(store, b)
        a, b = store.lessons
        self.assertEqual(get_weekly_grid(store, classroom_number="101"), {(MON, FIRST): a})
        self.assertEqual(
            get_weekly_grid(store, professor_id=1),
            {(MON, FIRST): a, (DayOfWeek.TUESDAY, FIRST): b},
        )

    def test_requires_exactly_one_filter(self) -> None:
        store = ScheduleStore()
        with self.assertRaises(ValueError):
            get_weekly_grid(store)
        with self.assertRaises(ValueError):
            get_weekly_grid(store, classroom_number="101", professor_id=1)


if __name__ == "__main__":
    unittest.main()
