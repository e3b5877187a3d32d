"""
CLI (Command Line Interface).

Quick terminal commands over a schedule seed file, e.g.:

    classplan available Monday 8:30-10:00
    classplan professor 1
    classplan utilization 101
    classplan popular
    classplan check 7 2 101 Monday 8:30-10:00
    classplan conflicts
    classplan grid --room 101
    classplan demo

Every command loads the seed file first (default: the bundled sample,
override with --data). Nothing is written back.

Note:
- output is plain text, except the weekly grid which is a rich table
- exit codes: 0 ok, 1 bad input/data, 2 unknown command
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from classplan.conflicts import find_conflicts, validate_lesson
from classplan.model import Classroom, Course, CourseType, DayOfWeek, Lesson, Professor, TimeSlot
from classplan.mutations import add_classroom, add_course, add_lesson, add_professor
from classplan.queries import (
    find_available_classrooms,
    get_classroom_utilization,
    get_most_popular_course_type,
    get_professor_schedule,
    get_weekly_grid,
)
from classplan.storage import Rejected, ScheduleDataError, load_schedule
from classplan.store import ScheduleStore

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _lesson_line(store: ScheduleStore, lesson: Lesson) -> str:
    course = store.get_course(lesson.course_id)
    title = f"{course.name} ({course.type})" if course else f"course {lesson.course_id}"
    return f"{lesson.day_of_week} {lesson.time_slot} | {lesson.classroom_number} | {title}"


def _cmd_available(args: argparse.Namespace, store: ScheduleStore) -> int:
    """
    Print classrooms that are free at the given day and slot.
    """
    day = DayOfWeek.parse(args.day)
    slot = TimeSlot.parse(args.slot)

    free = find_available_classrooms(store, slot, day)
    if not free:
        print(f"No free classrooms on {day} {slot}.")
        return 0
    for number in free:
        print(number)
    return 0


def _cmd_professor(args: argparse.Namespace, store: ScheduleStore) -> int:
    lessons = get_professor_schedule(store, args.professor_id)
    prof = store.get_professor(args.professor_id)
    name = prof.name if prof else f"professor {args.professor_id}"

    if not lessons:
        print(f"No lessons for {name}.")
        return 0

    print(f"{name}: {len(lessons)} lesson(s)")
    for lesson in lessons:
        print(f"- {_lesson_line(store, lesson)}")
    return 0


def _cmd_utilization(args: argparse.Namespace, store: ScheduleStore) -> int:
    room = (args.room or "").strip()
    if not room:
        print("Please provide a classroom number.")
        return 1

    if store.get_classroom(room) is None:
        print(f"Warning: classroom '{room}' is not registered.")
    print(f"{room}: {get_classroom_utilization(store, room):.1f}%")
    return 0


def _cmd_popular(args: argparse.Namespace, store: ScheduleStore) -> int:
    course_type = get_most_popular_course_type(store)
    if course_type is None:
        print("No lessons scheduled.")
        return 0
    print(course_type)
    return 0


def _cmd_check(args: argparse.Namespace, store: ScheduleStore) -> int:
    """
    Validate a candidate lesson against the loaded schedule (nothing is booked).
    """
    candidate = Lesson(
        course_id=args.course_id,
        professor_id=args.professor_id,
        classroom_number=args.room.strip(),
        day_of_week=DayOfWeek.parse(args.day),
        time_slot=TimeSlot.parse(args.slot),
    )
    conflict = validate_lesson(store, candidate)
    if conflict is None:
        print(f"OK: {candidate.describe()}")
    else:
        print(f"Rejected: {conflict}")
    return 0


def _cmd_conflicts(args: argparse.Namespace, store: ScheduleStore, rejected: Rejected) -> int:
    """
    Report seed lessons that were not booked, plus an audit of the stored ones.
    """
    if not rejected:
        print("No conflicts found.")
    else:
        print(f"Rejected lessons: {len(rejected)}")
        for lesson, conflict in rejected:
            print(f"- {lesson.describe()}  <->  {conflict}")

    # stored lessons went through validate_lesson, so this should stay empty
    leftovers = find_conflicts(store.lessons)
    for a, b, kind in leftovers:
        print(f"! {kind}: {a.describe()}  <->  {b.describe()}")
    return 0 if not leftovers else 1


def _cmd_grid(args: argparse.Namespace, store: ScheduleStore) -> int:
    """
    Render the weekly grid of one classroom or one professor as a table.
    """
    if args.room is not None:
        grid = get_weekly_grid(store, classroom_number=args.room.strip())
        title = escape(f"Classroom {args.room.strip()}")
    else:
        grid = get_weekly_grid(store, professor_id=args.professor)
        prof = store.get_professor(args.professor)
        title = escape(prof.name) if prof else f"Professor {args.professor}"

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Slot")
    for day in DayOfWeek:
        table.add_column(day.value)

    for slot in TimeSlot:
        row = [slot.value]
        for day in DayOfWeek:
            lesson = grid.get((day, slot))
            if lesson is None:
                row.append("")
                continue
            course = store.get_course(lesson.course_id)
            name = course.name if course else f"course {lesson.course_id}"
            where = lesson.classroom_number if args.room is None else f"prof {lesson.professor_id}"
            # seed text may contain [brackets], which rich would read as markup
            row.append(f"{escape(name)}\n[dim]{escape(where)}[/]")
        table.add_row(*row)

    console.print(table)
    return 0


def _cmd_demo(args: argparse.Namespace) -> int:
    """
    Walk through a small scenario on an empty schedule.
    """
    store = ScheduleStore()
    add_professor(store, Professor(1, "Anna Keller", "Computer Science"))
    add_professor(store, Professor(2, "Jonas Brandt", "Mathematics"))
    add_classroom(store, Classroom("101", 120, True))
    add_classroom(store, Classroom("102", 40, False))
    add_course(store, Course(1, "Algorithms", CourseType.LECTURE))
    add_course(store, Course(2, "Databases", CourseType.SEMINAR))
    add_course(store, Course(3, "Statistics", CourseType.LAB))

    monday, first = DayOfWeek.MONDAY, TimeSlot.FIRST
    attempts = [
        Lesson(1, 1, "101", monday, first),
        Lesson(2, 1, "102", monday, first),
        Lesson(3, 2, "101", monday, first),
    ]
    for lesson in attempts:
        conflict = add_lesson(store, lesson)
        status = "accepted" if conflict is None else f"rejected ({conflict})"
        print(f"add {lesson.describe()}: {status}")

    print(f"available {monday} {first}: {', '.join(find_available_classrooms(store, first, monday))}")
    print(f"utilization 101: {get_classroom_utilization(store, '101'):.1f}%")
    print(f"most popular type: {get_most_popular_course_type(store)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="classplan", description="Class scheduling conflict checker")
    parser.add_argument("--data", type=Path, default=None, help="Schedule seed file (JSON)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every booking decision")
    sub = parser.add_subparsers(dest="command", required=True)

    p_avail = sub.add_parser("available", help="Free classrooms at a day/slot")
    p_avail.add_argument("day", type=str, help="Day of week (e.g. Monday)")
    p_avail.add_argument("slot", type=str, help="Time slot (e.g. 8:30-10:00)")

    p_prof = sub.add_parser("professor", help="Lessons of one professor")
    p_prof.add_argument("professor_id", type=int, help="Professor id")

    p_util = sub.add_parser("utilization", help="Weekly utilization of a classroom")
    p_util.add_argument("room", type=str, help="Classroom number (e.g. 101)")

    sub.add_parser("popular", help="Most scheduled course type")

    p_check = sub.add_parser("check", help="Check a candidate lesson for conflicts")
    p_check.add_argument("course_id", type=int)
    p_check.add_argument("professor_id", type=int)
    p_check.add_argument("room", type=str)
    p_check.add_argument("day", type=str)
    p_check.add_argument("slot", type=str)

    sub.add_parser("conflicts", help="Show seed lessons rejected as conflicts")

    p_grid = sub.add_parser("grid", help="Weekly grid of a classroom or professor")
    target = p_grid.add_mutually_exclusive_group(required=True)
    target.add_argument("--room", type=str, help="Classroom number")
    target.add_argument("--professor", type=int, help="Professor id")

    sub.add_parser("demo", help="Run a small booking scenario on an empty schedule")

    return parser


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "demo":
        return _cmd_demo(args)

    store, rejected = load_schedule(args.data)

    if args.command == "available":
        return _cmd_available(args, store)
    if args.command == "professor":
        return _cmd_professor(args, store)
    if args.command == "utilization":
        return _cmd_utilization(args, store)
    if args.command == "popular":
        return _cmd_popular(args, store)
    if args.command == "check":
        return _cmd_check(args, store)
    if args.command == "conflicts":
        return _cmd_conflicts(args, store, rejected)
    if args.command == "grid":
        return _cmd_grid(args, store)

    return 2


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        code = _dispatch(args)
    except ScheduleDataError as exc:
        print(f"Error: {exc}")
        code = 1
    except ValueError as exc:
        # unknown day/slot text on the command line
        print(f"Error: {exc}")
        code = 1

    raise SystemExit(code)
