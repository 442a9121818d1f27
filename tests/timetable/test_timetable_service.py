from __future__ import annotations

from datetime import time, timedelta

import pytest

from fakes import InMemoryTimetable, InMemoryUsers
from src.face_attendance.face_attendance.core.exceptions import NotFoundError, ValidationError
from src.face_attendance.face_attendance.timetable.model import TimetableEntry
from src.face_attendance.face_attendance.timetable.service import TimetableService
from src.face_attendance.face_attendance.users.model import User

TEACHER = User(user_id="TEACH001", name="Dr. Sarah Johnson", email="s@x.edu", role="teacher", approved=True,
               department="Computer Science", specialization="Machine Learning")
STUDENT = User(user_id="10000000001", name="Alice", email="a@x.edu", role="student", approved=True)


def _entry(class_id, day, start, end, teacher_id="TEACH001", **kwargs):
    return TimetableEntry(
        timetable_id=f"{class_id}-{day}-{start.strftime('%H:%M')}",
        class_id=class_id,
        class_name=class_id,
        teacher_id=teacher_id,
        teacher_name="Dr. Sarah Johnson",
        day_of_week=day,
        start_time=start,
        end_time=end,
        subject="Subject",
        **kwargs,
    )


@pytest.fixture
def timetable():
    return InMemoryTimetable(
        _entry("CS101", "Monday", time(9, 0), time(10, 0)),
        _entry("CS102", "Monday", time(8, 0), time(9, 0)),
        _entry("CS103", "Monday", time(11, 0), time(12, 0)),
        _entry("CS104", "Friday", time(8, 0), time(9, 0)),
        _entry("CS105", "Tuesday", time(14, 0), time(15, 0)),
        _entry("CS106", "Monday", time(13, 0), time(14, 0), teacher_id=""),
    )


@pytest.fixture
def svc(timetable):
    return TimetableService(timetable, InMemoryUsers(TEACHER, STUDENT), max_workers=2)


def _upsert(svc, **overrides):
    fields = dict(
        class_id="MA201",
        class_name="Calculus",
        teacher_id="TEACH001",
        day_of_week="Wednesday",
        start_time="10:00",
        end_time="11:30",
        subject="Math",
    )
    fields.update(overrides)
    return svc.upsert_entry(**fields)


def test_upsert_same_slot_overwrites(svc, timetable):
    first = _upsert(svc, room="A1")
    second = _upsert(svc, room="B2", subject="Calculus I")

    assert first == second == "MA201-Wednesday-10:00"
    entry = timetable.entries[first]
    assert entry.room == "B2"
    assert entry.subject == "Calculus I"
    assert entry.teacher_name == "Unknown Teacher"
    assert entry.end_time == time(11, 30)


def test_upsert_validation(svc):
    with pytest.raises(ValidationError, match="Missing required fields"):
        _upsert(svc, subject="")
    with pytest.raises(ValidationError):
        _upsert(svc, day_of_week="Funday")
    with pytest.raises(ValidationError):
        _upsert(svc, start_time="ten")


def test_soft_delete_hides_but_keeps_entry(svc, timetable):
    svc.delete_entry("CS101-Monday-09:00")

    assert timetable.entries["CS101-Monday-09:00"].is_active is False
    assert "CS101-Monday-09:00" not in {e.timetable_id for e in svc.list_active()}
    with pytest.raises(NotFoundError):
        svc.delete_entry("missing")


def test_student_classes_today_sorted_by_start(svc, fixed_now):
    result = svc.student_classes_today(STUDENT.user_id, now=fixed_now)

    assert result["today"] == "Monday"
    assert [c["classId"] for c in result["classes"]] == ["CS102", "CS101", "CS103", "CS106"]
    with pytest.raises(NotFoundError):
        svc.student_classes_today("nobody", now=fixed_now)


def test_teacher_classes_today_status_flags(svc, fixed_now):
    result = svc.teacher_classes_today("TEACH001", now=fixed_now)

    assert result["currentTime"] == "09:30"
    flags = {
        c["classId"]: (c["canTakeAttendance"], c["isUpcoming"], c["isCompleted"]) for c in result["classes"]
    }
    assert flags == {
        "CS102": (False, False, True),
        "CS101": (True, False, False),
        "CS103": (False, True, False),
    }


def test_attendance_window_includes_both_ends(svc, fixed_now):
    at_start = fixed_now.replace(hour=9, minute=0)
    at_end = fixed_now.replace(hour=10, minute=0)

    for moment in (at_start, at_end):
        row = next(c for c in svc.teacher_classes_today("TEACH001", now=moment)["classes"] if c["classId"] == "CS101")
        assert row["canTakeAttendance"]


def test_teacher_classes_sorted_by_weekday_then_start(svc):
    classes = svc.teacher_classes("TEACH001")

    assert [c.class_id for c in classes] == ["CS102", "CS101", "CS103", "CS105", "CS104"]


def test_assign_teacher(svc, timetable, fixed_now):
    name = svc.assign_teacher(timetable_id="CS106-Monday-13:00", teacher_id="TEACH001", now=fixed_now)

    entry = timetable.entries["CS106-Monday-13:00"]
    assert name == "Dr. Sarah Johnson"
    assert entry.teacher_id == "TEACH001"
    assert entry.assigned_at == fixed_now.isoformat()


def test_assign_non_teacher_leaves_entry_untouched(svc, timetable):
    before = timetable.entries["CS106-Monday-13:00"]

    with pytest.raises(NotFoundError, match="Teacher not found"):
        svc.assign_teacher(timetable_id="CS106-Monday-13:00", teacher_id=STUDENT.user_id)

    assert timetable.entries["CS106-Monday-13:00"] == before


def test_assign_unknown_entry_and_missing_ids(svc):
    with pytest.raises(NotFoundError, match="Timetable entry not found"):
        svc.assign_teacher(timetable_id="missing", teacher_id="TEACH001")
    with pytest.raises(ValidationError):
        svc.assign_teacher(timetable_id="", teacher_id="TEACH001")


def test_teacher_assignments_overview(svc):
    overview = svc.teacher_assignments()

    (teacher,) = overview["teachers"]
    assert teacher["assignedClasses"] == 5
    assert [c["classId"] for c in overview["unassignedClasses"]] == ["CS106"]
    assert overview["totalClasses"] == 6


def test_classes_with_teachers(svc, timetable):
    timetable.upsert(_entry("CS107", "Monday", time(16, 0), time(17, 0), teacher_id="GONE"))

    rows = {r["classId"]: r for r in svc.classes_with_teachers()}

    assert rows["CS101"]["teacher"]["department"] == "Computer Science"
    assert rows["CS106"]["teacher"] is None
    assert rows["CS107"]["teacher"] is None
