from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..common.datetime_utils import (
    day_index,
    format_hhmm,
    iso_timestamp,
    minute_of,
    now_local,
    now_utc,
    parse_hhmm,
    weekday_name,
)
from ..common.validators import require_fields
from ..core.constants import DAY_ORDER, DEFAULT_TEACHER_NAME, MAX_FANOUT_WORKERS
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import TimetableEntry, timetable_id_for
from .repository import TimetableRepository

logger = logging.getLogger(__name__)


def _by_start(entries) -> List[TimetableEntry]:
    return sorted(entries, key=lambda e: e.start_time)


class TimetableService:
    def __init__(self, timetable: TimetableRepository, users: UserRepository, *, max_workers: int = MAX_FANOUT_WORKERS):
        self._timetable = timetable
        self._users = users
        self._max_workers = max(1, int(max_workers))

    def upsert_entry(
        self,
        *,
        class_id: str,
        class_name: str,
        teacher_id: str,
        day_of_week: str,
        start_time: str,
        end_time: str,
        subject: str,
        teacher_name: Optional[str] = None,
        room: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        require_fields(
            {
                "classId": class_id,
                "className": class_name,
                "teacherId": teacher_id,
                "dayOfWeek": day_of_week,
                "startTime": start_time,
                "endTime": end_time,
                "subject": subject,
            },
            "classId",
            "className",
            "teacherId",
            "dayOfWeek",
            "startTime",
            "endTime",
            "subject",
            message="Missing required fields",
        )
        if day_of_week not in DAY_ORDER:
            raise ValidationError("Invalid dayOfWeek")
        try:
            start = parse_hhmm(start_time)
            end = parse_hhmm(end_time)
        except ValueError:
            raise ValidationError("Times must be HH:MM")

        now = now or now_utc()
        entry = TimetableEntry(
            timetable_id=timetable_id_for(class_id, day_of_week, start),
            class_id=class_id,
            class_name=class_name,
            teacher_id=teacher_id,
            teacher_name=teacher_name or DEFAULT_TEACHER_NAME,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            subject=subject,
            room=room or "",
            is_active=True,
            created_at=iso_timestamp(now),
        )
        self._timetable.upsert(entry)
        return entry.timetable_id

    def list_active(self) -> List[TimetableEntry]:
        return list(self._timetable.list_active())

    def delete_entry(self, timetable_id: str) -> None:
        if not self._timetable.deactivate(timetable_id):
            raise NotFoundError("Timetable entry not found")

    def student_classes_today(self, user_id: str, *, now: Optional[datetime] = None) -> dict:
        # Every active class today is listed; there is no enrolment table.
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        now = now or now_local()
        today = weekday_name(now)
        classes = _by_start(self._timetable.list_active(day_of_week=today))
        return {"classes": [c.to_dict() for c in classes], "today": today}

    def teacher_classes_today(self, teacher_id: str, *, now: Optional[datetime] = None) -> dict:
        now = now or now_local()
        today = weekday_name(now)
        current = minute_of(now)

        classes = []
        for entry in _by_start(self._timetable.list_active(day_of_week=today, teacher_id=teacher_id)):
            row = entry.to_dict()
            row["canTakeAttendance"] = entry.start_time <= current <= entry.end_time
            row["isUpcoming"] = current < entry.start_time
            row["isCompleted"] = current > entry.end_time
            classes.append(row)

        return {"classes": classes, "today": today, "currentTime": format_hhmm(current)}

    def teacher_classes(self, teacher_id: str) -> List[TimetableEntry]:
        entries = self._timetable.list_active(teacher_id=teacher_id)
        return sorted(entries, key=lambda e: (day_index(e.day_of_week), e.start_time))

    def assign_teacher(
        self,
        *,
        timetable_id: str,
        teacher_id: str,
        teacher_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Point an entry at a teacher; returns the name recorded.

        Overlap with the teacher's other slots is not checked.
        """

        require_fields({"timetableId": timetable_id, "teacherId": teacher_id}, "timetableId", "teacherId",
                       message="Timetable ID and Teacher ID are required")

        teacher = self._users.get_by_id(teacher_id)
        if not teacher or teacher.role != Role.TEACHER.value:
            raise NotFoundError("Teacher not found or invalid role")

        name = teacher_name or teacher.name
        now = now or now_utc()
        if not self._timetable.assign_teacher(
            timetable_id,
            teacher_id=teacher_id,
            teacher_name=name,
            assigned_at=iso_timestamp(now),
        ):
            raise NotFoundError("Timetable entry not found")
        logger.info("Teacher %s assigned to %s", teacher_id, timetable_id)
        return name

    def teacher_assignments(self) -> dict:
        entries = self.list_active()
        teachers = self._users.list_approved(role=Role.TEACHER.value, active_only=False)

        rows = []
        for teacher in teachers:
            assigned = [e for e in entries if e.teacher_id == teacher.user_id]
            row = teacher.to_dict()
            row["assignedClasses"] = len(assigned)
            row["classes"] = [e.to_dict() for e in assigned]
            rows.append(row)

        return {
            "teachers": rows,
            "unassignedClasses": [e.to_dict() for e in entries if not e.teacher_id],
            "totalClasses": len(entries),
        }

    def _with_teacher(self, entry: TimetableEntry) -> dict:
        row = entry.to_dict()
        row["teacher"] = None
        if not entry.teacher_id:
            return row
        try:
            teacher = self._users.get_by_id(entry.teacher_id)
        except (ClientError, BotoCoreError) as exc:
            logger.error("Error fetching teacher %s for %s: %s", entry.teacher_id, entry.timetable_id, exc)
            return row
        if teacher:
            row["teacher"] = {
                "name": teacher.name,
                "department": teacher.department,
                "specialization": teacher.specialization,
            }
        return row

    def classes_with_teachers(self) -> list[dict]:
        entries = self.list_active()
        if not entries:
            return []
        with ThreadPoolExecutor(max_workers=min(len(entries), self._max_workers)) as executor:
            return list(executor.map(self._with_teacher, entries))
