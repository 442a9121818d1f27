from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..common.datetime_utils import format_hhmm


def timetable_id_for(class_id: str, day_of_week: str, start_time: time) -> str:
    """Composite key; re-submitting the same class/day/slot overwrites it."""
    return f"{class_id}-{day_of_week}-{format_hhmm(start_time)}"


@dataclass(frozen=True)
class TimetableEntry:
    timetable_id: str
    class_id: str
    class_name: str
    teacher_id: str
    teacher_name: str
    day_of_week: str
    start_time: time
    end_time: time
    subject: str
    room: str = ""
    is_active: bool = True
    created_at: Optional[str] = None
    assigned_at: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "timetableId": self.timetable_id,
            "classId": self.class_id,
            "className": self.class_name,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "dayOfWeek": self.day_of_week,
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "subject": self.subject,
            "room": self.room,
            "isActive": self.is_active,
        }
        if self.created_at:
            data["createdAt"] = self.created_at
        if self.assigned_at:
            data["assignedAt"] = self.assigned_at
        return data
