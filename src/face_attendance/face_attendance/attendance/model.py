from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceMethod, AttendanceStatus


def attendance_id_for(user_id: str, session_id: str) -> str:
    """Composite key; re-marking the same (user, session) overwrites."""
    return f"{user_id}-{session_id}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's presence in one session."""

    attendance_id: str
    user_id: str
    session_id: str
    timestamp: str
    date: str
    status: AttendanceStatus
    method: Optional[AttendanceMethod] = None
    marked_by: Optional[str] = None
    camera_used: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "attendanceId": self.attendance_id,
            "userId": self.user_id,
            "sessionId": self.session_id,
            "timestamp": self.timestamp,
            "date": self.date,
            "status": self.status.value,
        }
        if self.method is not None:
            data["method"] = self.method.value
        if self.marked_by is not None:
            data["markedBy"] = self.marked_by
        if self.camera_used is not None:
            data["cameraUsed"] = self.camera_used
        return data
