from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceSession:
    """A time-boxed attendance window for one class meeting.

    expire_at is an absolute instant in epoch seconds.
    """

    session_id: str
    class_id: str
    teacher_id: str
    expire_at: int

    def is_expired(self, now_epoch: int) -> bool:
        return now_epoch > self.expire_at
