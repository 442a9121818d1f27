from __future__ import annotations

from typing import Optional, Protocol

from .model import AttendanceSession


class SessionRepository(Protocol):
    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def create(self, session: AttendanceSession) -> None:
        raise NotImplementedError
