from __future__ import annotations

from typing import Optional

from ..database.dynamo_base import get_item, put_item
from .model import AttendanceSession
from .repository import SessionRepository


class DynamoSessionRepository(SessionRepository):
    def __init__(self, table):
        self._table = table

    def get_by_id(self, session_id: str) -> Optional[AttendanceSession]:
        item = get_item(self._table, {"sessionId": session_id})
        if not item:
            return None
        return AttendanceSession(
            session_id=item["sessionId"],
            class_id=str(item.get("classId", "")),
            teacher_id=str(item.get("teacherId", "")),
            expire_at=int(item.get("expireAt", 0)),
        )

    def create(self, session: AttendanceSession) -> None:
        put_item(
            self._table,
            {
                "sessionId": session.session_id,
                "classId": session.class_id,
                "teacherId": session.teacher_id,
                "expireAt": int(session.expire_at),
            },
        )
