from __future__ import annotations

from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr

from ..core.enums import AttendanceMethod, AttendanceStatus
from ..database.dynamo_base import put_item, scan_all
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _from_item(item: Dict[str, Any]) -> AttendanceRecord:
    method = item.get("method")
    return AttendanceRecord(
        attendance_id=item["attendanceId"],
        user_id=str(item.get("userId", "")),
        session_id=str(item.get("sessionId", "")),
        timestamp=item.get("timestamp", ""),
        date=item.get("date", ""),
        status=AttendanceStatus(item.get("status", AttendanceStatus.PRESENT.value)),
        method=AttendanceMethod(method) if method else None,
        marked_by=item.get("markedBy"),
        camera_used=item.get("cameraUsed"),
    )


class DynamoAttendanceRepository(AttendanceRepository):
    def __init__(self, table):
        self._table = table

    def put(self, record: AttendanceRecord) -> None:
        put_item(self._table, record.to_dict())

    def list_for_class(self, class_id: str, *, on_date: Optional[str] = None) -> List[AttendanceRecord]:
        condition = Attr("sessionId").contains(class_id)
        if on_date:
            condition = condition & Attr("date").begins_with(on_date)
        return [_from_item(i) for i in scan_all(self._table, condition)]
