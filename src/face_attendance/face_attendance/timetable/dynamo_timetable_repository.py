from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from boto3.dynamodb.conditions import Attr

from ..common.datetime_utils import parse_hhmm
from ..core.constants import DEFAULT_TEACHER_NAME
from ..database.dynamo_base import put_item, scan_all, update_attributes
from .model import TimetableEntry
from .repository import TimetableRepository

logger = logging.getLogger(__name__)


def _from_item(item: Dict[str, Any]) -> TimetableEntry:
    return TimetableEntry(
        timetable_id=item["timetableId"],
        class_id=str(item.get("classId", "")),
        class_name=item.get("className", ""),
        teacher_id=str(item.get("teacherId") or ""),
        teacher_name=item.get("teacherName") or DEFAULT_TEACHER_NAME,
        day_of_week=item.get("dayOfWeek", ""),
        start_time=parse_hhmm(item.get("startTime", "00:00")),
        end_time=parse_hhmm(item.get("endTime", "00:00")),
        subject=item.get("subject", ""),
        room=item.get("room") or "",
        is_active=bool(item.get("isActive", True)),
        created_at=item.get("createdAt"),
        assigned_at=item.get("assignedAt"),
    )


def _entries(items: Iterable[Dict[str, Any]]) -> List[TimetableEntry]:
    """Map scanned items, skipping rows whose times are not HH:MM.

    Rows written by other clients may carry free-form times.
    """

    entries = []
    for item in items:
        try:
            entries.append(_from_item(item))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping timetable item %s: %s", item.get("timetableId"), exc)
    return entries


class DynamoTimetableRepository(TimetableRepository):
    def __init__(self, table):
        self._table = table

    def upsert(self, entry: TimetableEntry) -> None:
        put_item(self._table, entry.to_dict())

    def deactivate(self, timetable_id: str) -> bool:
        return update_attributes(self._table, {"timetableId": timetable_id}, {"isActive": False})

    def assign_teacher(self, timetable_id: str, *, teacher_id: str, teacher_name: str, assigned_at: str) -> bool:
        return update_attributes(
            self._table,
            {"timetableId": timetable_id},
            {"teacherId": teacher_id, "teacherName": teacher_name, "assignedAt": assigned_at},
        )

    def list_active(self, *, day_of_week: Optional[str] = None, teacher_id: Optional[str] = None) -> List[TimetableEntry]:
        condition = Attr("isActive").eq(True)
        if day_of_week is not None:
            condition = condition & Attr("dayOfWeek").eq(day_of_week)
        if teacher_id is not None:
            condition = condition & Attr("teacherId").eq(teacher_id)
        return _entries(scan_all(self._table, condition))
