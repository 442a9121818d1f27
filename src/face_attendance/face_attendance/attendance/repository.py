from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def put(self, record: AttendanceRecord) -> None:
        """Write the record at its attendance_id (last write wins)."""

        raise NotImplementedError

    def list_for_class(self, class_id: str, *, on_date: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Records whose session id contains class_id.

        This is a substring match over the whole table, not an index lookup.
        """

        raise NotImplementedError
