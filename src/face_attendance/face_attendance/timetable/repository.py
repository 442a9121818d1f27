from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TimetableEntry


class TimetableRepository(Protocol):
    def upsert(self, entry: TimetableEntry) -> None:
        """Write the whole entry at its timetable_id."""

        raise NotImplementedError

    def deactivate(self, timetable_id: str) -> bool:
        """Soft delete. Returns False if the entry does not exist."""

        raise NotImplementedError

    def assign_teacher(self, timetable_id: str, *, teacher_id: str, teacher_name: str, assigned_at: str) -> bool:
        raise NotImplementedError

    def list_active(self, *, day_of_week: Optional[str] = None, teacher_id: Optional[str] = None) -> Sequence[TimetableEntry]:
        raise NotImplementedError
