from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from ..common.datetime_utils import epoch_millis, epoch_seconds, iso_date, iso_timestamp, now_utc
from ..common.validators import require_fields, require_list
from ..core.constants import (
    MANUAL_SESSION_PREFIX,
    MAX_FANOUT_WORKERS,
    SESSION_PREFIX,
    SESSION_TTL_SECONDS,
    UNKNOWN_USER_NAME,
    UNKNOWN_USER_ROLE,
)
from ..core.enums import AttendanceMethod, AttendanceStatus, Role
from ..core.exceptions import AuthenticationError, SessionError
from ..sessions.model import AttendanceSession
from ..sessions.repository import SessionRepository
from ..users.repository import UserRepository
from ..users.service import AuthService
from .model import AttendanceRecord, attendance_id_for
from .qr import render_qr_data_url
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedSession:
    session: AttendanceSession
    qr_data: str


@dataclass(frozen=True)
class ManualSubmission:
    session_id: str
    present_count: int
    failed: List[str] = field(default_factory=list)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        users: UserRepository,
        *,
        face_verifier: Optional[AuthService] = None,
        qr_renderer: Callable[[str], str] = render_qr_data_url,
        max_workers: int = MAX_FANOUT_WORKERS,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._users = users
        self._face_verifier = face_verifier
        self._qr_renderer = qr_renderer
        self._max_workers = max(1, int(max_workers))

    def generate_session(self, *, teacher_id: str, class_id: str, now: Optional[datetime] = None) -> GeneratedSession:
        """Open a session that accepts marks for SESSION_TTL_SECONDS.

        The teacher is not checked against the class timetable.
        """

        require_fields({"teacherId": teacher_id, "classId": class_id}, "teacherId", "classId")
        now = now or now_utc()

        session = AttendanceSession(
            session_id=f"{SESSION_PREFIX}-{class_id}-{epoch_millis(now)}",
            class_id=class_id,
            teacher_id=teacher_id,
            expire_at=epoch_seconds(now) + SESSION_TTL_SECONDS,
        )
        qr_data = self._qr_renderer(session.session_id)
        self._sessions.create(session)
        logger.info("Session %s opened by %s until %s", session.session_id, teacher_id, session.expire_at)
        return GeneratedSession(session=session, qr_data=qr_data)

    def _open_session(self, session_id: str, now: datetime, *, invalid: str, expired: str) -> AttendanceSession:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise SessionError(invalid)
        if session.is_expired(epoch_seconds(now)):
            raise SessionError(expired)
        return session

    def _write(
        self,
        *,
        user_id: str,
        session_id: str,
        now: datetime,
        method: AttendanceMethod,
        marked_by: Optional[str] = None,
        camera_used: Optional[str] = None,
    ) -> AttendanceRecord:
        record = AttendanceRecord(
            attendance_id=attendance_id_for(user_id, session_id),
            user_id=user_id,
            session_id=session_id,
            timestamp=iso_timestamp(now),
            date=iso_date(now),
            status=AttendanceStatus.PRESENT,
            method=method,
            marked_by=marked_by,
            camera_used=camera_used,
        )
        self._attendance.put(record)
        return record

    def mark_by_face(
        self,
        *,
        user_id: str,
        session_id: str,
        image_base64: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Mark a user present after face verification.

        Without a photo the caller is trusted to have verified the face
        already (via /auth/verify-face).
        """

        require_fields({"userId": user_id, "sessionId": session_id}, "userId", "sessionId")
        now = now or now_utc()

        self._open_session(session_id, now, invalid="Invalid session", expired="Session expired")

        if image_base64:
            if self._face_verifier is None:
                raise AuthenticationError("Face verification unavailable")
            result = self._face_verifier.verify_face(user_id=user_id, image_base64=image_base64)
            if not result.matched:
                raise AuthenticationError("Face not matched")

        return self._write(user_id=user_id, session_id=session_id, now=now, method=AttendanceMethod.FACE)

    def mark_by_qr(
        self,
        *,
        user_id: str,
        qr_data: str,
        camera_type: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> tuple[AttendanceRecord, AttendanceSession]:
        require_fields({"userId": user_id, "qrData": qr_data}, "userId", "qrData")
        now = now or now_utc()

        session = self._open_session(qr_data, now, invalid="Invalid QR code", expired="QR code has expired")
        record = self._write(
            user_id=user_id,
            session_id=qr_data,
            now=now,
            method=AttendanceMethod.QR_SCAN,
            camera_used=camera_type or "unknown",
        )
        return record, session

    def submit_manual(
        self,
        *,
        teacher_id: str,
        class_id: str,
        present_students,
        session_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ManualSubmission:
        """Write one Present record per listed student, concurrently.

        There is no rollback: a failed write is logged and reported while the
        other writes stand.
        """

        require_fields({"teacherId": teacher_id, "classId": class_id}, "teacherId", "classId",
                       message="Missing required fields")
        students = [str(s) for s in require_list(present_students, "presentStudents")]
        now = now or now_utc()
        final_session_id = session_id or f"{MANUAL_SESSION_PREFIX}-{class_id}-{epoch_millis(now)}"

        def _mark(student_id: str) -> None:
            self._write(
                user_id=student_id,
                session_id=final_session_id,
                now=now,
                method=AttendanceMethod.MANUAL,
                marked_by=teacher_id,
            )

        failed: List[str] = []
        if students:
            with ThreadPoolExecutor(max_workers=min(len(students), self._max_workers)) as executor:
                futures = {executor.submit(_mark, s): s for s in students}
                for future, student_id in futures.items():
                    try:
                        future.result()
                    except (ClientError, BotoCoreError) as exc:
                        logger.error("Manual attendance for %s in %s failed: %s", student_id, final_session_id, exc)
                        failed.append(student_id)

        return ManualSubmission(
            session_id=final_session_id,
            present_count=len(students) - len(failed),
            failed=failed,
        )

    def _enrich(self, record: AttendanceRecord) -> dict:
        data = record.to_dict()
        try:
            user = self._users.get_by_id(record.user_id)
        except (ClientError, BotoCoreError) as exc:
            logger.error("Error fetching user data for %s: %s", record.user_id, exc)
            user = None

        data["userName"] = (user.name if user else None) or UNKNOWN_USER_NAME
        data["userEmail"] = (user.email if user else None) or ""
        data["userRole"] = (user.role if user else None) or UNKNOWN_USER_ROLE
        return data

    def class_attendance(self, class_id: str) -> list[dict]:
        records: Sequence[AttendanceRecord] = self._attendance.list_for_class(class_id)
        if not records:
            return []
        with ThreadPoolExecutor(max_workers=min(len(records), self._max_workers)) as executor:
            return list(executor.map(self._enrich, records))

    def class_roster(self, class_id: str, *, now: Optional[datetime] = None) -> dict:
        """Approved students flagged with today's presence for the class."""

        now = now or now_utc()
        today = iso_date(now)
        students = self._users.list_approved(role=Role.STUDENT.value)
        present = {r.user_id for r in self._attendance.list_for_class(class_id, on_date=today)}

        rows = []
        for student in students:
            row = student.to_dict()
            row["isPresent"] = student.user_id in present
            row["attendanceMarked"] = student.user_id in present
            rows.append(row)
        return {"students": rows, "classId": class_id, "date": today}
