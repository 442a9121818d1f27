from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles accepted at registration."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class ApprovalStatus(str, Enum):
    """Lifecycle of a self-registered account."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"


class AttendanceMethod(str, Enum):
    """How an attendance record was produced."""

    QR_SCAN = "qr_scan"
    MANUAL = "manual"
    FACE = "face"
