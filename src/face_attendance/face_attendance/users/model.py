from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ApprovalStatus


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: role is kept as the stored string; demo/seeded records may carry
    roles outside the Role enum and must still load.
    """

    user_id: str
    name: str
    email: str
    role: str
    approved: bool = False
    rejected: bool = False
    is_active: Optional[bool] = None
    password: Optional[str] = None
    face_image: Optional[str] = None
    face_id: Optional[str] = None
    photo_key: Optional[str] = None
    department: Optional[str] = None
    specialization: Optional[str] = None
    employee_id: Optional[str] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[str] = None
    approved_at: Optional[str] = None
    rejected_at: Optional[str] = None

    @property
    def active(self) -> bool:
        # A missing isActive attribute counts as active.
        return self.is_active is not False

    @property
    def status(self) -> ApprovalStatus:
        if self.rejected:
            return ApprovalStatus.REJECTED
        if self.approved:
            return ApprovalStatus.APPROVED
        return ApprovalStatus.PENDING

    def to_dict(self, *, include_photo: bool = False) -> dict:
        """Public JSON shape (camelCase, never the password)."""

        data = {
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "approved": self.approved,
            "status": self.status.value,
        }
        optional = {
            "rejected": self.rejected or None,
            "isActive": self.is_active,
            "faceId": self.face_id,
            "photoKey": self.photo_key,
            "department": self.department,
            "specialization": self.specialization,
            "employeeId": self.employee_id,
            "rejectionReason": self.rejection_reason,
            "createdAt": self.created_at,
            "approvedAt": self.approved_at,
            "rejectedAt": self.rejected_at,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if include_photo and self.face_image:
            data["faceImage"] = self.face_image
        return data
