from __future__ import annotations

from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr

from ..database.dynamo_base import get_item, put_item, put_item_if_absent, scan_all, update_attributes
from .model import User
from .repository import UserRepository

_FIELDS = (
    ("user_id", "userId"),
    ("name", "name"),
    ("email", "email"),
    ("role", "role"),
    ("approved", "approved"),
    ("rejected", "rejected"),
    ("is_active", "isActive"),
    ("password", "password"),
    ("face_image", "faceImage"),
    ("face_id", "faceId"),
    ("photo_key", "photoKey"),
    ("department", "department"),
    ("specialization", "specialization"),
    ("employee_id", "employeeId"),
    ("rejection_reason", "rejectionReason"),
    ("created_at", "createdAt"),
    ("approved_at", "approvedAt"),
    ("rejected_at", "rejectedAt"),
)


def _from_item(item: Dict[str, Any]) -> User:
    values = {attr: item.get(key) for attr, key in _FIELDS}
    values["user_id"] = str(item["userId"])
    values["name"] = item.get("name") or ""
    values["email"] = item.get("email") or ""
    values["role"] = item.get("role") or ""
    values["approved"] = bool(item.get("approved", False))
    values["rejected"] = bool(item.get("rejected", False))
    if values["employee_id"] is not None:
        values["employee_id"] = str(values["employee_id"])
    return User(**values)


def _to_item(user: User) -> Dict[str, Any]:
    item = {key: getattr(user, attr) for attr, key in _FIELDS}
    if not user.rejected:
        item.pop("rejected")
    return item


class DynamoUserRepository(UserRepository):
    def __init__(self, table):
        self._table = table

    def get_by_id(self, user_id: str) -> Optional[User]:
        item = get_item(self._table, {"userId": user_id})
        return _from_item(item) if item else None

    def create(self, user: User) -> None:
        put_item(self._table, _to_item(user))

    def create_if_absent(self, user: User) -> bool:
        return put_item_if_absent(self._table, _to_item(user), key_name="userId")

    def mark_approved(
        self,
        user_id: str,
        *,
        password: str,
        face_id: Optional[str],
        photo_key: str,
        approved_at: str,
    ) -> None:
        update_attributes(
            self._table,
            {"userId": user_id},
            {
                "approved": True,
                "password": password,
                "faceId": face_id,
                "photoKey": photo_key,
                "isActive": True,
                "approvedAt": approved_at,
            },
            must_exist=False,
        )

    def mark_rejected(self, user_id: str, *, reason: str, rejected_at: str) -> None:
        update_attributes(
            self._table,
            {"userId": user_id},
            {
                "approved": False,
                "rejected": True,
                "rejectionReason": reason,
                "rejectedAt": rejected_at,
            },
            must_exist=False,
        )

    def deactivate(self, user_id: str) -> None:
        update_attributes(
            self._table,
            {"userId": user_id},
            {"approved": False, "isActive": False},
            must_exist=False,
        )

    def list_pending(self) -> List[User]:
        items = scan_all(self._table, Attr("approved").eq(False))
        return [_from_item(i) for i in items]

    def list_approved(self, *, role: Optional[str] = None, active_only: bool = True) -> List[User]:
        condition = Attr("approved").eq(True)
        if role is not None:
            condition = condition & Attr("role").eq(role)
        if active_only:
            condition = condition & (Attr("isActive").not_exists() | Attr("isActive").eq(True))
        return [_from_item(i) for i in scan_all(self._table, condition)]
