from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on DynamoDB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def create(self, user: User) -> None:
        """Write the full record, overwriting any record with the same id."""

        raise NotImplementedError

    def create_if_absent(self, user: User) -> bool:
        raise NotImplementedError

    def mark_approved(
        self,
        user_id: str,
        *,
        password: str,
        face_id: Optional[str],
        photo_key: str,
        approved_at: str,
    ) -> None:
        raise NotImplementedError

    def mark_rejected(self, user_id: str, *, reason: str, rejected_at: str) -> None:
        raise NotImplementedError

    def deactivate(self, user_id: str) -> None:
        """Soft delete: clear approved and isActive."""

        raise NotImplementedError

    def list_pending(self) -> Sequence[User]:
        raise NotImplementedError

    def list_approved(self, *, role: Optional[str] = None, active_only: bool = True) -> Sequence[User]:
        raise NotImplementedError
