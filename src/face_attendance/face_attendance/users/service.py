from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..common.datetime_utils import epoch_millis, iso_timestamp, now_utc
from ..common.images import decode_image
from ..common.validators import require_fields
from ..core.constants import (
    DEFAULT_FACE_MATCH_THRESHOLD,
    DEFAULT_REJECTION_REASON,
    DUPLICATE_FACE_THRESHOLD,
    NOT_SPECIFIED,
    PHOTO_CONTENT_TYPE,
)
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from ..faces.model import FaceMatch
from ..faces.repository import CollectionNotFoundError, FaceIndex
from ..photos.repository import PhotoStore
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def new_user_id(role: str, now: datetime, rng: Optional[random.Random] = None) -> str:
    """Role tag + last 8 digits of epoch millis + 2 random digits.

    Not checked against existing ids; uniqueness rests on the timestamp and
    the random suffix.
    """

    prefix = "1" if role == Role.STUDENT.value else "2"
    stamp = str(epoch_millis(now))[-8:].rjust(8, "0")
    suffix = (rng or random).randrange(100)
    return f"{prefix}{stamp}{suffix:02d}"


def photo_key_for(user_id: str) -> str:
    return f"{user_id}.jpg"


@dataclass(frozen=True)
class LoginResult:
    user_id: str
    role: str


@dataclass(frozen=True)
class FaceVerification:
    matched: bool
    similarity: Optional[float] = None


class RegistrationService:
    """Use case: self-registration and administrator approval/rejection."""

    def __init__(
        self,
        users: UserRepository,
        faces: FaceIndex,
        photos: PhotoStore,
        *,
        duplicate_check_on_approve: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self._users = users
        self._faces = faces
        self._photos = photos
        self._duplicate_check_on_approve = bool(duplicate_check_on_approve)
        self._rng = rng

    def _search_existing_face(self, image: bytes) -> Optional[FaceMatch]:
        try:
            matches = self._faces.search_face(image, threshold=DUPLICATE_FACE_THRESHOLD, max_faces=1)
        except CollectionNotFoundError:
            return None
        except (ClientError, BotoCoreError) as exc:
            logger.warning("Face search error during registration: %s", exc)
            return None
        return matches[0] if matches else None

    def _raise_duplicate(self, match: FaceMatch) -> None:
        try:
            owner = self._users.get_by_id(match.external_id) if match.external_id else None
        except (ClientError, BotoCoreError) as exc:
            logger.warning("Lookup of duplicate face owner %s failed: %s", match.external_id, exc)
            raise ConflictError(
                "This face is already registered to another user. Each person can only register once."
            )

        label = (owner.name if owner else None) or match.external_id
        raise ConflictError(
            f"This face is already registered to another user: {label}. Each person can only register once."
        )

    def register(
        self,
        *,
        name: str,
        email: str,
        role: str,
        image_base64: str,
        now: Optional[datetime] = None,
    ) -> str:
        require_fields(
            {"name": name, "email": email, "role": role, "imageBase64": image_base64},
            "name",
            "email",
            "role",
            "imageBase64",
        )

        image = decode_image(image_base64)

        match = self._search_existing_face(image)
        if match:
            self._raise_duplicate(match)

        now = now or now_utc()
        user_id = new_user_id(role, now, self._rng)
        self._users.create(
            User(
                user_id=user_id,
                name=str(name).strip(),
                email=str(email).strip(),
                role=role,
                approved=False,
                face_image=image_base64,
                created_at=iso_timestamp(now),
            )
        )
        logger.info("Registration submitted for %s (%s)", user_id, role)
        return user_id

    def list_pending(self):
        return self._users.list_pending()

    def approve(self, *, user_id: str, password: str, now: Optional[datetime] = None) -> Optional[str]:
        """Store the photo, index the face and activate the account.

        Returns the face id assigned by the face-matching service. Approving
        the same user twice indexes the face twice.
        """

        require_fields({"userId": user_id, "password": password}, "userId", "password",
                       message="userId and password required")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not user.face_image:
            raise ValidationError("No face image for user")

        image = decode_image(user.face_image)

        if self._duplicate_check_on_approve:
            match = self._search_existing_face(image)
            if match and match.external_id != user_id:
                self._raise_duplicate(match)

        key = photo_key_for(user_id)
        self._photos.put_photo(key, image, content_type=PHOTO_CONTENT_TYPE)
        face_id = self._faces.index_face(image, external_id=user_id)

        now = now or now_utc()
        self._users.mark_approved(
            user_id,
            password=password,
            face_id=face_id,
            photo_key=key,
            approved_at=iso_timestamp(now),
        )
        logger.info("User %s approved, face indexed as %s", user_id, face_id)
        return face_id

    def reject(self, *, user_id: str, reason: Optional[str] = None, now: Optional[datetime] = None) -> None:
        require_fields({"userId": user_id}, "userId", message="userId required")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        now = now or now_utc()
        self._users.mark_rejected(
            user_id,
            reason=reason or DEFAULT_REJECTION_REASON,
            rejected_at=iso_timestamp(now),
        )
        logger.info("User %s rejected", user_id)


class AuthService:
    """Use case: password login and face re-verification."""

    def __init__(self, users: UserRepository, faces: FaceIndex, *, face_match_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD):
        self._users = users
        self._faces = faces
        self._threshold = float(face_match_threshold)

    def login(self, *, user_id: str, password: str, role: str) -> LoginResult:
        require_fields({"userId": user_id, "password": password, "role": role}, "userId", "password", "role")

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if not user.approved:
            raise AuthenticationError("User not approved")
        if user.password != password:
            raise AuthenticationError("Incorrect password")

        return LoginResult(user_id=user_id, role=role)

    def verify_face(self, *, user_id: str, image_base64: str) -> FaceVerification:
        require_fields({"userId": user_id, "imageBase64": image_base64}, "userId", "imageBase64")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        image = decode_image(image_base64)
        try:
            matches = self._faces.search_face(image, threshold=self._threshold, max_faces=1)
        except CollectionNotFoundError:
            return FaceVerification(matched=False)

        for match in matches:
            if match.external_id == user_id:
                return FaceVerification(matched=True, similarity=match.similarity)
        return FaceVerification(matched=False)


class UserService:
    """Use case: manage approved users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_approved(self) -> dict:
        users = self._users.list_approved()
        students = [u for u in users if u.role == Role.STUDENT.value]
        teachers = [u for u in users if u.role == Role.TEACHER.value]
        logger.debug("Found %d approved users: %d students, %d teachers", len(users), len(students), len(teachers))
        return {"students": students, "teachers": teachers, "total": len(users)}

    def list_teachers(self) -> list[dict]:
        teachers = self._users.list_approved(role=Role.TEACHER.value)
        return [
            {
                "userId": t.user_id,
                "name": t.name,
                "email": t.email,
                "role": t.role,
                "department": t.department or NOT_SPECIFIED,
                "specialization": t.specialization or NOT_SPECIFIED,
                "employeeId": t.employee_id or t.user_id,
            }
            for t in teachers
        ]

    def list_students(self):
        return self._users.list_approved(role=Role.STUDENT.value)

    def remove_user(self, user_id: str) -> None:
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        self._users.deactivate(user_id)
        logger.info("User %s removed", user_id)
