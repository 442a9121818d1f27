from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.dynamo_attendance_repository import DynamoAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_FACE_MATCH_THRESHOLD
from .database.connection import AWSClients, AWSConfig, TableNames
from .faces.rekognition_face_index import RekognitionFaceIndex
from .faces.repository import FaceIndex
from .photos.repository import PhotoStore
from .photos.s3_photo_store import S3PhotoStore
from .sessions.dynamo_session_repository import DynamoSessionRepository
from .sessions.repository import SessionRepository
from .timetable.dynamo_timetable_repository import DynamoTimetableRepository
from .timetable.repository import TimetableRepository
from .timetable.service import TimetableService
from .users.dynamo_user_repository import DynamoUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, RegistrationService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    timetable_repo: TimetableRepository
    face_index: FaceIndex
    photo_store: PhotoStore

    registration_service: RegistrationService
    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    timetable_service: TimetableService

    clients: Optional[AWSClients] = None
    tables: Optional[TableNames] = None


def assemble(
    *,
    users_repo: UserRepository,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    timetable_repo: TimetableRepository,
    face_index: FaceIndex,
    photo_store: PhotoStore,
    face_match_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
    duplicate_check_on_approve: bool = False,
    clients: Optional[AWSClients] = None,
    tables: Optional[TableNames] = None,
) -> Container:
    """Wire services onto already-built repositories and adapters."""

    auth_service = AuthService(users_repo, face_index, face_match_threshold=face_match_threshold)
    registration_service = RegistrationService(
        users_repo,
        face_index,
        photo_store,
        duplicate_check_on_approve=duplicate_check_on_approve,
    )
    user_service = UserService(users_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        sessions_repo,
        users_repo,
        face_verifier=auth_service,
    )
    timetable_service = TimetableService(timetable_repo, users_repo)

    return Container(
        users_repo=users_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        timetable_repo=timetable_repo,
        face_index=face_index,
        photo_store=photo_store,
        registration_service=registration_service,
        auth_service=auth_service,
        user_service=user_service,
        attendance_service=attendance_service,
        timetable_service=timetable_service,
        clients=clients,
        tables=tables,
    )


def build_container(
    *,
    aws_config: dict,
    tables: dict,
    s3_bucket: str,
    collection_id: str,
    face_match_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
    duplicate_check_on_approve: bool = False,
) -> Container:
    config = AWSConfig(
        region=str(aws_config.get("region", "us-east-1")),
        endpoint_url=aws_config.get("endpoint_url") or None,
        access_key_id=aws_config.get("access_key_id") or None,
        secret_access_key=aws_config.get("secret_access_key") or None,
    )
    table_names = TableNames(**tables)
    clients = AWSClients(config)

    return assemble(
        users_repo=DynamoUserRepository(clients.table(table_names.users)),
        sessions_repo=DynamoSessionRepository(clients.table(table_names.sessions)),
        attendance_repo=DynamoAttendanceRepository(clients.table(table_names.attendance)),
        timetable_repo=DynamoTimetableRepository(clients.table(table_names.timetable)),
        face_index=RekognitionFaceIndex(clients.rekognition(), collection_id),
        photo_store=S3PhotoStore(clients.s3(), s3_bucket),
        face_match_threshold=face_match_threshold,
        duplicate_check_on_approve=duplicate_check_on_approve,
        clients=clients,
        tables=table_names,
    )
