import os


def env_flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))


class Config:
    """Settings shared by every environment, read from the process env."""

    AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
    AWS_ENDPOINT_URL = os.environ.get("AWS_ENDPOINT_URL") or None

    USERS_TABLE = os.environ.get("DYNAMODB_USERS_TABLE", "Users")
    SESSIONS_TABLE = os.environ.get("DYNAMODB_SESSIONS_TABLE", "AttendanceSessions")
    ATTENDANCE_TABLE = os.environ.get("DYNAMODB_ATTENDANCE_TABLE", "Attendance")
    TIMETABLE_TABLE = os.environ.get("DYNAMODB_TIMETABLE_TABLE", "Timetable")

    S3_BUCKET = os.environ.get("S3_BUCKET", "face-recognition-users")
    REKOGNITION_COLLECTION_ID = os.environ.get("REKOGNITION_COLLECTION_ID", "attendance-users")
    FACE_MATCH_THRESHOLD = float(os.environ.get("FACE_MATCH_THRESHOLD", "75"))

    # Off by default: approval indexes the face without a second duplicate search.
    DUPLICATE_CHECK_ON_APPROVE = env_flag("DUPLICATE_CHECK_ON_APPROVE", "0")

    PORT = int(os.environ.get("PORT", "5002"))
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024


AWS_CONFIG = {
    "region": Config.AWS_REGION,
    "endpoint_url": Config.AWS_ENDPOINT_URL,
    "access_key_id": os.environ.get("AWS_ACCESS_KEY_ID"),
    "secret_access_key": os.environ.get("AWS_SECRET_ACCESS_KEY"),
}

TABLES = {
    "users": Config.USERS_TABLE,
    "sessions": Config.SESSIONS_TABLE,
    "attendance": Config.ATTENDANCE_TABLE,
    "timetable": Config.TIMETABLE_TABLE,
}
