from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.face_attendance.face_attendance.common.datetime_utils import iso_timestamp, now_utc
from src.face_attendance.face_attendance.container import build_container
from src.face_attendance.face_attendance.database.bootstrap import DEMO_PASSWORD, ensure_demo_teachers
from src.face_attendance.face_attendance.main import configure_logging


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        aws_config=settings.AWS_CONFIG,
        tables=settings.TABLES,
        s3_bucket=settings.S3_BUCKET,
        collection_id=settings.REKOGNITION_COLLECTION_ID,
    )
    result = ensure_demo_teachers(container.users_repo, created_at=iso_timestamp(now_utc()))

    created = [uid for uid, ok in result.items() if ok]
    print(f"OK: Seeded demo teachers -> {settings.TABLES['users']} (created={len(created)}, total={len(result)})")
    for user_id in result:
        print(f"  Teacher ID: {user_id}, Password: {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
