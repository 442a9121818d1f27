from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.face_attendance.face_attendance.container import build_container
from src.face_attendance.face_attendance.main import bootstrap_aws, configure_logging


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        aws_config=settings.AWS_CONFIG,
        tables=settings.TABLES,
        s3_bucket=settings.S3_BUCKET,
        collection_id=settings.REKOGNITION_COLLECTION_ID,
    )
    bootstrap_aws(container)
    print(
        "OK: AWS resources ready -> "
        f"region={settings.AWS_CONFIG.get('region')} tables={', '.join(settings.TABLES.values())} "
        f"collection={settings.REKOGNITION_COLLECTION_ID}"
    )


if __name__ == "__main__":
    main()
