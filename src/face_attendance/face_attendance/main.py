from __future__ import annotations

import importlib
import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers
from .container import Container, build_container
from .database.bootstrap import ensure_tables
from .timetable.controller import register as register_timetable
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    # botocore logs every request at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)


def bootstrap_aws(container: Container) -> None:
    """Create the face collection and missing tables; failures are logged only."""
    try:
        container.face_index.create_collection()
    except (ClientError, BotoCoreError) as exc:
        logger.error("Create collection error (non-fatal): %s", exc)

    if container.clients is not None and container.tables is not None:
        ensure_tables(container.clients.dynamodb_client(), container.tables)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_CONTENT_LENGTH", 10 * 1024 * 1024))
    app.config["PORT"] = int(getattr(settings, "PORT", 5002))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    logger.debug("settings=%s", settings_module)

    if container is None:
        container = build_container(
            aws_config=getattr(settings, "AWS_CONFIG"),
            tables=getattr(settings, "TABLES"),
            s3_bucket=getattr(settings, "S3_BUCKET"),
            collection_id=getattr(settings, "REKOGNITION_COLLECTION_ID"),
            face_match_threshold=float(getattr(settings, "FACE_MATCH_THRESHOLD", 75)),
            duplicate_check_on_approve=bool(getattr(settings, "DUPLICATE_CHECK_ON_APPROVE", False)),
        )
        if bool(getattr(settings, "AUTO_INIT_AWS", False)):
            bootstrap_aws(container)

    CORS(app)
    register_error_handlers(app)

    @app.route("/", endpoint="index")
    def index():
        return "Face Recognition Attendance Backend"

    register_users(app, container)
    register_attendance(app, container)
    register_timetable(app, container)

    return app
