from __future__ import annotations

import logging
from typing import Dict, Iterable, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from ..core.enums import Role
from ..users.model import User
from .connection import TableNames
from .dynamo_base import error_code

logger = logging.getLogger(__name__)


def table_keys(tables: TableNames) -> Iterable[Tuple[str, str]]:
    """(table name, hash key) pairs for every table the service uses."""
    return (
        (tables.users, "userId"),
        (tables.sessions, "sessionId"),
        (tables.attendance, "attendanceId"),
        (tables.timetable, "timetableId"),
    )


def _table_definition(name: str, hash_key: str) -> dict:
    return {
        "TableName": name,
        "KeySchema": [{"AttributeName": hash_key, "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": hash_key, "AttributeType": "S"}],
        "BillingMode": "PAY_PER_REQUEST",
    }


def ensure_tables(client, tables: TableNames) -> Dict[str, str]:
    """Create missing tables; never raises.

    Returns table name -> "exists" | "created" | "error".
    """

    result: Dict[str, str] = {}
    for name, hash_key in table_keys(tables):
        try:
            client.describe_table(TableName=name)
            logger.info("Table %s already exists", name)
            result[name] = "exists"
            continue
        except ClientError as exc:
            if error_code(exc) != "ResourceNotFoundException":
                logger.error("Error checking table %s: %s", name, exc)
                result[name] = "error"
                continue
        except BotoCoreError as exc:
            # Unreachable endpoint or missing credentials.
            logger.error("Error checking table %s: %s", name, exc)
            result[name] = "error"
            continue

        try:
            client.create_table(**_table_definition(name, hash_key))
            logger.info("Table %s created", name)
            result[name] = "created"
        except ClientError as exc:
            if error_code(exc) == "ResourceInUseException":
                logger.info("Table %s already being created", name)
                result[name] = "exists"
            else:
                logger.error("Error creating table %s: %s", name, exc)
                result[name] = "error"
        except BotoCoreError as exc:
            logger.error("Error creating table %s: %s", name, exc)
            result[name] = "error"
    return result


DEMO_TEACHERS = (
    ("TEACH001", "Dr. Sarah Johnson", "sarah.johnson@university.edu", "Computer Science", "Machine Learning", "EMP001"),
    ("TEACH002", "Prof. Michael Chen", "michael.chen@university.edu", "Mathematics", "Statistics", "EMP002"),
    ("TEACH003", "Dr. Emily Rodriguez", "emily.rodriguez@university.edu", "Physics", "Quantum Mechanics", "EMP003"),
    ("TEACH004", "Prof. David Wilson", "david.wilson@university.edu", "Chemistry", "Organic Chemistry", "EMP004"),
    ("TEACH005", "Dr. Lisa Thompson", "lisa.thompson@university.edu", "Biology", "Molecular Biology", "EMP005"),
)
DEMO_PASSWORD = "password123"


def ensure_demo_teachers(users, *, created_at: str) -> Dict[str, bool]:
    """Insert approved demo teachers, skipping ids that already exist.

    Returns user id -> True if created.
    """

    result: Dict[str, bool] = {}
    for user_id, name, email, department, specialization, employee_id in DEMO_TEACHERS:
        created = users.create_if_absent(
            User(
                user_id=user_id,
                name=name,
                email=email,
                role=Role.TEACHER.value,
                approved=True,
                password=DEMO_PASSWORD,
                department=department,
                specialization=specialization,
                employee_id=employee_id,
                created_at=created_at,
            )
        )
        if created:
            logger.info("Created teacher %s (%s)", name, user_id)
        else:
            logger.info("Teacher already exists: %s (%s)", name, user_id)
        result[user_id] = created
    return result
