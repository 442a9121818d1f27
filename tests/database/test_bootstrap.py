from __future__ import annotations

from botocore.exceptions import EndpointConnectionError, NoCredentialsError

from fakes import InMemoryUsers, client_error
from src.face_attendance.face_attendance.database.bootstrap import DEMO_PASSWORD, ensure_demo_teachers, ensure_tables
from src.face_attendance.face_attendance.database.connection import TableNames
from src.face_attendance.face_attendance.users.model import User


class FakeDynamoClient:
    def __init__(self, existing=(), describe_errors=None, create_errors=None):
        self.existing = set(existing)
        self.describe_errors = describe_errors or {}
        self.create_errors = create_errors or {}
        self.created = []

    def describe_table(self, TableName):
        if TableName in self.describe_errors:
            raise self.describe_errors[TableName]
        if TableName not in self.existing:
            raise client_error("ResourceNotFoundException", "DescribeTable")
        return {"Table": {"TableName": TableName}}

    def create_table(self, **kwargs):
        name = kwargs["TableName"]
        if name in self.create_errors:
            raise self.create_errors[name]
        self.created.append(kwargs)


def test_ensure_tables_creates_only_missing():
    client = FakeDynamoClient(
        existing={"Users"},
        describe_errors={"Timetable": client_error("AccessDeniedException", "DescribeTable")},
        create_errors={"Attendance": client_error("ResourceInUseException", "CreateTable")},
    )

    result = ensure_tables(client, TableNames())

    assert result == {
        "Users": "exists",
        "AttendanceSessions": "created",
        "Attendance": "exists",
        "Timetable": "error",
    }
    (created,) = client.created
    assert created["KeySchema"] == [{"AttributeName": "sessionId", "KeyType": "HASH"}]
    assert created["BillingMode"] == "PAY_PER_REQUEST"


def test_ensure_demo_teachers_is_idempotent():
    existing = User(user_id="TEACH001", name="Someone Else", email="x@x.edu", role="teacher", approved=True)
    users = InMemoryUsers(existing)

    first = ensure_demo_teachers(users, created_at="2026-03-02T09:30:00+00:00")
    second = ensure_demo_teachers(users, created_at="2026-03-03T09:30:00+00:00")

    assert first == {"TEACH001": False, "TEACH002": True, "TEACH003": True, "TEACH004": True, "TEACH005": True}
    assert not any(second.values())
    assert users.users["TEACH001"].name == "Someone Else"
    assert users.users["TEACH002"].password == DEMO_PASSWORD
    assert users.users["TEACH002"].approved


class OfflineDynamoClient:
    def describe_table(self, TableName):
        raise EndpointConnectionError(endpoint_url="http://localhost:8000")

    def create_table(self, **kwargs):
        raise AssertionError("create_table must not be reached")


class NoCredentialsOnCreateClient(FakeDynamoClient):
    def create_table(self, **kwargs):
        raise NoCredentialsError()


def test_ensure_tables_unreachable_endpoint_is_non_fatal():
    result = ensure_tables(OfflineDynamoClient(), TableNames())

    assert set(result.values()) == {"error"}
    assert len(result) == 4


def test_ensure_tables_create_failure_without_credentials_is_non_fatal():
    result = ensure_tables(NoCredentialsOnCreateClient(existing={"Users"}), TableNames())

    assert result["Users"] == "exists"
    assert result["Timetable"] == "error"
