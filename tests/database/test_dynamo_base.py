from __future__ import annotations

from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

from fakes import FakeTable, client_error
from src.face_attendance.face_attendance.database.dynamo_base import (
    get_item,
    normalize_dynamo_value,
    put_item,
    put_item_if_absent,
    scan_all,
    update_attributes,
)
from src.face_attendance.face_attendance.users.dynamo_user_repository import DynamoUserRepository


def test_normalize_decimals_recursively():
    raw = {"expireAt": Decimal("1700000600"), "score": Decimal("99.5"), "tags": [Decimal("2"), {"n": Decimal("1.0")}]}

    assert normalize_dynamo_value(raw) == {"expireAt": 1700000600, "score": 99.5, "tags": [2, {"n": 1}]}
    assert isinstance(normalize_dynamo_value(Decimal("1.0")), int)


def test_get_item_missing_returns_none():
    assert get_item(FakeTable(), {"userId": "x"}) is None


def test_put_item_drops_none_values():
    table = FakeTable()

    put_item(table, {"userId": "1", "faceId": None, "approved": False})

    assert table.calls == [("put_item", {"Item": {"userId": "1", "approved": False}})]


def test_put_if_absent_reports_existing_key():
    table = FakeTable(error=client_error("ConditionalCheckFailedException", "PutItem"))

    assert put_item_if_absent(table, {"userId": "TEACH001"}, key_name="userId") is False
    _, kwargs = table.calls[0]
    assert kwargs["ConditionExpression"] == "attribute_not_exists(#k)"
    assert kwargs["ExpressionAttributeNames"] == {"#k": "userId"}


def test_put_if_absent_propagates_other_errors():
    table = FakeTable(error=client_error("ValidationException", "PutItem"))

    with pytest.raises(ClientError):
        put_item_if_absent(table, {"userId": "TEACH001"}, key_name="userId")


def test_update_attributes_builds_conditional_set():
    table = FakeTable()

    assert update_attributes(table, {"timetableId": "T1"}, {"isActive": False}) is True

    _, kwargs = table.calls[0]
    assert kwargs["UpdateExpression"] == "SET #a0 = :v0"
    assert kwargs["ExpressionAttributeNames"] == {"#a0": "isActive", "#key": "timetableId"}
    assert kwargs["ExpressionAttributeValues"] == {":v0": False}
    assert kwargs["ConditionExpression"] == "attribute_exists(#key)"


def test_update_attributes_missing_item():
    failing = FakeTable(error=client_error("ConditionalCheckFailedException", "UpdateItem"))

    assert update_attributes(failing, {"timetableId": "nope"}, {"isActive": False}) is False


def test_update_attributes_unconditional():
    table = FakeTable()

    update_attributes(table, {"userId": "1"}, {"approved": True, "password": "pw"}, must_exist=False)

    _, kwargs = table.calls[0]
    assert "ConditionExpression" not in kwargs
    assert kwargs["UpdateExpression"] == "SET #a0 = :v0, #a1 = :v1"


def test_scan_all_follows_pagination():
    table = FakeTable(
        pages=[
            {"Items": [{"n": Decimal("1")}], "LastEvaluatedKey": {"id": "a"}},
            {"Items": [{"n": Decimal("2")}]},
        ]
    )

    assert scan_all(table) == [{"n": 1}, {"n": 2}]
    assert table.calls[0] == ("scan", {})
    assert table.calls[1] == ("scan", {"ExclusiveStartKey": {"id": "a"}})


def test_user_repository_maps_items():
    table = FakeTable(
        items={
            "TEACH001": {
                "userId": "TEACH001",
                "name": "Dr. Sarah Johnson",
                "email": "s@x.edu",
                "role": "teacher",
                "approved": True,
                "employeeId": "EMP001",
            }
        }
    )
    repo = DynamoUserRepository(table)

    user = repo.get_by_id("TEACH001")

    assert user.name == "Dr. Sarah Johnson"
    assert user.approved and user.active
    assert user.employee_id == "EMP001"
    assert repo.get_by_id("missing") is None
