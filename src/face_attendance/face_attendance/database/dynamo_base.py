from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from botocore.exceptions import ClientError


def error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def normalize_dynamo_value(value: Any) -> Any:
    """Normalize values returned by the DynamoDB resource API.

    boto3 returns every number as Decimal:
    - integral values become int
    - everything else becomes float
    Lists and maps are normalized recursively.
    """

    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, list):
        return [normalize_dynamo_value(v) for v in value]
    if isinstance(value, dict):
        return {k: normalize_dynamo_value(v) for k, v in value.items()}
    return value


def get_item(table, key: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    resp = table.get_item(Key=dict(key))
    item = resp.get("Item")
    return normalize_dynamo_value(item) if item else None


def put_item(table, item: Mapping[str, Any]) -> None:
    table.put_item(Item={k: v for k, v in item.items() if v is not None})


def put_item_if_absent(table, item: Mapping[str, Any], *, key_name: str) -> bool:
    """Conditional put; returns False when an item with the same key exists."""
    try:
        table.put_item(
            Item={k: v for k, v in item.items() if v is not None},
            ConditionExpression="attribute_not_exists(#k)",
            ExpressionAttributeNames={"#k": key_name},
        )
    except ClientError as exc:
        if error_code(exc) == "ConditionalCheckFailedException":
            return False
        raise
    return True


def update_attributes(
    table,
    key: Mapping[str, Any],
    values: Mapping[str, Any],
    *,
    must_exist: bool = True,
) -> bool:
    """SET the given attributes on one item.

    With must_exist, the update is conditional on the key being present and
    returns False instead of creating a sparse item.
    """

    names: Dict[str, str] = {}
    attr_values: Dict[str, Any] = {}
    clauses: List[str] = []
    for i, (name, value) in enumerate(values.items()):
        names[f"#a{i}"] = name
        attr_values[f":v{i}"] = value
        clauses.append(f"#a{i} = :v{i}")

    kwargs: Dict[str, Any] = {
        "Key": dict(key),
        "UpdateExpression": "SET " + ", ".join(clauses),
        "ExpressionAttributeNames": names,
        "ExpressionAttributeValues": attr_values,
    }
    if must_exist:
        key_name = next(iter(key))
        names["#key"] = key_name
        kwargs["ConditionExpression"] = "attribute_exists(#key)"

    try:
        table.update_item(**kwargs)
    except ClientError as exc:
        if must_exist and error_code(exc) == "ConditionalCheckFailedException":
            return False
        raise
    return True


def scan_all(table, filter_expression=None) -> List[Dict[str, Any]]:
    """Scan a whole table, following pagination, optionally filtered."""
    kwargs: Dict[str, Any] = {}
    if filter_expression is not None:
        kwargs["FilterExpression"] = filter_expression

    items: List[Dict[str, Any]] = []
    while True:
        resp = table.scan(**kwargs)
        items.extend(normalize_dynamo_value(i) for i in resp.get("Items", []))
        last_key = resp.get("LastEvaluatedKey")
        if not last_key:
            return items
        kwargs["ExclusiveStartKey"] = last_key
