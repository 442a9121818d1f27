from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import ValidationError


def require_fields(payload: Mapping[str, Any], *names: str, message: str = "Missing fields") -> None:
    """Reject the payload unless every named field is present and truthy."""
    if any(not payload.get(name) for name in names):
        raise ValidationError(message)


def require_list(value: Any, field_name: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} must be a list")
    return value
