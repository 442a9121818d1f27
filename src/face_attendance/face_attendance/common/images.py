from __future__ import annotations

import base64
import binascii
import re

from ..core.exceptions import ValidationError

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,")
_WHITESPACE = re.compile(r"\s+")


def decode_image(image_base64: str) -> bytes:
    """Decode a base64 photo.

    Accepts an optional data-URL prefix, line-wrapped input and missing
    trailing padding.
    """
    if not isinstance(image_base64, str):
        raise ValidationError("Invalid image encoding")
    payload = _WHITESPACE.sub("", _DATA_URL_PREFIX.sub("", image_base64.strip()))
    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Invalid image encoding")
    if not data:
        raise ValidationError("Invalid image encoding")
    return data
