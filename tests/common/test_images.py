from __future__ import annotations

import base64

import pytest

from src.face_attendance.face_attendance.common.images import decode_image
from src.face_attendance.face_attendance.core.exceptions import ValidationError

RAW = b"face-of-alice-in-a-longer-jpeg-payload"
ENCODED = base64.b64encode(RAW).decode()


def test_decode_plain_and_data_url():
    assert decode_image(ENCODED) == RAW
    assert decode_image("data:image/jpeg;base64," + ENCODED) == RAW


def test_decode_line_wrapped_base64():
    wrapped = "\n".join(ENCODED[i:i + 16] for i in range(0, len(ENCODED), 16))

    assert decode_image(wrapped + "\r\n") == RAW


def test_decode_without_padding():
    unpadded = base64.b64encode(b"face-of-bob").decode().rstrip("=")

    assert decode_image(unpadded) == b"face-of-bob"


@pytest.mark.parametrize("value", ["not base64!!", "", "   ", None, 42])
def test_decode_rejects_garbage(value):
    with pytest.raises(ValidationError):
        decode_image(value)
