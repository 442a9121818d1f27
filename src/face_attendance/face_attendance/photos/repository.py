from __future__ import annotations

from typing import Protocol


class PhotoStore(Protocol):
    def put_photo(self, key: str, data: bytes, *, content_type: str) -> str:
        """Persist the photo; returns its storage URI."""

        raise NotImplementedError
