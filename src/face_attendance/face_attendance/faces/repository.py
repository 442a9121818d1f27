from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import FaceMatch


class CollectionNotFoundError(Exception):
    """The face collection has not been created yet."""


class FaceIndex(Protocol):
    """Face-matching service bound to a single collection."""

    def create_collection(self) -> bool:
        """Create the collection; returns False when it already exists."""

        raise NotImplementedError

    def index_face(self, image: bytes, *, external_id: str) -> Optional[str]:
        """Index the face found in image; returns the service face id."""

        raise NotImplementedError

    def search_face(self, image: bytes, *, threshold: float, max_faces: int = 1) -> Sequence[FaceMatch]:
        """Raises CollectionNotFoundError when the collection is missing."""

        raise NotImplementedError
