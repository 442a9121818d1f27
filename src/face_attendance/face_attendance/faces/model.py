from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class FaceMatch:
    """One similarity-ranked candidate returned by a face search."""

    face_id: Optional[str]
    external_id: Optional[str]
    similarity: float
