from __future__ import annotations

import logging
from typing import List, Optional

from botocore.exceptions import ClientError

from ..database.dynamo_base import error_code
from .model import FaceMatch
from .repository import CollectionNotFoundError, FaceIndex

logger = logging.getLogger(__name__)


class RekognitionFaceIndex(FaceIndex):
    def __init__(self, client, collection_id: str):
        self._client = client
        self._collection_id = collection_id

    def create_collection(self) -> bool:
        try:
            self._client.create_collection(CollectionId=self._collection_id)
        except ClientError as exc:
            if error_code(exc) == "ResourceAlreadyExistsException":
                logger.info("Rekognition collection %s already exists", self._collection_id)
                return False
            raise
        logger.info("Rekognition collection %s created", self._collection_id)
        return True

    def index_face(self, image: bytes, *, external_id: str) -> Optional[str]:
        resp = self._client.index_faces(
            CollectionId=self._collection_id,
            Image={"Bytes": image},
            ExternalImageId=external_id,
            DetectionAttributes=["DEFAULT"],
        )
        records = resp.get("FaceRecords") or []
        if not records:
            return None
        return records[0].get("Face", {}).get("FaceId")

    def search_face(self, image: bytes, *, threshold: float, max_faces: int = 1) -> List[FaceMatch]:
        try:
            resp = self._client.search_faces_by_image(
                CollectionId=self._collection_id,
                Image={"Bytes": image},
                MaxFaces=int(max_faces),
                FaceMatchThreshold=float(threshold),
            )
        except ClientError as exc:
            if error_code(exc) == "ResourceNotFoundException":
                raise CollectionNotFoundError(self._collection_id) from exc
            raise

        return [
            FaceMatch(
                face_id=m.get("Face", {}).get("FaceId"),
                external_id=m.get("Face", {}).get("ExternalImageId"),
                similarity=float(m.get("Similarity", 0.0)),
            )
            for m in resp.get("FaceMatches") or []
        ]
