from __future__ import annotations

from .repository import PhotoStore


class S3PhotoStore(PhotoStore):
    def __init__(self, client, bucket: str):
        self._client = client
        self._bucket = bucket

    def put_photo(self, key: str, data: bytes, *, content_type: str) -> str:
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        return f"s3://{self._bucket}/{key}"
