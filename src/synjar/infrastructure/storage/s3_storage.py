"""S3-compatible storage provider (AWS S3, Backblaze B2, MinIO)."""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from synjar.application.ports import UploadResult
from synjar.infrastructure.storage.keys import build_object_key

logger = logging.getLogger(__name__)


class ObjectStorageError(RuntimeError):
    """Raised when the object store rejects an operation."""


class S3StorageProvider:
    """Stores uploads in one bucket; boto3 calls run in a worker thread."""

    def __init__(
        self,
        bucket_name: str,
        region: str,
        endpoint_url: str | None = None,
        client: object | None = None,
    ) -> None:
        if not bucket_name:
            raise ObjectStorageError("S3 storage requested but no bucket is configured")
        self._bucket = bucket_name
        self._endpoint_url = endpoint_url
        self._client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    def _object_url(self, key: str) -> str:
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"
        return f"https://{self._bucket}.s3.amazonaws.com/{key}"

    async def upload(self, data: bytes, filename: str, mime_type: str) -> UploadResult:
        key = build_object_key(filename)

        def put() -> None:
            try:
                self._client.put_object(
                    Bucket=self._bucket,
                    Key=key,
                    Body=data,
                    ContentType=mime_type,
                )
            except (ClientError, BotoCoreError) as exc:
                raise ObjectStorageError(f"S3 upload failed: {exc}") from exc

        await asyncio.to_thread(put)
        return UploadResult(url=self._object_url(key), key=key, size=len(data))

    async def delete(self, key: str) -> None:
        def remove() -> None:
            try:
                self._client.delete_object(Bucket=self._bucket, Key=key)
            except (ClientError, BotoCoreError) as exc:
                raise ObjectStorageError(f"S3 delete failed: {exc}") from exc

        await asyncio.to_thread(remove)

    async def get_signed_url(self, key: str, expires_in_seconds: int = 3600) -> str:
        def presign() -> str:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._bucket, "Key": key},
                ExpiresIn=expires_in_seconds,
            )

        return await asyncio.to_thread(presign)
