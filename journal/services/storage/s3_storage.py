"""
S3-compatible object storage (AWS S3, Cloudflare R2, MinIO).

boto3 is synchronous, so every call runs in the default executor.
"""

import asyncio
from functools import partial
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from journal.configs import settings
from journal.errors.upload import StorageError
from journal.monitoring import get_logger

logger = get_logger(__name__)


class S3Storage:
    """
    Object storage backed by an S3-compatible bucket.

    Objects are served from ``S3_PUBLIC_URL`` when set, otherwise from the
    endpoint's path-style bucket URL.
    """

    def __init__(self, client: Any | None = None) -> None:
        self.bucket = settings.S3_BUCKET_NAME
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT,
            region_name=settings.S3_REGION,
            aws_access_key_id=settings.S3_ACCESS_KEY_ID,
            aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY,
        )

    @property
    def base_url(self) -> str:
        if settings.S3_PUBLIC_URL:
            return settings.S3_PUBLIC_URL.rstrip("/")
        endpoint = (settings.S3_ENDPOINT or "https://s3.amazonaws.com").rstrip("/")
        return f"{endpoint}/{self.bucket}"

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/{key.lstrip('/')}"

    def key_from_url(self, url: str) -> str | None:
        prefix = f"{self.base_url}/"
        if not url.startswith(prefix):
            return None
        return url.removeprefix(prefix) or None

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload ``data`` to the bucket.

        Args:
            key: Object key
            data: Raw file bytes
            content_type: MIME type stored with the object

        Returns:
            str: Public URL of the object

        Raises:
            StorageError: If the bucket rejects the write
        """
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(
                    self.client.put_object,
                    Bucket=self.bucket,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                ),
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("S3 upload failed", key=key, bucket=self.bucket)
            raise StorageError from e
        return self.public_url(key)

    async def delete_object(self, key: str) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(
                None,
                partial(self.client.delete_object, Bucket=self.bucket, Key=key),
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("S3 delete failed", key=key, bucket=self.bucket)
            mssg = "Failed to delete file from storage"
            raise StorageError(mssg) from e
        return True
