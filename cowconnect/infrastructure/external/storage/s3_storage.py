"""S3-compatible object storage (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cowconnect.infrastructure.exceptions import StorageUploadError


class S3StorageService:
    """S3-compatible storage with server-side encryption.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "ap-south-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            public_base_url: URL prefix for objects (CDN); defaults to the bucket URL.
        """
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self.public_base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    def url_for(self, storage_ref: str) -> str:
        return f"{self.public_base_url}/{storage_ref.lstrip('/')}"

    async def upload(self, data: bytes, storage_ref: str, content_type: str) -> str:
        """Put the object and return its public URL."""

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )

        try:
            await asyncio.to_thread(_put)
        except (BotoCoreError, ClientError) as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return self.url_for(storage_ref)
