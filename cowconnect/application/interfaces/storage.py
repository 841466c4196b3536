"""Media storage port."""

from typing import Protocol


class IMediaStorage(Protocol):
    """Protocol for media storage backends (local, S3-compatible)."""

    async def upload(self, data: bytes, storage_ref: str, content_type: str) -> str:
        """Store data under storage_ref and return its resolved public URL.

        Raises StorageUploadError on failure.
        """
