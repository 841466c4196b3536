"""Infrastructure exceptions for storage operations.

Storage errors extend CowConnectException so presentation can map them
to HTTP responses consistently.
"""

from cowconnect.domain.exceptions import CowConnectException


class StorageException(CowConnectException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """File upload failed. The creation that needed it is aborted before any write."""

    retryable = True

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage reference escapes the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
