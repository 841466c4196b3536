"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from cowconnect.infrastructure.exceptions import (
    StoragePermissionError,
    StorageUploadError,
)


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Files are served by the app under base_url (see main.create_app).
    """

    def __init__(self, storage_root: str, base_url: str | None = None) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Public URL prefix for stored files (e.g. http://localhost:8000/media).
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    def url_for(self, storage_ref: str) -> str:
        return f"{self.base_url}/{storage_ref.lstrip('/')}"

    async def upload(self, data: bytes, storage_ref: str, content_type: str) -> str:
        """Write data atomically (temp file + rename) and return its URL."""
        target_path = self._get_full_path(storage_ref)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                await aiofiles.os.replace(temp_path, target_path)
            finally:
                if await aiofiles.os.path.exists(temp_path):
                    await aiofiles.os.remove(temp_path)
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return self.url_for(storage_ref)
