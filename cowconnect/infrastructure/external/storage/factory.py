"""Builds the media storage backend selected by STORAGE_BACKEND."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cowconnect.application.interfaces.storage import IMediaStorage
from cowconnect.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from cowconnect.core.config import Settings

logger = get_logger(__name__)


def _local(s: "Settings") -> IMediaStorage:
    from cowconnect.infrastructure.external.storage.local_storage import (
        LocalStorageService,
    )

    return LocalStorageService(storage_root=s.storage_root, base_url=s.storage_base_url)


def _s3(s: "Settings") -> IMediaStorage:
    # boto3 ships in the optional "storage" extra.
    try:
        from cowconnect.infrastructure.external.storage.s3_storage import (
            S3StorageService,
        )
    except ImportError as e:
        raise ValueError(
            "The s3 media backend needs boto3: pip install 'cowconnect[storage]'"
        ) from e
    return S3StorageService(
        bucket=s.s3_bucket,
        region=s.s3_region,
        endpoint_url=s.s3_endpoint_url,
        access_key=s.s3_access_key,
        secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
        public_base_url=s.s3_public_base_url,
    )


_BACKENDS = {"local": _local, "s3": _s3}


def create_media_storage(settings: "Settings | None" = None) -> IMediaStorage:
    """Return the media backend for settings (defaults to get_settings()).

    Settings already reject unknown backends and an s3 backend without a
    bucket, so only a missing boto3 install can fail here.

    Raises:
        ValueError: The s3 backend is selected but boto3 is not installed.
    """
    from cowconnect.core.config import get_settings

    s = settings or get_settings()
    storage = _BACKENDS[s.storage_backend](s)
    logger.info("Media storage backend: %s", s.storage_backend)
    return storage
