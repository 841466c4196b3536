"""Media storage backends for post attachments and workshop thumbnails.

The local backend needs only aiofiles. The s3 backend is imported lazily so
boto3 is required only when STORAGE_BACKEND=s3.
"""

from cowconnect.infrastructure.external.storage.factory import create_media_storage

__all__ = ["create_media_storage"]
