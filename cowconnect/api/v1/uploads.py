"""Convert multipart uploads into application MediaUpload values."""

from fastapi import UploadFile

from cowconnect.application.dtos.post import MediaUpload
from cowconnect.domain.enums import MediaKind
from cowconnect.domain.exceptions import ValidationException

DOCUMENT_TYPES = frozenset({"application/pdf"})


def media_kind_for(content_type: str, field: str = "media") -> MediaKind:
    """Map a MIME type to the media kind a post may carry.

    Raises:
        ValidationException: For anything other than images, videos or PDFs.
    """
    if content_type.startswith("image/"):
        return MediaKind.IMAGE
    if content_type.startswith("video/"):
        return MediaKind.VIDEO
    if content_type in DOCUMENT_TYPES:
        return MediaKind.DOCUMENT
    raise ValidationException(f"Unsupported media type: {content_type}", field=field)


async def read_upload(
    file: UploadFile | None, *, images_only: bool = False, field: str = "media"
) -> MediaUpload | None:
    """Read an optional upload fully into memory (size is capped by middleware)."""
    if file is None or not file.filename:
        return None
    content_type = (file.content_type or "application/octet-stream").lower()
    kind = media_kind_for(content_type, field)
    if images_only and kind is not MediaKind.IMAGE:
        raise ValidationException("An image file is required", field=field)
    data = await file.read()
    if not data:
        raise ValidationException("Uploaded file is empty", field=field)
    return MediaUpload(
        kind=kind, data=data, filename=file.filename, content_type=content_type
    )
