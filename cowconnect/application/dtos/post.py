"""DTOs for post use cases."""

from dataclasses import dataclass

from cowconnect.domain.enums import MediaKind
from cowconnect.domain.value_objects.core import Attestation


@dataclass(frozen=True)
class MediaUpload:
    """A file attached to a submission, before it is uploaded to storage."""

    kind: MediaKind
    data: bytes
    filename: str
    content_type: str


@dataclass(frozen=True)
class SubmitPostCommand:
    """Input for submitting a new post. At most one media file."""

    content: str
    media: MediaUpload | None = None


@dataclass(frozen=True)
class EditPostCommand:
    """Input for editing a post.

    media replaces the current attachment; remove_media drops it; with
    neither, the current attachment is kept.
    """

    content: str
    media: MediaUpload | None = None
    remove_media: bool = False


@dataclass(frozen=True)
class VerificationView:
    """What a caller may see of a post's verification ledger."""

    post_id: str
    is_verified: bool
    can_attest: bool
    verified_by_me: bool
    attestations: tuple[Attestation, ...]
