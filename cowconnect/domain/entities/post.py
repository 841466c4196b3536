"""Post domain entity.

A post is a community content item: text, at most one media reference,
category tags and the expert attestations collected so far.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from cowconnect.domain.enums import Role, VerificationState
from cowconnect.domain.exceptions import ValidationException
from cowconnect.domain.value_objects.core import Attestation, MediaRef, ProfileSnapshot


@dataclass(frozen=True)
class PostEntity:
    """Immutable domain entity for a post. Validation runs on construction.

    The single optional ``media`` field is what keeps "at most one of image,
    video or document" true by construction.
    """

    id: str
    owner_id: str
    owner_role: Role
    content: str
    media: MediaRef | None
    tags: tuple[str, ...]
    verification_state: VerificationState
    attestations: tuple[Attestation, ...]
    owner_profile: ProfileSnapshot
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate post business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Post ID is required", field="id")
        if not self.owner_id:
            raise ValidationException("Post must have an owner", field="owner_id")
        if not self.content and self.media is None:
            raise ValidationException(
                "Post needs text or a media attachment", field="content"
            )
        ids = [a.attester_id for a in self.attestations]
        if len(ids) != len(set(ids)):
            raise ValidationException(
                "An expert can attest a post only once", field="attestations"
            )
        if self.attestations and self.verification_state is not VerificationState.VERIFIED:
            raise ValidationException(
                "Attested posts must be verified", field="verification_state"
            )

    @property
    def is_verified(self) -> bool:
        return bool(self.attestations)

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.owner_id == user_id

    def has_attestation_from(self, user_id: str | None) -> bool:
        """Return whether user_id already attested this post."""
        return any(a.attester_id == user_id for a in self.attestations)

    def with_attestation(self, attestation: Attestation) -> "PostEntity":
        """Return the post after appending attestation (no-op if already present)."""
        if self.has_attestation_from(attestation.attester_id):
            return self
        return replace(
            self,
            attestations=(*self.attestations, attestation),
            verification_state=VerificationState.VERIFIED,
        )
