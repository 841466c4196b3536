"""Post API schemas."""

from datetime import datetime

from pydantic import BaseModel

from cowconnect.application.dtos.post import VerificationView
from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.enums import MediaKind, Role, VerificationState
from cowconnect.domain.value_objects.core import Attestation
from cowconnect.schemas.common import ProfileSnapshotResponse


class MediaResponse(BaseModel):
    kind: MediaKind
    url: str


class AttestationResponse(BaseModel):
    """One expert's endorsement as shown next to a post."""

    attester_id: str
    role: Role
    name: str
    profile_pic: str = ""

    @classmethod
    def from_attestation(cls, attestation: Attestation) -> "AttestationResponse":
        return cls(
            attester_id=attestation.attester_id,
            role=attestation.role,
            name=attestation.name,
            profile_pic=attestation.profile_pic,
        )


class PostResponse(BaseModel):
    """Post as returned by the feed, detail and submission endpoints."""

    id: str
    owner_id: str
    owner_role: Role
    content: str
    media: MediaResponse | None = None
    tags: list[str]
    verification_state: VerificationState
    is_verified: bool
    attestations: list[AttestationResponse]
    owner_profile: ProfileSnapshotResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post: PostEntity) -> "PostResponse":
        return cls(
            id=post.id,
            owner_id=post.owner_id,
            owner_role=post.owner_role,
            content=post.content,
            media=(
                MediaResponse(kind=post.media.kind, url=post.media.url)
                if post.media
                else None
            ),
            tags=list(post.tags),
            verification_state=post.verification_state,
            is_verified=post.is_verified,
            attestations=[AttestationResponse.from_attestation(a) for a in post.attestations],
            owner_profile=ProfileSnapshotResponse.from_snapshot(post.owner_profile),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class VerificationResponse(BaseModel):
    """Verification ledger of a post as seen by the caller."""

    post_id: str
    is_verified: bool
    can_attest: bool
    verified_by_me: bool
    attestations: list[AttestationResponse]

    @classmethod
    def from_view(cls, view: VerificationView) -> "VerificationResponse":
        return cls(
            post_id=view.post_id,
            is_verified=view.is_verified,
            can_attest=view.can_attest,
            verified_by_me=view.verified_by_me,
            attestations=[AttestationResponse.from_attestation(a) for a in view.attestations],
        )
