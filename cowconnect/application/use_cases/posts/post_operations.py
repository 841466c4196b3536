"""Post operations: submission pipeline (gate, categorizer, writer), edit, delete and queries."""

from __future__ import annotations

import base64
import os
from dataclasses import replace

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.post import (
    EditPostCommand,
    MediaUpload,
    SubmitPostCommand,
)
from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.application.interfaces.repositories import (
    IPostRepository,
    IProfileRepository,
    ITransactionalWriter,
)
from cowconnect.application.interfaces.services import ICategorizer, IContentGate
from cowconnect.application.interfaces.storage import IMediaStorage
from cowconnect.application.services.content_gate import VerdictKind
from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.enums import Role, VerificationState
from cowconnect.domain.exceptions import (
    AuthorizationException,
    ContentRejectedException,
    ResourceNotFoundException,
    UpstreamUnavailableException,
    ValidationException,
)
from cowconnect.domain.value_objects.core import MediaPayload, MediaRef
from cowconnect.shared.telemetry.logging import get_logger
from cowconnect.shared.utils.datetime import utc_now
from cowconnect.shared.utils.generators import generate_cuid
from cowconnect.shared.utils.sanitization import sanitize_text

logger = get_logger(__name__)


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename(filename or "")
    name = name.replace("\x00", "").strip(". ")
    return name or "upload"


def storage_ref_for(prefix: str, entity_id: str, upload: MediaUpload) -> str:
    """Storage key for an upload: <prefix>/<entity id>/<kind>/<filename>."""
    return f"{prefix}/{entity_id}/{upload.kind.value}/{_sanitize_filename(upload.filename)}"


def to_payload(upload: MediaUpload | None) -> MediaPayload | None:
    """Base64-encode an upload for the classifier."""
    if upload is None or not upload.data:
        return None
    return MediaPayload(
        data_base64=base64.b64encode(upload.data).decode("ascii"),
        mime_type=upload.content_type,
    )


class PostService:
    """Submits, edits, deletes and lists community posts.

    Submission is strictly sequential: the gate decides, then the categorizer
    tags, then the writer commits the post and the owner's posts index in one
    batch. Nothing is written unless the gate accepted the content.
    """

    def __init__(
        self,
        post_repo: IPostRepository,
        profile_repo: IProfileRepository,
        writer: ITransactionalWriter,
        gate: IContentGate,
        categorizer: ICategorizer,
        storage: IMediaStorage,
    ) -> None:
        self.post_repo = post_repo
        self.profile_repo = profile_repo
        self.writer = writer
        self.gate = gate
        self.categorizer = categorizer
        self.storage = storage

    async def submit(self, identity: Identity, command: SubmitPostCommand) -> PostEntity:
        """Run a new post through the gate and persist it.

        Raises:
            AuthenticationException: Caller is anonymous.
            ValidationException: No text and no media.
            UpstreamUnavailableException: The gate could not decide (retryable).
            ContentRejectedException: The gate judged the post irrelevant.
            ResourceNotFoundException: Caller has no profile.
            StorageUploadError: Media upload failed; nothing was written.
            PersistenceFailureException: The commit was aborted (retryable).
        """
        user_id = identity.require_user_id()
        content = sanitize_text(command.content)
        if not content and command.media is None:
            raise ValidationException("Post needs text or a media attachment", field="content")

        payload = to_payload(command.media)
        verdict = await self.gate.evaluate(content, payload)
        if verdict.kind is VerdictKind.UNAVAILABLE:
            raise UpstreamUnavailableException(verdict.reason)
        if verdict.kind is VerdictKind.REJECTED:
            logger.info("Post by %s rejected by content gate", user_id)
            raise ContentRejectedException()

        tags = await self.categorizer.categorize(content, payload)

        profile = await self._owner_profile(identity, user_id)
        post_id = generate_cuid()
        media = await self._upload(post_id, command.media) if command.media else None

        now = utc_now()
        post = PostEntity(
            id=post_id,
            owner_id=user_id,
            owner_role=profile.role,
            content=content,
            media=media,
            tags=tuple(tags),
            verification_state=(
                VerificationState.PENDING
                if verdict.needs_review
                else VerificationState.UNVERIFIED
            ),
            attestations=(),
            owner_profile=profile.snapshot(),
            created_at=now,
            updated_at=now,
        )
        await self.writer.create_post(post, profile.collection)
        logger.info(
            "Post %s created by %s (state=%s, tags=%s)",
            post_id,
            user_id,
            post.verification_state.value,
            len(post.tags),
        )
        return post

    async def edit(
        self, identity: Identity, post_id: str, command: EditPostCommand
    ) -> PostEntity:
        """Replace body and media of the caller's own post.

        Tags, verification state and attestations are preserved. Edits are
        not re-gated.
        """
        user_id = identity.require_user_id()
        post = await self._owned_post(user_id, post_id, "edit")

        content = sanitize_text(command.content)
        media = post.media
        if command.remove_media:
            media = None
        if command.media is not None:
            media = await self._upload(post_id, command.media)

        updated = replace(post, content=content, media=media, updated_at=utc_now())
        await self.writer.update_post(updated)
        logger.info("Post %s edited by %s", post_id, user_id)
        return updated

    async def delete(self, identity: Identity, post_id: str) -> None:
        """Delete the caller's own post and retract it from their posts index."""
        user_id = identity.require_user_id()
        post = await self._owned_post(user_id, post_id, "delete")
        await self.writer.delete_post(
            post.id, post.owner_id, post.owner_role.profile_collection
        )
        logger.info("Post %s deleted by %s", post_id, user_id)

    async def get_post(self, post_id: str) -> PostEntity:
        """Return post by id or raise ResourceNotFoundException."""
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        return post

    async def list_posts(self, limit: int = 50) -> list[PostEntity]:
        return await self.post_repo.list_recent(limit=limit)

    async def list_my_posts(self, identity: Identity, limit: int = 50) -> list[PostEntity]:
        user_id = identity.require_user_id()
        return await self.post_repo.list_by_owner(user_id, limit=limit)

    async def list_filtered_posts(
        self, tags: list[str], role: Role | None = None, limit: int = 50
    ) -> list[PostEntity]:
        """Return posts carrying any of tags and/or owned by role; all posts when both are empty."""
        clean = _normalize_tags(tags)
        if not clean and role is None:
            return await self.post_repo.list_recent(limit=limit)
        return await self.post_repo.list_filtered(clean, role, limit=limit)

    async def _owner_profile(self, identity: Identity, user_id: str) -> ProfileResult:
        if identity.role is not None:
            profile = await self.profile_repo.get_profile(
                user_id, identity.role.profile_collection
            )
        else:
            profile = await self.profile_repo.find_profile(user_id)
        if profile is None:
            raise ResourceNotFoundException("profile", user_id)
        return profile

    async def _owned_post(self, user_id: str, post_id: str, action: str) -> PostEntity:
        post = await self.get_post(post_id)
        if not post.is_owned_by(user_id):
            raise AuthorizationException("post", action)
        return post

    async def _upload(self, post_id: str, upload: MediaUpload) -> MediaRef:
        url = await self.storage.upload(
            upload.data,
            storage_ref_for("posts", post_id, upload),
            upload.content_type,
        )
        return MediaRef(kind=upload.kind, url=url)


def _normalize_tags(tags: list[str] | None) -> list[str]:
    """Lower-case, strip and dedupe tags (order kept) for array-contains-any."""
    seen: list[str] = []
    for tag in tags or []:
        t = tag.strip().lower()
        if t and t not in seen:
            seen.append(t)
    return seen
