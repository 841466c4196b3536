"""Verification ledger: expert attestations on posts (append-only, one per attester)."""

from __future__ import annotations

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.post import VerificationView
from cowconnect.application.interfaces.repositories import (
    IPostRepository,
    IProfileRepository,
    ITransactionalWriter,
)
from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
)
from cowconnect.domain.value_objects.core import Attestation
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class VerificationLedger:
    """Records attestations by doctors and research institutions.

    Re-attesting is a no-op that returns the current view, so UI retries
    never grow the ledger. There is no retraction.
    """

    def __init__(
        self,
        post_repo: IPostRepository,
        profile_repo: IProfileRepository,
        writer: ITransactionalWriter,
    ) -> None:
        self.post_repo = post_repo
        self.profile_repo = profile_repo
        self.writer = writer

    async def attest(self, identity: Identity, post_id: str) -> VerificationView:
        """Attest post_id as the caller.

        Raises:
            AuthenticationException: Caller is anonymous.
            AuthorizationException: Caller's role may not attest (checked before any read).
            ResourceNotFoundException: Post does not exist.
            PersistenceFailureException: The commit was aborted.
        """
        user_id = identity.require_user_id()
        if identity.role is None or not identity.role.can_attest:
            raise AuthorizationException("post", "attest")

        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        if post.has_attestation_from(user_id):
            logger.debug("Attestation by %s on post %s already recorded", user_id, post_id)
            return self._view(identity, post)

        profile = await self.profile_repo.get_profile(
            user_id, identity.role.profile_collection
        )
        name = identity.display_name or (profile.name if profile else "")
        attestation = Attestation(
            attester_id=user_id,
            role=identity.role,
            name=name.strip(),
            profile_pic=profile.profile_pic if profile else "",
        )
        await self.writer.add_attestation(post_id, attestation)
        logger.info("Post %s attested by %s (%s)", post_id, user_id, identity.role.value)
        return self._view(identity, post.with_attestation(attestation))

    async def view(self, identity: Identity, post_id: str) -> VerificationView:
        """Return the aggregate verification view of post_id for the caller."""
        post = await self.post_repo.get_by_id(post_id)
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        return self._view(identity, post)

    @staticmethod
    def _view(identity: Identity, post: PostEntity) -> VerificationView:
        can_attest = bool(identity.role and identity.role.can_attest)
        return VerificationView(
            post_id=post.id,
            is_verified=post.is_verified,
            can_attest=can_attest,
            verified_by_me=can_attest and post.has_attestation_from(identity.user_id),
            attestations=post.attestations,
        )
