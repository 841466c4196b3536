"""Firestore transactional writer (implements ITransactionalWriter).

Every multi-document write is one WriteBatch committed through the
``documents:commit`` endpoint, so each either lands completely or not at all.
Index fields are updated with ArrayUnion/ArrayRemove transforms, which give
them set semantics.
"""

from __future__ import annotations


import httpx

from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.entities.workshop import WorkshopEntity
from cowconnect.domain.enums import VerificationState
from cowconnect.domain.exceptions import PersistenceFailureException
from cowconnect.domain.value_objects.core import Attestation, Registration
from cowconnect.infrastructure.firebase._rest_client import (
    CommitPreconditionError,
    FirestoreRESTClient,
    WriteBatch,
)
from cowconnect.infrastructure.firebase._rest_encoding import ArrayRemove, ArrayUnion
from cowconnect.infrastructure.firebase.collections import (
    COLLECTION_POSTS,
    COLLECTION_WORKSHOPS,
    FIELD_POSTS_INDEX,
    FIELD_REGISTRATIONS_INDEX,
    FIELD_WORKSHOPS_INDEX,
)
from cowconnect.infrastructure.firebase.mappers import (
    attestation_to_dict,
    post_to_document,
    registration_to_dict,
    workshop_to_document,
)
from cowconnect.shared.telemetry.logging import get_logger
from cowconnect.shared.utils.datetime import utc_now
from cowconnect.shared.utils.text import escape_newlines

logger = get_logger(__name__)


class FirestoreTransactionalWriter:
    """Sole mutation path for posts, workshops and the profile indexes."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    def _ref(self, collection: str, document_id: str):
        return self._client.collection(collection).document(document_id)

    async def _commit(self, batch: WriteBatch, operation: str) -> None:
        try:
            await batch.commit()
        except CommitPreconditionError as e:
            logger.warning("Commit %s rejected: %s", operation, e)
            raise PersistenceFailureException(operation, str(e)) from e
        except httpx.HTTPError as e:
            logger.exception("Commit %s failed", operation)
            raise PersistenceFailureException(operation, type(e).__name__) from e

    async def create_post(self, post: PostEntity, owner_collection: str) -> None:
        """Create the post and add its id to the owner's posts index."""
        now = utc_now()
        batch = self._client.batch()
        batch.create(self._ref(COLLECTION_POSTS, post.id), post_to_document(post))
        batch.update(
            self._ref(owner_collection, post.owner_id),
            {FIELD_POSTS_INDEX: ArrayUnion([post.id]), "updatedAt": now},
        )
        await self._commit(batch, "create_post")

    async def update_post(self, post: PostEntity) -> None:
        """Replace body and media; tags, state and attestations are left untouched."""
        batch = self._client.batch()
        batch.update(
            self._ref(COLLECTION_POSTS, post.id),
            {
                "content": escape_newlines(post.content),
                "media": (
                    {"kind": post.media.kind.value, "url": post.media.url}
                    if post.media
                    else None
                ),
                "updatedAt": post.updated_at,
            },
        )
        await self._commit(batch, "update_post")

    async def delete_post(
        self, post_id: str, owner_id: str, owner_collection: str
    ) -> None:
        """Delete the post and remove its id from the owner's posts index."""
        batch = self._client.batch()
        batch.delete(self._ref(COLLECTION_POSTS, post_id))
        batch.update(
            self._ref(owner_collection, owner_id),
            {FIELD_POSTS_INDEX: ArrayRemove([post_id]), "updatedAt": utc_now()},
        )
        await self._commit(batch, "delete_post")

    async def create_workshop(
        self, workshop: WorkshopEntity, owner_collection: str
    ) -> None:
        """Create the workshop and add its id to the owner's workshops index."""
        batch = self._client.batch()
        batch.create(
            self._ref(COLLECTION_WORKSHOPS, workshop.id),
            workshop_to_document(workshop),
        )
        batch.update(
            self._ref(owner_collection, workshop.owner_id),
            {
                FIELD_WORKSHOPS_INDEX: ArrayUnion([workshop.id]),
                "updatedAt": utc_now(),
            },
        )
        await self._commit(batch, "create_workshop")

    async def add_registration(
        self,
        workshop_id: str,
        registration: Registration,
        profile_collection: str,
    ) -> None:
        """Add the registrant snapshot and the registrant index entry together."""
        now = utc_now()
        batch = self._client.batch()
        batch.update(
            self._ref(COLLECTION_WORKSHOPS, workshop_id),
            {
                "registrations": ArrayUnion([registration_to_dict(registration)]),
                "updatedAt": now,
            },
        )
        batch.update(
            self._ref(profile_collection, registration.user_id),
            {FIELD_REGISTRATIONS_INDEX: ArrayUnion([workshop_id]), "updatedAt": now},
        )
        await self._commit(batch, "add_registration")

    async def add_attestation(self, post_id: str, attestation: Attestation) -> None:
        """Append the attestation and mark the post verified."""
        batch = self._client.batch()
        batch.update(
            self._ref(COLLECTION_POSTS, post_id),
            {
                "attestations": ArrayUnion([attestation_to_dict(attestation)]),
                "verificationState": VerificationState.VERIFIED.value,
                "updatedAt": utc_now(),
            },
        )
        await self._commit(batch, "add_attestation")
