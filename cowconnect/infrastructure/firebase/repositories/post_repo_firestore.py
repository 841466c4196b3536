"""Firestore-backed post repository (implements IPostRepository)."""

from __future__ import annotations

from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.enums import Role
from cowconnect.infrastructure.firebase._rest_client import (
    DESCENDING,
    FirestoreRESTClient,
)
from cowconnect.infrastructure.firebase.collections import COLLECTION_POSTS
from cowconnect.infrastructure.firebase.mappers import post_from_document
from cowconnect.infrastructure.firebase.repositories._common import (
    MAX_ANY_VALUES,
    collect,
    map_snapshot,
)
from cowconnect.shared.utils.sanitization import validate_identifier


class FirestorePostRepository:
    """Post reads from the ``posts`` collection. Writes go through the transactional writer."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_POSTS)

    async def get_by_id(self, post_id: str) -> PostEntity | None:
        """Return post by ID."""
        if not validate_identifier(post_id):
            return None
        doc = await self._coll.document(post_id).get()
        return map_snapshot(doc, post_from_document)

    async def list_recent(self, limit: int = 50) -> list[PostEntity]:
        q = self._coll.order_by("createdAt", DESCENDING).limit(limit)
        return await collect(q.stream(), post_from_document)

    async def list_by_owner(self, owner_id: str, limit: int = 50) -> list[PostEntity]:
        q = (
            self._coll.where("ownerId", "==", owner_id)
            .order_by("createdAt", DESCENDING)
            .limit(limit)
        )
        return await collect(q.stream(), post_from_document)

    async def list_filtered(
        self, tags: list[str], role: Role | None, limit: int = 50
    ) -> list[PostEntity]:
        """Posts tagged with any of tags and/or owned by role, newest first."""
        q = self._coll.order_by("createdAt", DESCENDING).limit(limit)
        if tags:
            q = q.where("filters", "array-contains-any", tags[:MAX_ANY_VALUES])
        if role is not None:
            q = q.where("ownerRole", "==", role.value)
        return await collect(q.stream(), post_from_document)
