"""Firestore-backed workshop repository (implements IWorkshopRepository)."""

from __future__ import annotations

from datetime import datetime

from cowconnect.domain.entities.workshop import WorkshopEntity
from cowconnect.domain.enums import Role
from cowconnect.infrastructure.firebase._rest_client import (
    ASCENDING,
    DESCENDING,
    FirestoreRESTClient,
)
from cowconnect.infrastructure.firebase.collections import COLLECTION_WORKSHOPS
from cowconnect.infrastructure.firebase.mappers import workshop_from_document
from cowconnect.infrastructure.firebase.repositories._common import (
    MAX_ANY_VALUES,
    collect,
    map_snapshot,
)
from cowconnect.shared.utils.sanitization import validate_identifier


class FirestoreWorkshopRepository:
    """Workshop reads from the ``workshops`` collection."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_WORKSHOPS)

    async def get_by_id(self, workshop_id: str) -> WorkshopEntity | None:
        """Return workshop by ID."""
        if not validate_identifier(workshop_id):
            return None
        doc = await self._coll.document(workshop_id).get()
        return map_snapshot(doc, workshop_from_document)

    async def list_by_owner(self, owner_id: str, limit: int = 50) -> list[WorkshopEntity]:
        q = (
            self._coll.where("owner", "==", owner_id)
            .order_by("createdAt", DESCENDING)
            .limit(limit)
        )
        return await collect(q.stream(), workshop_from_document)

    async def list_upcoming(self, since: datetime, limit: int = 50) -> list[WorkshopEntity]:
        """Workshops whose dateFrom is on or after since, earliest first."""
        q = (
            self._coll.where("dateFrom", ">=", since)
            .order_by("dateFrom", ASCENDING)
            .limit(limit)
        )
        return await collect(q.stream(), workshop_from_document)

    async def list_filtered(
        self, tags: list[str], role: Role | None, limit: int = 50
    ) -> list[WorkshopEntity]:
        q = self._coll.order_by("dateFrom", ASCENDING).limit(limit)
        if tags:
            q = q.where("filters", "array-contains-any", tags[:MAX_ANY_VALUES])
        if role is not None:
            q = q.where("role", "==", role.value)
        return await collect(q.stream(), workshop_from_document)
