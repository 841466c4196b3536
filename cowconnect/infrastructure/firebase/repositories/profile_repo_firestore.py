"""Firestore-backed profile repository (implements IProfileRepository)."""

from __future__ import annotations

from functools import partial

from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.domain.enums import Role
from cowconnect.infrastructure.firebase._rest_client import FirestoreRESTClient
from cowconnect.infrastructure.firebase.collections import PROFILE_COLLECTIONS
from cowconnect.infrastructure.firebase.mappers import profile_from_document
from cowconnect.infrastructure.firebase.repositories._common import map_snapshot
from cowconnect.shared.utils.sanitization import validate_identifier


class FirestoreProfileRepository:
    """Reads expert and farmer profiles. Profiles are keyed by Firebase uid."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def get_profile(self, user_id: str, collection: str) -> ProfileResult | None:
        """Return the profile stored under user_id in collection."""
        if collection not in PROFILE_COLLECTIONS or not validate_identifier(user_id):
            return None
        doc = await self._client.collection(collection).document(user_id).get()
        return map_snapshot(doc, partial(_from_document, collection=collection))

    async def find_profile(self, user_id: str) -> ProfileResult | None:
        """Return the profile from experts, then farmers."""
        for collection in PROFILE_COLLECTIONS:
            profile = await self.get_profile(user_id, collection)
            if profile is not None:
                return profile
        return None

    async def role_for(self, user_id: str, collection: str | None = None) -> Role | None:
        """Role stored on the user's profile, or None when there is no profile."""
        if collection is not None:
            profile = await self.get_profile(user_id, collection)
        else:
            profile = await self.find_profile(user_id)
        return profile.role if profile else None


def _from_document(doc_id: str, data: dict, *, collection: str) -> ProfileResult:
    return profile_from_document(doc_id, collection, data)
