"""Firestore-backed repository implementations."""

from cowconnect.infrastructure.firebase.repositories.post_repo_firestore import (
    FirestorePostRepository,
)
from cowconnect.infrastructure.firebase.repositories.profile_repo_firestore import (
    FirestoreProfileRepository,
)
from cowconnect.infrastructure.firebase.repositories.workshop_repo_firestore import (
    FirestoreWorkshopRepository,
)

__all__ = [
    "FirestorePostRepository",
    "FirestoreProfileRepository",
    "FirestoreWorkshopRepository",
]
