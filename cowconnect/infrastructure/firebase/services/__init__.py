"""Firestore-backed write services."""

from cowconnect.infrastructure.firebase.services.transactional_writer import (
    FirestoreTransactionalWriter,
)

__all__ = ["FirestoreTransactionalWriter"]
