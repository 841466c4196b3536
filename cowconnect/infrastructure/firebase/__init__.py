"""Firestore integration (REST client, repositories, transactional writer)."""

from cowconnect.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)

__all__ = [
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
