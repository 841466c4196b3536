"""Helpers shared by the Firestore repositories."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any, TypeVar

from cowconnect.domain.exceptions import ValidationException
from cowconnect.infrastructure.firebase._rest_client import DocumentSnapshot
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Raised by the mappers for documents that do not fit the domain model.
CORRUPT_DOCUMENT_ERRORS = (KeyError, TypeError, ValueError, ValidationException)

# Firestore caps array-contains-any at 30 comparison values.
MAX_ANY_VALUES = 30


def map_snapshot(
    snapshot: DocumentSnapshot | None,
    mapper: Callable[[str, dict[str, Any]], T],
) -> T | None:
    """Map one snapshot, returning None (and logging) for a corrupt document."""
    if snapshot is None:
        return None
    try:
        return mapper(snapshot.id, snapshot.to_dict())
    except CORRUPT_DOCUMENT_ERRORS as e:
        logger.warning("Skipping malformed document %s: %s", snapshot.id, e)
        return None


async def collect(
    stream: AsyncIterator[DocumentSnapshot],
    mapper: Callable[[str, dict[str, Any]], T],
) -> list[T]:
    """Map every snapshot of a query stream, skipping malformed documents."""
    out: list[T] = []
    async for snapshot in stream:
        item = map_snapshot(snapshot, mapper)
        if item is not None:
            out.append(item)
    return out
