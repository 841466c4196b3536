"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain types only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cowconnect.application.dtos.profile import ProfileResult
    from cowconnect.domain.entities import PostEntity, WorkshopEntity
    from cowconnect.domain.enums import Role
    from cowconnect.domain.value_objects.core import Attestation, Registration


class IProfileRepository(Protocol):
    """Protocol for expert and farmer profile reads."""

    async def get_profile(self, user_id: str, collection: str) -> ProfileResult | None:
        """Return the profile stored under user_id in collection."""

    async def find_profile(self, user_id: str) -> ProfileResult | None:
        """Return the profile in whichever collection holds it (experts first)."""

    async def role_for(self, user_id: str, collection: str | None = None) -> Role | None:
        """Return the role stored on the user's profile, or None if absent."""


class IPostRepository(Protocol):
    """Protocol for post reads."""

    async def get_by_id(self, post_id: str) -> PostEntity | None:
        """Return post by ID."""

    async def list_recent(self, limit: int = 50) -> list[PostEntity]:
        """Return posts newest first."""

    async def list_by_owner(self, owner_id: str, limit: int = 50) -> list[PostEntity]:
        """Return the owner's posts newest first."""

    async def list_filtered(
        self, tags: list[str], role: Role | None, limit: int = 50
    ) -> list[PostEntity]:
        """Return posts with any of tags and/or whose owner has role."""


class IWorkshopRepository(Protocol):
    """Protocol for workshop reads."""

    async def get_by_id(self, workshop_id: str) -> WorkshopEntity | None:
        """Return workshop by ID."""

    async def list_by_owner(self, owner_id: str, limit: int = 50) -> list[WorkshopEntity]:
        """Return the owner's workshops, newest created first."""

    async def list_upcoming(self, since: datetime, limit: int = 50) -> list[WorkshopEntity]:
        """Return workshops with date_from >= since, earliest first."""

    async def list_filtered(
        self, tags: list[str], role: Role | None, limit: int = 50
    ) -> list[WorkshopEntity]:
        """Return workshops with any of tags and/or whose owner has role."""


class ITransactionalWriter(Protocol):
    """Protocol for multi-document atomic writes (all-or-nothing commits)."""

    async def create_post(self, post: PostEntity, owner_collection: str) -> None:
        """Create the post and add its id to the owner's posts index."""

    async def update_post(self, post: PostEntity) -> None:
        """Replace body and media of an existing post."""

    async def delete_post(
        self, post_id: str, owner_id: str, owner_collection: str
    ) -> None:
        """Delete the post and remove its id from the owner's posts index."""

    async def create_workshop(
        self, workshop: WorkshopEntity, owner_collection: str
    ) -> None:
        """Create the workshop and add its id to the owner's workshops index."""

    async def add_registration(
        self,
        workshop_id: str,
        registration: Registration,
        profile_collection: str,
    ) -> None:
        """Add registrant to the workshop and workshop id to the registrant index."""

    async def add_attestation(self, post_id: str, attestation: Attestation) -> None:
        """Append attestation to the post and mark it verified."""
