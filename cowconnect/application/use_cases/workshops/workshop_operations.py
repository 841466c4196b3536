"""Workshop operations: create (precompute, then atomic commit) and discovery queries."""

from __future__ import annotations

import asyncio

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.application.dtos.workshop import CreateWorkshopCommand, WorkshopView
from cowconnect.application.interfaces.repositories import (
    IProfileRepository,
    ITransactionalWriter,
    IWorkshopRepository,
)
from cowconnect.application.interfaces.storage import IMediaStorage
from cowconnect.application.use_cases.posts.post_operations import storage_ref_for
from cowconnect.domain.entities.workshop import WorkshopEntity
from cowconnect.domain.enums import ProfileCollection, Role
from cowconnect.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from cowconnect.domain.value_objects.core import Registration, TimeOfDay
from cowconnect.shared.telemetry.logging import get_logger
from cowconnect.shared.utils.datetime import start_of_day_utc, utc_now
from cowconnect.shared.utils.generators import generate_cuid
from cowconnect.shared.utils.sanitization import sanitize_text

logger = get_logger(__name__)


def _time_of_day(value: str, field: str) -> TimeOfDay:
    try:
        return TimeOfDay(value.strip())
    except ValueError as e:
        raise ValidationException(str(e), field=field) from e


class WorkshopService:
    """Create and query workshops created by experts."""

    def __init__(
        self,
        workshop_repo: IWorkshopRepository,
        profile_repo: IProfileRepository,
        writer: ITransactionalWriter,
        storage: IMediaStorage,
    ) -> None:
        self.workshop_repo = workshop_repo
        self.profile_repo = profile_repo
        self.writer = writer
        self.storage = storage

    async def create(
        self, identity: Identity, command: CreateWorkshopCommand
    ) -> WorkshopEntity:
        """Create a workshop owned by the calling expert.

        The owner profile lookup and the thumbnail upload run concurrently
        before the atomic section; if either fails nothing is written. The
        workshop document and the owner's workshops index are then committed
        together.

        Raises:
            AuthenticationException: Caller is anonymous.
            AuthorizationException: Caller is a farmer.
            ValidationException: Schedule or mode fields are inconsistent.
            ResourceNotFoundException: Caller has no expert profile.
            StorageUploadError: Thumbnail upload failed.
            PersistenceFailureException: The commit was aborted.
        """
        user_id = identity.require_user_id()
        if identity.role is not None and not identity.role.is_expert:
            raise AuthorizationException("workshop", "create")

        title = sanitize_text(command.title)
        if not title:
            raise ValidationException("Workshop title is required", field="title")
        date_from = start_of_day_utc(command.date_from)
        date_to = start_of_day_utc(command.date_to)
        time_from = _time_of_day(command.time_from, "time_from")
        time_to = _time_of_day(command.time_to, "time_to")
        location = sanitize_text(command.location) or None
        link = (command.link or "").strip() or None
        WorkshopEntity.validate_schedule(date_from, date_to, time_from, time_to)
        WorkshopEntity.validate_mode_fields(command.mode, location, link)

        workshop_id = generate_cuid()
        profile, thumbnail_url = await asyncio.gather(
            self._owner_profile(user_id),
            self.storage.upload(
                command.thumbnail.data,
                storage_ref_for("workshops", workshop_id, command.thumbnail),
                command.thumbnail.content_type,
            ),
        )

        now = utc_now()
        workshop = WorkshopEntity(
            id=workshop_id,
            owner_id=user_id,
            owner_role=profile.role,
            title=title,
            description=sanitize_text(command.description),
            date_from=date_from,
            date_to=date_to,
            time_from=time_from,
            time_to=time_to,
            mode=command.mode,
            location=location,
            link=link,
            thumbnail=thumbnail_url,
            tags=tuple(t.strip().lower() for t in command.tags if t.strip()),
            owner_profile=profile.snapshot(),
            registrations=(),
            created_at=now,
            updated_at=now,
        )
        await self.writer.create_workshop(workshop, profile.collection)
        logger.info("Workshop %s created by %s", workshop_id, user_id)
        return workshop

    async def get_workshop(self, identity: Identity, workshop_id: str) -> WorkshopView:
        """Return the workshop with whether the caller is registered."""
        workshop = await self._get(workshop_id)
        return WorkshopView(
            workshop=workshop,
            current_user_registered=workshop.is_registered(identity.user_id),
        )

    async def list_my_workshops(
        self, identity: Identity, limit: int = 50
    ) -> list[WorkshopEntity]:
        """Caller's own workshops, newest created first."""
        user_id = identity.require_user_id()
        return await self.workshop_repo.list_by_owner(user_id, limit=limit)

    async def list_upcoming_workshops(self, limit: int = 50) -> list[WorkshopEntity]:
        """Workshops starting today (UTC) or later, earliest first."""
        return await self.workshop_repo.list_upcoming(start_of_day_utc(), limit=limit)

    async def list_filtered_workshops(
        self, tags: list[str], role: Role | None = None, limit: int = 50
    ) -> list[WorkshopEntity]:
        clean = [t.strip().lower() for t in tags or [] if t.strip()]
        if not clean and role is None:
            return await self.list_upcoming_workshops(limit=limit)
        return await self.workshop_repo.list_filtered(
            list(dict.fromkeys(clean)), role, limit=limit
        )

    async def get_registration_details(
        self, identity: Identity, workshop_id: str
    ) -> tuple[Registration, ...]:
        """Registrant snapshots; visible to the workshop owner only."""
        user_id = identity.require_user_id()
        workshop = await self._get(workshop_id)
        if not workshop.is_owned_by(user_id):
            raise AuthorizationException("workshop", "view registrations")
        return workshop.registrations

    async def _get(self, workshop_id: str) -> WorkshopEntity:
        workshop = await self.workshop_repo.get_by_id(workshop_id)
        if workshop is None:
            raise ResourceNotFoundException("workshop", workshop_id)
        return workshop

    async def _owner_profile(self, user_id: str) -> ProfileResult:
        profile = await self.profile_repo.get_profile(
            user_id, ProfileCollection.EXPERTS.value
        )
        if profile is None:
            raise ResourceNotFoundException("profile", user_id)
        return profile
