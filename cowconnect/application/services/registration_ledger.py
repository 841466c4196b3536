"""Registration ledger: workshop registrations with bidirectional indexes."""

from __future__ import annotations

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.application.dtos.workshop import RegistrationResult
from cowconnect.application.interfaces.repositories import (
    IProfileRepository,
    ITransactionalWriter,
    IWorkshopRepository,
)
from cowconnect.domain.exceptions import (
    AlreadyRegisteredException,
    ResourceNotFoundException,
)
from cowconnect.domain.value_objects.core import Registration
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class RegistrationLedger:
    """Registers users for workshops.

    Preconditions are read immediately before the commit. Two concurrent
    registrations by the same user can both pass the duplicate check; the
    set-union index transform keeps the registrant index single-valued, but
    the workshop may then hold two snapshots for that user. No lock is taken.
    """

    def __init__(
        self,
        workshop_repo: IWorkshopRepository,
        profile_repo: IProfileRepository,
        writer: ITransactionalWriter,
    ) -> None:
        self.workshop_repo = workshop_repo
        self.profile_repo = profile_repo
        self.writer = writer

    async def register(self, identity: Identity, workshop_id: str) -> RegistrationResult:
        """Register the caller for workshop_id.

        Checks run in order and stop at the first failure: authenticated,
        profile exists, workshop exists, not already registered.

        Raises:
            AuthenticationException: Caller is anonymous.
            ResourceNotFoundException: Profile or workshop is missing.
            AlreadyRegisteredException: Caller is already a registrant; nothing is written.
            PersistenceFailureException: The commit was aborted.
        """
        user_id = identity.require_user_id()
        profile = await self._load_profile(identity, user_id)
        if profile is None:
            raise ResourceNotFoundException("profile", user_id)

        workshop = await self.workshop_repo.get_by_id(workshop_id)
        if workshop is None:
            raise ResourceNotFoundException("workshop", workshop_id)
        if workshop.is_registered(user_id):
            raise AlreadyRegisteredException(workshop_id, user_id)

        registration = Registration(
            user_id=user_id,
            name=profile.name.strip(),
            contact_no=profile.contact_no,
            role=profile.role,
        )
        await self.writer.add_registration(workshop_id, registration, profile.collection)
        logger.info("User %s registered for workshop %s", user_id, workshop_id)
        return RegistrationResult(workshop_id=workshop_id, registration=registration)

    async def _load_profile(self, identity: Identity, user_id: str) -> ProfileResult | None:
        if identity.role is not None:
            return await self.profile_repo.get_profile(
                user_id, identity.role.profile_collection
            )
        return await self.profile_repo.find_profile(user_id)
