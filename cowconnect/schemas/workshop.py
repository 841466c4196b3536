"""Workshop API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from cowconnect.application.dtos.workshop import RegistrationResult
from cowconnect.domain.entities.workshop import WorkshopEntity
from cowconnect.domain.enums import Role, WorkshopMode
from cowconnect.domain.value_objects.core import Registration
from cowconnect.schemas.common import ProfileSnapshotResponse


class WorkshopResponse(BaseModel):
    """Workshop card/detail. Registrant details are not exposed here."""

    id: str
    owner_id: str
    owner_role: Role
    title: str
    description: str
    date_from: datetime
    date_to: datetime
    time_from: str = Field(..., description="HH:MM, 24-hour")
    time_to: str = Field(..., description="HH:MM, 24-hour")
    mode: WorkshopMode
    location: str | None = None
    link: str | None = None
    thumbnail: str
    tags: list[str]
    owner_profile: ProfileSnapshotResponse
    registration_count: int
    current_user_registered: bool | None = Field(
        default=None, description="Set on the detail endpoint only"
    )
    created_at: datetime

    @classmethod
    def from_entity(
        cls, workshop: WorkshopEntity, current_user_registered: bool | None = None
    ) -> "WorkshopResponse":
        return cls(
            id=workshop.id,
            owner_id=workshop.owner_id,
            owner_role=workshop.owner_role,
            title=workshop.title,
            description=workshop.description,
            date_from=workshop.date_from,
            date_to=workshop.date_to,
            time_from=workshop.time_from.value,
            time_to=workshop.time_to.value,
            mode=workshop.mode,
            location=workshop.location,
            link=workshop.link,
            thumbnail=workshop.thumbnail,
            tags=list(workshop.tags),
            owner_profile=ProfileSnapshotResponse.from_snapshot(workshop.owner_profile),
            registration_count=len(workshop.registrations),
            current_user_registered=current_user_registered,
            created_at=workshop.created_at,
        )


class RegistrationResponse(BaseModel):
    """Registrant snapshot taken at registration time."""

    user_id: str
    name: str
    contact_no: str
    role: Role

    @classmethod
    def from_registration(cls, registration: Registration) -> "RegistrationResponse":
        return cls(
            user_id=registration.user_id,
            name=registration.name,
            contact_no=registration.contact_no,
            role=registration.role,
        )


class RegisterResponse(BaseModel):
    """Response for a successful registration."""

    workshop_id: str
    registration: RegistrationResponse

    @classmethod
    def from_result(cls, result: RegistrationResult) -> "RegisterResponse":
        return cls(
            workshop_id=result.workshop_id,
            registration=RegistrationResponse.from_registration(result.registration),
        )
