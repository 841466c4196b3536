"""DTOs for workshop use cases."""

from dataclasses import dataclass, field
from datetime import date

from cowconnect.application.dtos.post import MediaUpload
from cowconnect.domain.entities.workshop import WorkshopEntity
from cowconnect.domain.enums import WorkshopMode
from cowconnect.domain.value_objects.core import Registration


@dataclass(frozen=True)
class CreateWorkshopCommand:
    """Input for creating a workshop (thumbnail is uploaded before the commit)."""

    title: str
    description: str
    date_from: date
    date_to: date
    time_from: str
    time_to: str
    mode: WorkshopMode
    thumbnail: MediaUpload
    location: str | None = None
    link: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class WorkshopView:
    """Workshop as seen by a given caller."""

    workshop: WorkshopEntity
    current_user_registered: bool


@dataclass(frozen=True)
class RegistrationResult:
    """Successful registration: the snapshot stored on the workshop."""

    workshop_id: str
    registration: Registration
