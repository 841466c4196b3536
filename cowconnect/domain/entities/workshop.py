"""Workshop domain entity.

A workshop is a scheduled event created by an expert. Users register for it;
registrations are snapshots of the registrant taken at registration time.
"""

from dataclasses import dataclass
from datetime import datetime

from cowconnect.domain.enums import Role, WorkshopMode
from cowconnect.domain.exceptions import ValidationException
from cowconnect.domain.value_objects.core import (
    ProfileSnapshot,
    Registration,
    TimeOfDay,
)
from cowconnect.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class WorkshopEntity:
    """Immutable domain entity for a workshop. Validation runs on construction."""

    id: str
    owner_id: str
    owner_role: Role
    title: str
    description: str
    date_from: datetime
    date_to: datetime
    time_from: TimeOfDay
    time_to: TimeOfDay
    mode: WorkshopMode
    location: str | None
    link: str | None
    thumbnail: str
    tags: tuple[str, ...]
    owner_profile: ProfileSnapshot
    registrations: tuple[Registration, ...]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        self.validate()

    @staticmethod
    def validate_schedule(
        date_from: datetime,
        date_to: datetime,
        time_from: TimeOfDay,
        time_to: TimeOfDay,
    ) -> None:
        """Enforce that the schedule window does not end before it starts.

        Raises:
            ValidationException: If date_to is before date_from, or both dates
                are the same day and time_to is not after time_from.
        """
        start = ensure_utc(date_from)
        end = ensure_utc(date_to)
        if end < start:
            raise ValidationException(
                "Workshop cannot end before it starts", field="date_to"
            )
        if end.date() == start.date() and time_to.value <= time_from.value:
            raise ValidationException(
                "End time must be after start time", field="time_to"
            )

    @staticmethod
    def validate_mode_fields(
        mode: WorkshopMode, location: str | None, link: str | None
    ) -> None:
        """Exactly one of location/link is set, matching mode."""
        if mode is WorkshopMode.OFFLINE:
            if not location:
                raise ValidationException(
                    "Offline workshops need a location", field="location"
                )
            if link:
                raise ValidationException(
                    "Offline workshops cannot have a meeting link", field="link"
                )
        else:
            if not link:
                raise ValidationException(
                    "Online workshops need a meeting link", field="link"
                )
            if location:
                raise ValidationException(
                    "Online workshops cannot have a location", field="location"
                )

    def validate(self) -> None:
        """Validate workshop business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Workshop ID is required", field="id")
        if not self.owner_id:
            raise ValidationException("Workshop must have an owner", field="owner_id")
        if not self.title:
            raise ValidationException("Workshop title is required", field="title")
        self.validate_schedule(self.date_from, self.date_to, self.time_from, self.time_to)
        self.validate_mode_fields(self.mode, self.location, self.link)
        ids = [r.user_id for r in self.registrations]
        if len(ids) != len(set(ids)):
            raise ValidationException(
                "A user can register only once", field="registrations"
            )

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.owner_id == user_id

    def is_registered(self, user_id: str | None) -> bool:
        """Return whether user_id is in the registrant set."""
        return any(r.user_id == user_id for r in self.registrations)
