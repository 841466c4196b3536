"""Domain value objects for CowConnect.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

from cowconnect.domain.enums import MediaKind, Role

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True)
class MediaRef:
    """The single media reference a post may carry (image, video or document)."""

    kind: MediaKind
    url: str

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("Media URL must be a non-empty string")


@dataclass(frozen=True)
class MediaPayload:
    """Binary media handed to the classifier, already base64-encoded by the caller."""

    data_base64: str
    mime_type: str

    def __post_init__(self) -> None:
        if not self.data_base64:
            raise ValueError("Media payload must not be empty")
        if "/" not in self.mime_type:
            raise ValueError("Media payload needs a MIME type such as image/jpeg")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class ProfileSnapshot:
    """Owner name and avatar captured at creation time (not live-synced)."""

    name: str
    profile_pic: str = ""


@dataclass(frozen=True)
class Attestation:
    """One expert's endorsement of a post. attester_id is unique per post."""

    attester_id: str
    role: Role
    name: str
    profile_pic: str = ""

    def __post_init__(self) -> None:
        if not self.attester_id:
            raise ValueError("Attestation requires an attester id")


@dataclass(frozen=True)
class Registration:
    """Registrant snapshot taken at registration time (not live-linked)."""

    user_id: str
    name: str
    contact_no: str
    role: Role

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("Registration requires a user id")


@dataclass(frozen=True)
class TimeOfDay:
    """Wall-clock time in HH:MM (24h), as entered in the workshop form."""

    value: str

    PATTERN: ClassVar[re.Pattern[str]] = _TIME_RE

    def __post_init__(self) -> None:
        if not self.PATTERN.match(self.value):
            raise ValueError("Time must be in HH:MM 24-hour format")
