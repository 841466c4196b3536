"""Domain enums for CowConnect."""

from enum import Enum


class Role(str, Enum):
    """Account role. Experts and farmers live in separate profile collections."""

    DOCTOR = "doctor"
    RESEARCH_INSTITUTION = "researchInstitution"
    NGO = "ngo"
    VOLUNTEER = "volunteer"
    FARMER = "farmer"

    @property
    def is_expert(self) -> bool:
        return self is not Role.FARMER

    @property
    def can_attest(self) -> bool:
        """Only veterinary doctors and research institutions verify posts."""
        return self in ATTESTING_ROLES

    @property
    def profile_collection(self) -> str:
        """Name of the profile collection holding accounts with this role."""
        if self is Role.FARMER:
            return ProfileCollection.FARMERS.value
        return ProfileCollection.EXPERTS.value


class ProfileCollection(str, Enum):
    """Profile collections; experts and farmers sign up through different forms."""

    EXPERTS = "experts"
    FARMERS = "farmers"


ATTESTING_ROLES = frozenset({Role.DOCTOR, Role.RESEARCH_INSTITUTION})


class VerificationState(str, Enum):
    """Post verification state.

    UNVERIFIED: the gate did not ask for review and nobody has attested.
    PENDING: the gate asked for independent review; waiting for an expert.
    VERIFIED: at least one expert attested.
    """

    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"


class MediaKind(str, Enum):
    """Kind of the single media reference a post may carry."""

    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


class WorkshopMode(str, Enum):
    """Workshop delivery mode; decides whether location or link is set."""

    ONLINE = "online"
    OFFLINE = "offline"
