"""Role-specific profile details as a tagged union keyed by role.

Each variant carries only its own signup fields. parse_role_details picks the
variant from the role tag instead of relying on a class hierarchy.
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Union

from cowconnect.domain.enums import Role


@dataclass(frozen=True)
class DoctorDetails:
    role: ClassVar[Role] = Role.DOCTOR

    unique_id: int
    education: str
    years_of_practice: int
    state: str
    city: str


@dataclass(frozen=True)
class NgoDetails:
    role: ClassVar[Role] = Role.NGO

    organization: str
    state: str
    city: str


@dataclass(frozen=True)
class ResearchInstitutionDetails:
    role: ClassVar[Role] = Role.RESEARCH_INSTITUTION

    research_area: str
    state: str
    city: str


@dataclass(frozen=True)
class VolunteerDetails:
    role: ClassVar[Role] = Role.VOLUNTEER

    education: str
    state: str
    city: str


@dataclass(frozen=True)
class FarmerDetails:
    role: ClassVar[Role] = Role.FARMER

    state: str
    city: str


RoleDetails = Union[
    DoctorDetails,
    NgoDetails,
    ResearchInstitutionDetails,
    VolunteerDetails,
    FarmerDetails,
]

ROLE_DETAILS: dict[Role, type] = {
    Role.DOCTOR: DoctorDetails,
    Role.NGO: NgoDetails,
    Role.RESEARCH_INSTITUTION: ResearchInstitutionDetails,
    Role.VOLUNTEER: VolunteerDetails,
    Role.FARMER: FarmerDetails,
}

# Stored documents use the web client's camelCase keys.
_CAMEL_KEYS = {
    "unique_id": "uniqueId",
    "years_of_practice": "yearsOfPractice",
    "research_area": "researchArea",
}


def parse_role_details(role: Role, data: dict[str, Any] | None) -> RoleDetails | None:
    """Build the variant for role from a stored profileData map.

    Returns None when data is missing or lacks a required field, so that a
    half-completed profile does not break profile lookups.
    """
    if not data:
        return None
    cls = ROLE_DETAILS[role]
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        key = _CAMEL_KEYS.get(f.name, f.name)
        if key not in data:
            return None
        kwargs[f.name] = data[key]
    return cls(**kwargs)


def role_details_to_dict(details: RoleDetails) -> dict[str, Any]:
    """Inverse of parse_role_details (camelCase keys)."""
    return {
        _CAMEL_KEYS.get(f.name, f.name): getattr(details, f.name)
        for f in fields(details)
    }
