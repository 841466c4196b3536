"""Domain value objects."""

from cowconnect.domain.value_objects.core import (
    Attestation,
    MediaPayload,
    MediaRef,
    ProfileSnapshot,
    Registration,
    TimeOfDay,
)
from cowconnect.domain.value_objects.profiles import (
    ROLE_DETAILS,
    DoctorDetails,
    FarmerDetails,
    NgoDetails,
    ResearchInstitutionDetails,
    RoleDetails,
    VolunteerDetails,
    parse_role_details,
    role_details_to_dict,
)

__all__ = [
    "Attestation",
    "MediaPayload",
    "MediaRef",
    "ProfileSnapshot",
    "Registration",
    "TimeOfDay",
    "ROLE_DETAILS",
    "DoctorDetails",
    "FarmerDetails",
    "NgoDetails",
    "ResearchInstitutionDetails",
    "RoleDetails",
    "VolunteerDetails",
    "parse_role_details",
    "role_details_to_dict",
]
