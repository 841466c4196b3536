"""Pydantic request/response schemas for the API."""

from cowconnect.schemas.common import ErrorResponse, ProfileSnapshotResponse
from cowconnect.schemas.health import HealthResponse, ReadinessResponse
from cowconnect.schemas.post import (
    AttestationResponse,
    MediaResponse,
    PostResponse,
    VerificationResponse,
)
from cowconnect.schemas.workshop import (
    RegisterResponse,
    RegistrationResponse,
    WorkshopResponse,
)

__all__ = [
    "AttestationResponse",
    "ErrorResponse",
    "HealthResponse",
    "MediaResponse",
    "PostResponse",
    "ProfileSnapshotResponse",
    "ReadinessResponse",
    "RegisterResponse",
    "RegistrationResponse",
    "VerificationResponse",
    "WorkshopResponse",
]
