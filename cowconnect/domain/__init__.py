"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from cowconnect.domain.entities import PostEntity, WorkshopEntity
from cowconnect.domain.enums import (
    ATTESTING_ROLES,
    MediaKind,
    ProfileCollection,
    Role,
    VerificationState,
    WorkshopMode,
)
from cowconnect.domain.exceptions import (
    AlreadyRegisteredException,
    AuthenticationException,
    AuthorizationException,
    ContentRejectedException,
    CowConnectException,
    PersistenceFailureException,
    ResourceNotFoundException,
    UpstreamUnavailableException,
    ValidationException,
)

__all__ = [
    # Entities
    "PostEntity",
    "WorkshopEntity",
    # Enums
    "ATTESTING_ROLES",
    "MediaKind",
    "ProfileCollection",
    "Role",
    "VerificationState",
    "WorkshopMode",
    # Exceptions
    "AlreadyRegisteredException",
    "AuthenticationException",
    "AuthorizationException",
    "ContentRejectedException",
    "CowConnectException",
    "PersistenceFailureException",
    "ResourceNotFoundException",
    "UpstreamUnavailableException",
    "ValidationException",
]
