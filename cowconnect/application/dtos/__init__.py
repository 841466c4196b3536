"""Application DTOs (no dependency on Firestore or presentation schemas)."""

from cowconnect.application.dtos.identity import Identity
from cowconnect.application.dtos.post import (
    EditPostCommand,
    MediaUpload,
    SubmitPostCommand,
    VerificationView,
)
from cowconnect.application.dtos.profile import ProfileResult
from cowconnect.application.dtos.workshop import (
    CreateWorkshopCommand,
    RegistrationResult,
    WorkshopView,
)

__all__ = [
    "Identity",
    "EditPostCommand",
    "MediaUpload",
    "SubmitPostCommand",
    "VerificationView",
    "ProfileResult",
    "CreateWorkshopCommand",
    "RegistrationResult",
    "WorkshopView",
]
