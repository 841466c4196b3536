"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from cowconnect.infrastructure or cowconnect.api.
"""

from cowconnect.application.interfaces.repositories import (
    IPostRepository,
    IProfileRepository,
    ITransactionalWriter,
    IWorkshopRepository,
)
from cowconnect.application.interfaces.services import (
    ClassificationServiceError,
    ICategorizer,
    IClassificationClient,
    IContentGate,
)
from cowconnect.application.interfaces.storage import IMediaStorage

__all__ = [
    "ClassificationServiceError",
    "ICategorizer",
    "IClassificationClient",
    "IContentGate",
    "IMediaStorage",
    "IPostRepository",
    "IProfileRepository",
    "ITransactionalWriter",
    "IWorkshopRepository",
]
