"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cowconnect.application.services.content_gate import Verdict
    from cowconnect.domain.value_objects.core import MediaPayload


class ClassificationServiceError(Exception):
    """Raised by a classification client when no usable reply was obtained."""


class IClassificationClient(Protocol):
    """Protocol for the external classification service (one request, text reply)."""

    async def generate(self, prompt: str, media: MediaPayload | None = None) -> str:
        """Return the model's text reply. Raises ClassificationServiceError on failure."""


class IContentGate(Protocol):
    """Protocol for the accept/reject decision on submitted content."""

    async def evaluate(self, text: str, media: MediaPayload | None = None) -> Verdict:
        """Return Accepted(needs_review), Rejected or Unavailable. Never raises."""


class ICategorizer(Protocol):
    """Protocol for deriving category tags from accepted content."""

    async def categorize(self, text: str, image: MediaPayload | None = None) -> list[str]:
        """Return tags in classifier order; empty list when inconclusive."""
