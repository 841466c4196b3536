"""External classification service clients."""

from cowconnect.infrastructure.external.classification.gemini_client import (
    GeminiClassificationClient,
)

__all__ = ["GeminiClassificationClient"]
