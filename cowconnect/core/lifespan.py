"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (Firestore client,
classification HTTP client, media storage backend).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from cowconnect.core.config import get_settings
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: Firestore client (if credentials are configured),
    classification client, storage backend. Shutdown closes the HTTP
    clients in reverse order.
    """
    settings = get_settings()

    # ---- Startup ----
    from cowconnect.infrastructure.external.classification import (
        GeminiClassificationClient,
    )
    from cowconnect.infrastructure.external.storage import create_media_storage
    from cowconnect.infrastructure.firebase.client import init_firebase

    if init_firebase():
        logger.info("Firestore enabled")
    else:
        logger.warning("Firestore not configured; store-backed endpoints return 503")

    app.state.classifier = GeminiClassificationClient(
        api_key=(
            settings.gemini_api_key.get_secret_value()
            if settings.gemini_api_key
            else None
        ),
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.classification_timeout_seconds,
    )
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set; submissions will be reported as unavailable")

    app.state.storage = create_media_storage(settings)

    yield

    # ---- Shutdown ----
    from cowconnect.infrastructure.firebase.client import close_firebase

    if getattr(app.state, "classifier", None) is not None:
        await app.state.classifier.aclose()
        app.state.classifier = None
        logger.info("Classification HTTP client closed")

    await close_firebase()
