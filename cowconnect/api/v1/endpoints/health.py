"""Health check endpoints. Used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from cowconnect.core.config import get_settings
from cowconnect.infrastructure.firebase.client import get_firestore_client
from cowconnect.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store not configured", "model": ReadinessResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 when Firestore is configured; 503 otherwise.

    A missing classification key does not fail readiness: reads still work
    and submissions answer with a retryable error.
    """
    firestore_ok = get_firestore_client() is not None
    classifier_ok = get_settings().gemini_api_key is not None
    body = ReadinessResponse(
        status="ok" if firestore_ok else "not_ready",
        firestore=firestore_ok,
        classifier=classifier_ok,
    )
    if firestore_ok:
        return body
    return JSONResponse(status_code=503, content=body.model_dump())
