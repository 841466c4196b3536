"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every outcome is rendered as
the same discriminated body ``{error, message, details, retryable}`` so the
UI can branch on ``error`` and offer "try again" when ``retryable`` is true.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cowconnect.core.config import get_settings
from cowconnect.domain.exceptions import CowConnectException
from cowconnect.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "ALREADY_REGISTERED": 409,
    "CONTENT_REJECTED": 422,
    "VALIDATION_ERROR": 400,
    "UPSTREAM_UNAVAILABLE": 503,
    "PERSISTENCE_FAILURE": 503,
    "SERVICE_UNAVAILABLE": 503,
    "STORAGE_UPLOAD_ERROR": 502,
    "STORAGE_PERMISSION_ERROR": 400,
}


def status_for(exc: CowConnectException) -> int:
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _cowconnect_exception_handler(
    request: Request, exc: CowConnectException
) -> JSONResponse:
    """Return JSON from CowConnectException.to_dict() with appropriate status code."""
    status = status_for(exc)
    if status >= 500:
        logger.warning("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": jsonable_errors(exc)},
            "retryable": False,
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic error list without the non-serializable ``ctx``/``input`` values."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "HTTP_ERROR",
            "message": exc.detail,
            "details": {},
            "retryable": False,
        },
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": detail,
            "details": {},
            "retryable": False,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: CowConnectException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(CowConnectException, _cowconnect_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
