"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, routers.
No business logic here. See cowconnect.core.lifespan and
cowconnect.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cowconnect.api.v1 import api_router
from cowconnect.core.config import get_settings
from cowconnect.core.exception_handlers import register_exception_handlers
from cowconnect.core.lifespan import create_lifespan
from cowconnect.core.limiter import limiter
from cowconnect.middleware import (
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from cowconnect.shared.telemetry import setup_logging

MEDIA_PREFIX = "/media"


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: size limit → request ID → security → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SecurityHeadersMiddleware, media_prefix=MEDIA_PREFIX, hsts=not settings.debug
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_upload_size)

    app.include_router(api_router, prefix="/api/v1")

    if settings.storage_backend == "local":
        # Local uploads are served by the app itself; S3 media has its own public URL.
        app.mount(
            MEDIA_PREFIX,
            StaticFiles(directory=settings.storage_root, check_dir=False),
            name="media",
        )

    return app


app = create_app()
