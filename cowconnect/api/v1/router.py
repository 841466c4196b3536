"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from cowconnect.api.v1.dependencies (no manual repo/service
construction).
"""

from fastapi import APIRouter

from cowconnect.api.v1.endpoints import health, posts, workshops

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
api_router.include_router(workshops.router, prefix="/workshops", tags=["workshops"])
