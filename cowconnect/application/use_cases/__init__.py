"""Application use cases: one entry point per workflow."""

from cowconnect.application.use_cases.posts import PostService
from cowconnect.application.use_cases.workshops import WorkshopService

__all__ = [
    "PostService",
    "WorkshopService",
]
