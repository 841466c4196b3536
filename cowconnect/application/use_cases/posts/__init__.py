"""Post use cases."""

from cowconnect.application.use_cases.posts.post_operations import PostService

__all__ = ["PostService"]
