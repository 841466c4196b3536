"""Domain entities."""

from cowconnect.domain.entities.post import PostEntity
from cowconnect.domain.entities.workshop import WorkshopEntity

__all__ = ["PostEntity", "WorkshopEntity"]
