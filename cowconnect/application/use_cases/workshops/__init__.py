"""Workshop use cases."""

from cowconnect.application.use_cases.workshops.workshop_operations import (
    WorkshopService,
)

__all__ = ["WorkshopService"]
