"""Logging setup and request-scoped log context."""

from cowconnect.shared.telemetry.logging import (
    get_logger,
    request_id_var,
    setup_logging,
)

__all__ = ["get_logger", "request_id_var", "setup_logging"]
