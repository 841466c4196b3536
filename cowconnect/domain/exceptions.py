"""Domain exceptions for the CowConnect application.

Every user-initiated operation ends either in a result value or in one of
these exceptions. Each carries a machine-readable error_code and a retryable
flag; the presentation layer maps them to a discriminated JSON response in
the exception handlers.
"""

from typing import Any


class CowConnectException(Exception):
    """Base exception for all CowConnect application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
        retryable: Whether the user may simply resubmit the same request.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the discriminated error body sent to clients."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }


class ValidationException(CowConnectException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name."""
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CowConnectException):
    """Raised when the caller is not signed in or the ID token is invalid."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CowConnectException):
    """Raised when the caller's role or ownership does not allow the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'post', 'workshop').
            action: Optional action that was attempted (e.g. 'attest', 'edit').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(CowConnectException):
    """Raised when a post, workshop or profile is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'post', 'workshop', 'profile').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AlreadyRegisteredException(CowConnectException):
    """Raised when a user registers again for a workshop they are registered for."""

    def __init__(self, workshop_id: str, user_id: str) -> None:
        super().__init__(
            "Already registered for this workshop",
            "ALREADY_REGISTERED",
            {"workshop_id": workshop_id, "user_id": user_id},
        )


class ContentRejectedException(CowConnectException):
    """Raised when the content gate judges a submission irrelevant. Terminal."""

    def __init__(self, message: str = "Post is not relevant to the community") -> None:
        super().__init__(message, "CONTENT_REJECTED")


class UpstreamUnavailableException(CowConnectException):
    """Raised when the classification service could not give a usable verdict."""

    retryable = True

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            "Content analysis is temporarily unavailable; please try again later",
            "UPSTREAM_UNAVAILABLE",
            {"reason": reason} if reason else {},
        )


class PersistenceFailureException(CowConnectException):
    """Raised when an atomic commit is aborted; nothing was written."""

    retryable = True

    def __init__(self, operation: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"operation": operation}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Could not save changes ({operation}); please try again",
            "PERSISTENCE_FAILURE",
            details,
        )


class StoreNotConfiguredException(CowConnectException):
    """Raised when an operation needs Firestore but no credentials are configured."""

    retryable = True

    def __init__(self) -> None:
        super().__init__(
            message="The document store is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
