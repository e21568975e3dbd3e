"""Domain exceptions for the access control engine.

Permission queries never raise; these exceptions belong to the edges:
collaborator failures, sanctioned role mutations and the HTTP layer.
They are turned into RFC 7807 Problem Details by the exception handlers.
"""

from typing import Any

from gymdesk.core.constants import ACCESS_DENIED_MESSAGE


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found."""

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class ProfileNotFoundError(NotFoundError):
    """Raised by a profile store when no profile matches the user id.

    Example:
        raise ProfileNotFoundError(user_id)
    """

    message = "Profile not found"
    error_code = "profile_not_found"

    def __init__(self, user_id: str, **kwargs: Any) -> None:
        super().__init__(resource="profile", resource_id=str(user_id), **kwargs)
        self.user_id = str(user_id)


class ForbiddenError(AppException):
    """Raised when the caller is denied an operation.

    The message stays generic; the failed check is recorded in ``details``
    for logs only and is stripped from client responses.
    """

    message = ACCESS_DENIED_MESSAGE
    error_code = "access_denied"
    status_code = 403


class ConflictError(AppException):
    """Raised when a request conflicts with the current state."""

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class ConfirmationRequiredError(AppException):
    """Raised when a destructive change was attempted without confirmation.

    Example:
        raise ConfirmationRequiredError(
            "Demoting an administrator must be confirmed",
            details={"user_id": user_id, "current_role": "admin"},
        )
    """

    message = "Confirmation required"
    error_code = "confirmation_required"
    status_code = 428


class ConfigurationError(AppException):
    """Raised when stored data references an unknown role or permission."""

    message = "Access control misconfiguration"
    error_code = "configuration_error"
    status_code = 500


class ProfileStoreError(AppException):
    """Raised when the profile store cannot complete a read or write."""

    message = "Profile store unavailable"
    error_code = "profile_store_error"
    status_code = 503


class IdentityError(AppException):
    """Raised when the identity service cannot report the current session."""

    message = "Identity service unavailable"
    error_code = "identity_error"
    status_code = 503


class ServiceUnavailableError(AppException):
    """Raised when a required service is not wired up or unreachable."""

    message = "Service temporarily unavailable"
    error_code = "service_unavailable"
    status_code = 503
