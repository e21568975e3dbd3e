"""Error handling module with RFC 7807 Problem Details."""

from gymdesk.core.errors.exceptions import (
    AppException,
    ConfigurationError,
    ConfirmationRequiredError,
    ConflictError,
    ForbiddenError,
    IdentityError,
    NotFoundError,
    ProfileNotFoundError,
    ProfileStoreError,
    ServiceUnavailableError,
)
from gymdesk.core.errors.handlers import ProblemDetail, register_exception_handlers


__all__ = [
    "AppException",
    "ConfigurationError",
    "ConfirmationRequiredError",
    "ConflictError",
    "ForbiddenError",
    "IdentityError",
    "NotFoundError",
    "ProblemDetail",
    "ProfileNotFoundError",
    "ProfileStoreError",
    "ServiceUnavailableError",
    "register_exception_handlers",
]
