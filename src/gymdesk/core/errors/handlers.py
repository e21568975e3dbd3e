"""RFC 7807 Problem Details exception handlers.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from gymdesk.config import settings
from gymdesk.core.errors.exceptions import AppException, ForbiddenError


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema."""

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None

    model_config = {"extra": "allow"}


def _get_error_type_uri(error_code: str) -> str:
    return f"{settings.api_docs_base_url}/errors/{error_code}"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException subclasses to Problem Details responses.

    Denials are expected outcomes and are logged at debug level; their
    details never reach the client.
    """
    log = logger.debug if isinstance(exc, ForbiddenError) else logger.warning
    log(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )

    if isinstance(exc, ForbiddenError):
        detail = settings.access_denied_message
    else:
        detail = exc.message

    content: dict[str, Any] = ProblemDetail(
        type=_get_error_type_uri(exc.error_code),
        title=exc.error_code.replace("_", " ").title(),
        status=exc.status_code,
        detail=detail,
        instance=str(request.url.path),
    ).model_dump(exclude_none=True)

    if exc.details and not isinstance(exc, ForbiddenError):
        for key, value in exc.details.items():
            content.setdefault(key, value)

    return JSONResponse(status_code=exc.status_code, content=content)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic 500; the real error is only logged."""
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ProblemDetail(
            type=_get_error_type_uri("internal_error"),
            title="Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
            instance=str(request.url.path),
        ).model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the Problem Details handlers on ``app``."""
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
