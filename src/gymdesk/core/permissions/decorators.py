"""Permission decorators for protected operations.

Decorated coroutines must receive the caller's ``AccessControl`` as the
``access`` keyword argument. A failed check raises ``ForbiddenError``
before the wrapped function runs.
"""

from collections.abc import Awaitable, Callable, Iterable
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

import structlog

from gymdesk.core.errors import ForbiddenError
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.checker import AccessControl
from gymdesk.core.permissions.roles import RoleName


logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")

Check = Callable[[AccessControl], bool]


def _get_access(kwargs: dict[str, Any]) -> AccessControl | None:
    access = kwargs.get("access")
    return cast("AccessControl", access) if isinstance(access, AccessControl) else None


def _guarded(
    check: Check, required: list[str]
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            access = _get_access(kwargs)

            if access is None:
                raise ForbiddenError(
                    error_code="access_context_missing",
                    details={"operation": func.__qualname__},
                )

            if not check(access):
                logger.debug(
                    "access_denied",
                    operation=func.__qualname__,
                    required=required,
                )
                raise ForbiddenError(details={"required": required})

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def require_permission(
    capability: Capability | str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Require a single capability.

    Usage:
        @require_permission(Capability.SEND_SMS)
        async def send_bulk_sms(message: str, *, access: AccessControl):
            ...
    """
    return _guarded(
        lambda access: access.has_permission(capability), [str(capability)]
    )


def require_any_permission(
    capabilities: Iterable[Capability | str],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Require at least one of the capabilities."""
    keys = list(capabilities)
    return _guarded(
        lambda access: access.has_any_permission(keys), [str(k) for k in keys]
    )


def require_all_permissions(
    capabilities: Iterable[Capability | str],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Require every one of the capabilities."""
    keys = list(capabilities)
    return _guarded(
        lambda access: access.has_all_permissions(keys), [str(k) for k in keys]
    )


def require_role(
    roles: RoleName | str | Iterable[RoleName | str],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Require the caller to hold one of ``roles``."""
    if isinstance(roles, str):
        wanted: list[RoleName | str] = [roles]
    else:
        wanted = list(roles)
    return _guarded(
        lambda access: access.require_role(wanted), [f"role:{r}" for r in wanted]
    )
