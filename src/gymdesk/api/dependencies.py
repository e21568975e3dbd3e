"""Shared API dependencies.

The access control context and the profile store are owned by the
application (``app.state``) and injected into routes from there.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Annotated

from fastapi import Depends, Request

from gymdesk.core.errors import ForbiddenError, ServiceUnavailableError
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.checker import AccessControl
from gymdesk.core.permissions.context import AccessControlContext
from gymdesk.core.permissions.roles import RoleName
from gymdesk.modules.users.repos import ProfileStore


def get_access_context(request: Request) -> AccessControlContext:
    context = getattr(request.app.state, "access_context", None)
    if context is None:
        raise ServiceUnavailableError(error_code="access_context_missing")
    return context


def get_access_control(
    context: Annotated[AccessControlContext, Depends(get_access_context)],
) -> AccessControl:
    return AccessControl(context)


def get_profile_store(
    context: Annotated[AccessControlContext, Depends(get_access_context)],
) -> ProfileStore:
    return context.profiles


Access = Annotated[AccessControl, Depends(get_access_control)]
Profiles = Annotated[ProfileStore, Depends(get_profile_store)]


def _dependency(
    check: Callable[[AccessControl], bool], required: list[str]
) -> Callable[[AccessControl], Awaitable[AccessControl]]:
    async def dependency(access: Access) -> AccessControl:
        if not check(access):
            raise ForbiddenError(details={"required": required})
        return access

    return dependency


def require_permission(capability: Capability | str):
    """Route dependency requiring one capability.

    Usage:
        @router.get("/payments", dependencies=[Depends(require_permission("can_view_payments"))])
    """
    return _dependency(lambda a: a.has_permission(capability), [str(capability)])


def require_any_permission(capabilities: Iterable[Capability | str]):
    keys = list(capabilities)
    return _dependency(lambda a: a.has_any_permission(keys), [str(k) for k in keys])


def require_all_permissions(capabilities: Iterable[Capability | str]):
    keys = list(capabilities)
    return _dependency(lambda a: a.has_all_permissions(keys), [str(k) for k in keys])


def require_role(roles: RoleName | str | Iterable[RoleName | str]):
    wanted = [roles] if isinstance(roles, str) else list(roles)
    return _dependency(lambda a: a.require_role(wanted), [f"role:{r}" for r in wanted])
