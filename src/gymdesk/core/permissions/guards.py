"""Conditional rendering guards.

A guard answers one question for a view: show ``children``, show a
fallback, or show the standard access-denied indicator. It is
parameterised by a single capability, a list of capabilities with an
any/all mode, or a role / set of roles; checks run role first, then the
single capability, then the list.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from gymdesk.config import settings
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.checker import AccessControl
from gymdesk.core.permissions.roles import RoleName


# Rendered while the context is still resolving the session
LOADING = object()


@dataclass(frozen=True)
class AccessDenied:
    """The standard access-denied indicator."""

    reason: str
    message: str

    def __str__(self) -> str:
        return self.message


_DENIAL_MESSAGES = {
    "role": "You don't have the required role to view this content.",
    "permission": "You don't have permission to view this content.",
    "permissions": "You don't have the required permissions to view this content.",
}


class PermissionGuard:
    """Decide what a protected view renders for the acting user.

    Args:
        access: Query surface for the acting user
        permission: A single capability that must be granted
        permissions: Capabilities checked with any/all semantics
        require_all: Require every entry of ``permissions`` (default: any)
        role: A role or roles the caller must hold
        show_access_denied: Render the indicator on denial; False renders nothing
    """

    def __init__(
        self,
        access: AccessControl,
        permission: Capability | str | None = None,
        permissions: Sequence[Capability | str] | None = None,
        require_all: bool = False,
        role: RoleName | str | Iterable[RoleName | str] | None = None,
        show_access_denied: bool = True,
    ) -> None:
        self.access = access
        self.permission = permission
        self.permissions = permissions
        self.require_all = require_all
        self.role = role
        self.show_access_denied = show_access_denied

    def denial(self) -> str | None:
        """Kind of check that failed, or None when access is granted."""
        if self.role is not None and not self.access.require_role(self.role):
            return "role"
        if self.permission is not None and not self.access.has_permission(
            self.permission
        ):
            return "permission"
        if self.permissions is not None:
            if self.require_all:
                allowed = self.access.has_all_permissions(self.permissions)
            else:
                allowed = self.access.has_any_permission(self.permissions)
            if not allowed:
                return "permissions"
        return None

    def allows(self) -> bool:
        return not self.access.is_loading and self.denial() is None

    def render(self, children: Any, fallback: Any = None) -> Any:
        """Return what the view should display."""
        if self.access.is_loading:
            return LOADING

        reason = self.denial()
        if reason is None:
            return children
        if fallback is not None:
            return fallback
        if not self.show_access_denied:
            return None
        return AccessDenied(
            reason=reason,
            message=f"{settings.access_denied_message}. {_DENIAL_MESSAGES[reason]}",
        )


def admin_only(access: AccessControl) -> PermissionGuard:
    return PermissionGuard(access, role=RoleName.ADMIN, show_access_denied=False)


def trainer_or_admin(access: AccessControl) -> PermissionGuard:
    return PermissionGuard(
        access, role=[RoleName.ADMIN, RoleName.TRAINER], show_access_denied=False
    )


def member_or_above(access: AccessControl) -> PermissionGuard:
    return PermissionGuard(
        access,
        role=[RoleName.ADMIN, RoleName.TRAINER, RoleName.MEMBER],
        show_access_denied=False,
    )


# Console sections and the roles that see them in navigation
NAVIGATION: list[tuple[str, str, frozenset[RoleName]]] = [
    ("Dashboard", "/dashboard", frozenset(RoleName)),
    ("Members", "/members", frozenset({RoleName.ADMIN, RoleName.TRAINER})),
    ("Staff", "/staff", frozenset({RoleName.ADMIN})),
    ("Plans", "/plans", frozenset({RoleName.ADMIN})),
    ("Attendance", "/attendance", frozenset(RoleName)),
    ("Schedules", "/schedules", frozenset(RoleName)),
    ("Payments", "/payments", frozenset({RoleName.ADMIN, RoleName.TRAINER})),
    ("SMS", "/sms", frozenset({RoleName.ADMIN, RoleName.TRAINER})),
    ("Reports", "/reports", frozenset({RoleName.ADMIN, RoleName.TRAINER})),
    ("Settings", "/settings", frozenset(RoleName)),
]


def filter_navigation(role: RoleName | str | None) -> list[tuple[str, str]]:
    """Navigation entries visible to ``role``; unknown roles see none."""
    name = RoleName.parse(role)
    if name is None:
        return []
    return [(title, url) for title, url, roles in NAVIGATION if name in roles]
