"""Rules for changing another user's role.

These are pure predicates consulted before the profile store is asked to
apply a role change. An actor may only act on users strictly below them
in the hierarchy and may only grant roles strictly below their own.
"""

from typing import Protocol

from gymdesk.core.permissions.roles import ROLE_DEFINITIONS, RoleName, get_role, outranks


class RoleHolder(Protocol):
    """Anything with a user id and a stored role, e.g. ``UserProfile``."""

    id: str
    role: str


def can_assign_role(
    acting: RoleHolder, target: RoleHolder, proposed: RoleName | str
) -> bool:
    """Check whether ``acting`` may give ``target`` the ``proposed`` role.

    Rules, in order:
        1. Nobody changes their own role through this path.
        2. The actor must outrank the target's current role.
        3. The actor must outrank the proposed role.

    Unknown roles anywhere deny.
    """
    if str(acting.id) == str(target.id):
        return False
    if not outranks(acting.role, target.role):
        return False
    return outranks(acting.role, proposed)


def roles_below(role_id: RoleName | str | None) -> set[RoleName]:
    """Roles strictly below ``role_id``; empty for an unknown role."""
    actor_role = get_role(role_id)
    if actor_role is None:
        return set()
    return {
        name for name, role in ROLE_DEFINITIONS.items() if role.level < actor_role.level
    }


def get_assignable_roles(acting: RoleHolder) -> set[RoleName]:
    """Roles the actor may grant: everything strictly below their level."""
    return roles_below(acting.role)


def requires_confirmation(target: RoleHolder, proposed: RoleName | str) -> bool:
    """Moving a user away from ``admin`` must be explicitly confirmed."""
    return (
        RoleName.parse(target.role) is RoleName.ADMIN
        and RoleName.parse(proposed) is not RoleName.ADMIN
    )
