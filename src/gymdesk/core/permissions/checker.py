"""Permission checking over the access control context.

``AccessControl`` is the query surface UI guards and data-fetch call sites
use. Every query reads the context's current snapshot, never mutates it
and never raises: a context that is loading, signed out or misconfigured
answers with the most restrictive result.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar

from gymdesk.core.constants import DEFAULT_OWNER_FIELD
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.context import AccessControlContext, AccessSnapshot
from gymdesk.core.permissions.roles import Role, RoleName


T = TypeVar("T")


class AccessScope(str, Enum):
    """Which records ``filter_by_access`` should consider."""

    OWN = "own"
    ALL = "all"


# Named console areas mapped to the capability that opens them
ACCESS_AREAS: dict[str, Capability] = {
    "user_management": Capability.MANAGE_USERS,
    "user_viewing": Capability.VIEW_USERS,
    "user_creation": Capability.CREATE_USERS,
    "user_updating": Capability.UPDATE_USERS,
    "user_deletion": Capability.DELETE_USERS,
    "role_management": Capability.MANAGE_ROLES,
    "role_assignment": Capability.ASSIGN_ROLES,
    "role_viewing": Capability.VIEW_ROLES,
    "payment_management": Capability.MANAGE_PAYMENTS,
    "payment_viewing": Capability.VIEW_PAYMENTS,
    "payment_creation": Capability.CREATE_PAYMENTS,
    "payment_updating": Capability.UPDATE_PAYMENTS,
    "class_management": Capability.MANAGE_CLASSES,
    "class_viewing": Capability.VIEW_CLASSES,
    "class_creation": Capability.CREATE_CLASSES,
    "class_updating": Capability.UPDATE_CLASSES,
    "class_deletion": Capability.DELETE_CLASSES,
    "reports": Capability.VIEW_REPORTS,
    "data_export": Capability.EXPORT_DATA,
    "analytics": Capability.VIEW_ANALYTICS,
    "system_management": Capability.MANAGE_SYSTEM,
    "system_settings": Capability.VIEW_SYSTEM_SETTINGS,
    "system_updating": Capability.UPDATE_SYSTEM_SETTINGS,
    "sms_features": Capability.SEND_SMS,
    "notifications": Capability.SEND_NOTIFICATIONS,
    "communication_management": Capability.MANAGE_COMMUNICATION,
    "equipment_management": Capability.MANAGE_EQUIPMENT,
    "equipment_viewing": Capability.VIEW_EQUIPMENT,
    "equipment_creation": Capability.CREATE_EQUIPMENT,
    "equipment_updating": Capability.UPDATE_EQUIPMENT,
    "workout_management": Capability.MANAGE_WORKOUTS,
    "workout_viewing": Capability.VIEW_WORKOUTS,
    "workout_creation": Capability.CREATE_WORKOUTS,
    "workout_updating": Capability.UPDATE_WORKOUTS,
    "membership_management": Capability.MANAGE_MEMBERSHIPS,
    "membership_viewing": Capability.VIEW_MEMBERSHIPS,
    "membership_creation": Capability.CREATE_MEMBERSHIPS,
    "membership_updating": Capability.UPDATE_MEMBERSHIPS,
    "attendance_viewing": Capability.VIEW_ATTENDANCE,
    "attendance_management": Capability.MANAGE_ATTENDANCE,
    "check_in_out": Capability.CHECK_IN_OUT,
    "own_data_viewing": Capability.VIEW_OWN_DATA,
    "profile_updating": Capability.UPDATE_OWN_PROFILE,
    "all_members_viewing": Capability.VIEW_ALL_MEMBERS,
}


def _owner_of(item: Any, owner_field: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(owner_field)
    return getattr(item, owner_field, None)


class AccessControl:
    """Read-only permission queries for the acting user.

    Args:
        context: The session's access control context
    """

    def __init__(self, context: AccessControlContext) -> None:
        self.context = context

    @property
    def snapshot(self) -> AccessSnapshot:
        return self.context.snapshot

    @property
    def user(self):
        return self.snapshot.user

    @property
    def role(self) -> Role | None:
        return self.snapshot.role

    @property
    def is_loading(self) -> bool:
        return self.snapshot.loading

    def _ready(self) -> AccessSnapshot | None:
        snapshot = self.snapshot
        return snapshot if snapshot.authenticated else None

    # Permission checking

    def has_permission(self, key: Capability | str) -> bool:
        """Check a single capability; unknown keys are denied."""
        snapshot = self._ready()
        if snapshot is None:
            return False
        return snapshot.matrix.allows(key)

    def has_any_permission(self, keys: Iterable[Capability | str]) -> bool:
        """True if at least one key is granted; an empty list grants nothing."""
        return any(self.has_permission(key) for key in keys)

    def has_all_permissions(self, keys: Iterable[Capability | str]) -> bool:
        """True if every key is granted; an empty list is vacuously true."""
        return all(self.has_permission(key) for key in keys)

    def check_permission(self, resource: str, action: str) -> bool:
        """Check by resource/action pair against the role's permissions."""
        snapshot = self._ready()
        if snapshot is None or snapshot.role is None:
            return False
        return snapshot.role.allows(resource, action)

    def granted(self) -> list[Capability]:
        snapshot = self._ready()
        if snapshot is None:
            return []
        return snapshot.matrix.granted()

    @property
    def can_access(self) -> dict[str, bool]:
        """Named console areas and whether each is open to the caller."""
        return {area: self.has_permission(key) for area, key in ACCESS_AREAS.items()}

    # Role checking

    def is_role(self, role_id: RoleName | str) -> bool:
        snapshot = self._ready()
        if snapshot is None or snapshot.role is None:
            return False
        return snapshot.role.name == RoleName.parse(role_id)

    def is_admin(self) -> bool:
        return self.is_role(RoleName.ADMIN)

    def is_trainer(self) -> bool:
        return self.is_role(RoleName.TRAINER)

    def is_member(self) -> bool:
        return self.is_role(RoleName.MEMBER)

    def require_role(self, roles: RoleName | str | Iterable[RoleName | str]) -> bool:
        """Check membership of the caller's role in one role or a set of roles."""
        if isinstance(roles, str):
            return self.is_role(roles)
        return any(self.is_role(role) for role in roles)

    def has_role_level(self, min_level: int) -> bool:
        snapshot = self._ready()
        if snapshot is None or snapshot.role is None:
            return False
        return snapshot.role.level >= min_level

    # Data filtering

    def filter_by_access(
        self,
        items: Iterable[T],
        mode: AccessScope | str = AccessScope.ALL,
        owner_field: str = DEFAULT_OWNER_FIELD,
    ) -> list[T]:
        """Restrict records to what the caller may see.

        Records may be mappings or objects carrying ``owner_field``. With
        ``mode="all"`` a caller holding ``can_view_all_members`` gets every
        record; everyone else gets only the records they own. Without an
        acting user the result is always empty.

        Args:
            items: Records to filter
            mode: ``own`` or ``all``; unknown modes behave like ``own``
            owner_field: Field naming the owning user id

        Returns:
            The visible records, in their original order
        """
        snapshot = self._ready()
        if snapshot is None or snapshot.user is None:
            return []

        if mode == AccessScope.ALL and self.has_permission(Capability.VIEW_ALL_MEMBERS):
            return list(items)

        user_id = snapshot.user.id
        return [item for item in items if str(_owner_of(item, owner_field)) == user_id]
