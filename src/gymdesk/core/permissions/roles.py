"""Role definitions and the role hierarchy.

Roles are configuration: they are built once at import time and never
change while the process runs. The hierarchy is a total order over
``RoleName`` by level; ``outranks`` is the single comparison that both the
role lookups and the mutation guard use.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from gymdesk.core.constants import ADMIN_LEVEL, MEMBER_LEVEL, TRAINER_LEVEL
from gymdesk.core.errors import ConfigurationError
from gymdesk.core.permissions import catalog
from gymdesk.core.permissions.catalog import PERMISSIONS, Permission


class RoleName(str, Enum):
    """The closed set of roles a profile may carry."""

    ADMIN = "admin"
    TRAINER = "trainer"
    MEMBER = "member"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | RoleName | None") -> "RoleName | None":
        """Resolve a stored role string, or None if it isn't a known role."""
        try:
            return cls(value)
        except ValueError:
            return None


class Role(BaseModel):
    """A named bundle of permissions plus a hierarchy level."""

    model_config = ConfigDict(frozen=True)

    name: RoleName
    display_name: str
    description: str
    level: int
    permissions: frozenset[str]

    @property
    def id(self) -> str:
        return self.name.value

    def has_permission(self, permission_id: str) -> bool:
        """Check whether the role holds the permission with this id."""
        return permission_id in self.permissions

    def allows(self, resource: str, action: str) -> bool:
        """Check whether any held permission governs ``resource``/``action``."""
        return any(
            p.resource == resource and p.action == action
            for p in self.permission_objects()
        )

    def permission_objects(self) -> list[Permission]:
        """Held permissions as catalog records, in catalog order."""
        return [p for p in PERMISSIONS.values() if p.id in self.permissions]


def _ids(*permissions: Permission) -> frozenset[str]:
    return frozenset(p.id for p in permissions)


ROLE_DEFINITIONS: dict[RoleName, Role] = {
    RoleName.ADMIN: Role(
        name=RoleName.ADMIN,
        display_name="Administrator",
        description="Full system access with all permissions",
        level=ADMIN_LEVEL,
        permissions=frozenset(PERMISSIONS),
    ),
    RoleName.TRAINER: Role(
        name=RoleName.TRAINER,
        display_name="Trainer",
        description="Can manage classes, workouts, and view member data",
        level=TRAINER_LEVEL,
        permissions=_ids(
            catalog.VIEW_USERS,
            catalog.VIEW_ALL_MEMBERS,
            catalog.MANAGE_CLASSES,
            catalog.VIEW_CLASSES,
            catalog.CREATE_CLASSES,
            catalog.UPDATE_CLASSES,
            catalog.MANAGE_WORKOUTS,
            catalog.VIEW_WORKOUTS,
            catalog.CREATE_WORKOUTS,
            catalog.UPDATE_WORKOUTS,
            catalog.VIEW_REPORTS,
            catalog.VIEW_ANALYTICS,
            catalog.SEND_SMS,
            catalog.SEND_NOTIFICATIONS,
            catalog.VIEW_EQUIPMENT,
            catalog.VIEW_ATTENDANCE,
            catalog.MANAGE_ATTENDANCE,
            catalog.VIEW_MEMBERSHIPS,
            catalog.VIEW_OWN_DATA,
            catalog.UPDATE_OWN_PROFILE,
            catalog.CHECK_IN_OUT,
        ),
    ),
    RoleName.MEMBER: Role(
        name=RoleName.MEMBER,
        display_name="Member",
        description="Basic access to personal data and gym features",
        level=MEMBER_LEVEL,
        permissions=_ids(
            catalog.VIEW_CLASSES,
            catalog.VIEW_WORKOUTS,
            catalog.VIEW_EQUIPMENT,
            catalog.VIEW_OWN_DATA,
            catalog.UPDATE_OWN_PROFILE,
            catalog.CHECK_IN_OUT,
            # Own attendance only
            catalog.VIEW_ATTENDANCE,
        ),
    ),
}


def get_role(role_id: "str | RoleName | None") -> Role | None:
    """Look up a role definition.

    An unknown id is a configuration error; callers must treat None as
    "deny", never as a default grant.
    """
    name = RoleName.parse(role_id)
    if name is None:
        return None
    return ROLE_DEFINITIONS[name]


def roles_by_level(descending: bool = True) -> list[Role]:
    """All roles ordered by hierarchy level."""
    return sorted(
        ROLE_DEFINITIONS.values(), key=lambda role: role.level, reverse=descending
    )


def outranks(actor: "str | RoleName | None", other: "str | RoleName | None") -> bool:
    """True iff ``actor`` is strictly above ``other`` in the hierarchy.

    Unknown roles on either side never outrank and are never outranked.
    """
    actor_role = get_role(actor)
    other_role = get_role(other)
    if actor_role is None or other_role is None:
        return False
    return actor_role.level > other_role.level


def validate_role_definitions(definitions: dict[RoleName, Role]) -> None:
    """Check role definitions against the catalog and the hierarchy.

    Raises:
        ConfigurationError: If a role names an unknown permission, is
            missing, or shares its level with another role
    """
    missing = set(RoleName) - set(definitions)
    if missing:
        raise ConfigurationError(
            "Role definitions are incomplete",
            details={"missing_roles": sorted(name.value for name in missing)},
        )

    for name, role in definitions.items():
        unknown = role.permissions - PERMISSIONS.keys()
        if unknown:
            raise ConfigurationError(
                f"Role '{name.value}' references unknown permissions",
                details={"role": name.value, "permissions": sorted(unknown)},
            )

    levels = [role.level for role in definitions.values()]
    if len(set(levels)) != len(levels):
        raise ConfigurationError("Role levels must be distinct")


validate_role_definitions(ROLE_DEFINITIONS)
