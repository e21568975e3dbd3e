"""Role-based access control: catalog, roles, matrices and checks."""

from gymdesk.core.permissions.catalog import (
    PERMISSIONS,
    Capability,
    Permission,
    lookup_permission,
)
from gymdesk.core.permissions.roles import (
    ROLE_DEFINITIONS,
    Role,
    RoleName,
    get_role,
    outranks,
)
from gymdesk.core.permissions.matrix import PermissionMatrix, generate_matrix
from gymdesk.core.permissions.context import (
    AccessControlContext,
    AccessSnapshot,
    ContextState,
)
from gymdesk.core.permissions.checker import AccessControl, AccessScope
from gymdesk.core.permissions.assignment import (
    can_assign_role,
    get_assignable_roles,
    requires_confirmation,
)
from gymdesk.core.permissions.guards import (
    LOADING,
    AccessDenied,
    PermissionGuard,
    admin_only,
    filter_navigation,
    member_or_above,
    trainer_or_admin,
)
from gymdesk.core.permissions.decorators import (
    require_all_permissions,
    require_any_permission,
    require_permission,
    require_role,
)


__all__ = [
    "LOADING",
    "PERMISSIONS",
    "ROLE_DEFINITIONS",
    "AccessControl",
    "AccessControlContext",
    "AccessDenied",
    "AccessScope",
    "AccessSnapshot",
    "Capability",
    "ContextState",
    "Permission",
    "PermissionGuard",
    "PermissionMatrix",
    "Role",
    "RoleName",
    "admin_only",
    "can_assign_role",
    "filter_navigation",
    "generate_matrix",
    "get_assignable_roles",
    "get_role",
    "lookup_permission",
    "member_or_above",
    "outranks",
    "require_all_permissions",
    "require_any_permission",
    "require_permission",
    "require_role",
    "requires_confirmation",
    "trainer_or_admin",
]
