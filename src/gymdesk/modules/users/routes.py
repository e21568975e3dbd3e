"""Access control endpoints: the caller's access, role overview, role changes."""

from typing import Any

from fastapi import APIRouter, Depends

from gymdesk.api.dependencies import Access, Profiles, require_permission
from gymdesk.core.permissions import decorators
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.guards import filter_navigation
from gymdesk.core.permissions.matrix import generate_matrix
from gymdesk.core.permissions.roles import RoleName, roles_by_level
from gymdesk.modules.users.schemas import (
    AccessSummary,
    NavigationEntry,
    RoleSummary,
    RoleUpdate,
    UserProfile,
)
from gymdesk.modules.users.services import RoleManagementService


router = APIRouter(prefix="/access", tags=["access"])


@router.get("/me", response_model=AccessSummary)
async def read_my_access(access: Access) -> AccessSummary:
    """The caller's profile, role and granted capabilities."""
    role = access.role if access.snapshot.authenticated else None
    return AccessSummary(
        user=access.user if role else None,
        role=role.name if role else None,
        level=role.level if role else None,
        capabilities=[c.value for c in access.granted()],
    )


@router.get(
    "/roles",
    response_model=list[RoleSummary],
    dependencies=[Depends(require_permission(Capability.VIEW_ROLES))],
)
async def list_roles() -> list[RoleSummary]:
    return [
        RoleSummary(
            name=role.name,
            display_name=role.display_name,
            description=role.description,
            level=role.level,
            permissions=[p.id for p in role.permission_objects()],
        )
        for role in roles_by_level()
    ]


@router.get("/matrix")
@decorators.require_permission(Capability.VIEW_ROLES)
async def read_matrix(access: Access) -> dict[str, Any]:
    """Capability x role grid."""
    return {
        role.name.value: generate_matrix(role.name).to_dict()
        for role in roles_by_level()
    }


@router.get("/assignable-roles", response_model=list[RoleName])
async def list_assignable_roles(access: Access, profiles: Profiles) -> list[RoleName]:
    service = RoleManagementService(profiles, access)
    return sorted(service.assignable_roles(), key=lambda name: name.value)


@router.put("/users/{user_id}/role", response_model=UserProfile)
async def change_user_role(
    user_id: str,
    body: RoleUpdate,
    access: Access,
    profiles: Profiles,
) -> UserProfile:
    """Change another user's role through the assignment rules."""
    service = RoleManagementService(profiles, access)
    return await service.change_role(
        user_id, body.role, confirm=body.confirm, reason=body.reason
    )


@router.get("/navigation", response_model=list[NavigationEntry])
async def read_navigation(access: Access) -> list[NavigationEntry]:
    """Console sections visible to the caller; empty when signed out."""
    role = access.role if access.snapshot.authenticated else None
    return [
        NavigationEntry(title=title, url=url)
        for title, url in filter_navigation(role.name if role else None)
    ]
