"""Role management: listing users and applying sanctioned role changes."""

from collections import Counter
from datetime import UTC, datetime

import structlog

from gymdesk.core.errors import (
    ConfirmationRequiredError,
    ForbiddenError,
    NotFoundError,
    ProfileNotFoundError,
)
from gymdesk.core.permissions.assignment import (
    can_assign_role,
    get_assignable_roles,
    requires_confirmation,
)
from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.checker import AccessControl
from gymdesk.core.permissions.roles import RoleName
from gymdesk.modules.users.repos import ProfileStore
from gymdesk.modules.users.schemas import RoleChangeRequest, UserProfile


logger = structlog.get_logger()


class RoleManagementService:
    """Service behind the role management screen.

    Keeps a local cache of profiles for searching and statistics. A role
    change re-reads its target from the store before the assignment rules
    run. The store is written before the cache, so a failed write leaves
    the cache as it was.
    """

    def __init__(self, store: ProfileStore, access: AccessControl) -> None:
        self.store = store
        self.access = access
        self._profiles: dict[str, UserProfile] = {}

    @property
    def profiles(self) -> list[UserProfile]:
        return list(self._profiles.values())

    async def load_users(self) -> list[UserProfile]:
        """Fetch all profiles into the cache.

        Raises:
            ForbiddenError: If the caller cannot view users
            ProfileStoreError: If the store fails
        """
        if not self.access.has_permission(Capability.VIEW_USERS):
            raise ForbiddenError(details={"required": [Capability.VIEW_USERS.value]})

        profiles = await self.store.list_profiles()
        self._profiles = {profile.id: profile for profile in profiles}
        return self.profiles

    def search(self, term: str = "", role: str = "all") -> list[UserProfile]:
        """Filter cached profiles by name/email substring and by role."""
        needle = term.strip().lower()
        results = self.profiles

        if needle:
            results = [
                p
                for p in results
                if needle in p.first_name.lower()
                or needle in p.last_name.lower()
                or needle in p.email.lower()
            ]

        if role != "all":
            results = [p for p in results if p.role == role]

        return results

    def role_counts(self) -> dict[RoleName, int]:
        """Number of cached profiles per role."""
        counts = Counter(p.role_name for p in self._profiles.values())
        return {name: counts.get(name, 0) for name in RoleName}

    def assignable_roles(self) -> set[RoleName]:
        user = self.access.user
        if user is None or not self.access.snapshot.authenticated:
            return set()
        return get_assignable_roles(user)

    async def change_role(
        self,
        target_id: str,
        new_role: RoleName | str,
        confirm: bool = False,
        reason: str | None = None,
    ) -> UserProfile:
        """Change another user's role.

        Args:
            target_id: User whose role changes
            new_role: The role to grant
            confirm: Explicit confirmation, required when demoting an admin
            reason: Free-text note recorded with the change

        Returns:
            The target's profile with the new role

        Raises:
            ForbiddenError: If the caller may not make this change
            ConfirmationRequiredError: If an admin demotion is unconfirmed
            NotFoundError: If the target profile does not exist
            ProfileStoreError: If the store read or update fails
        """
        acting = self.access.user
        if acting is None or not self.access.snapshot.authenticated:
            raise ForbiddenError(error_code="auth_required")

        role = RoleName.parse(new_role)
        if role is None:
            raise ForbiddenError(details={"proposed_role": str(new_role)})

        # Judge the change against the stored role, not the cached one
        try:
            target = await self.store.get_profile(target_id)
        except ProfileNotFoundError as exc:
            raise NotFoundError(
                "User not found", resource="profile", resource_id=target_id
            ) from exc
        if target.id in self._profiles:
            self._profiles[target.id] = target

        if not can_assign_role(acting, target, role):
            raise ForbiddenError(
                details={
                    "acting_role": acting.role,
                    "target_role": target.role,
                    "proposed_role": role.value,
                }
            )

        if requires_confirmation(target, role) and not confirm:
            raise ConfirmationRequiredError(
                "Changing an administrator's role must be confirmed",
                details={"user_id": target.id, "current_role": target.role},
            )

        request = RoleChangeRequest(
            user_id=target.id,
            current_role=target.role,
            new_role=role,
            requested_by=acting.id,
            reason=reason,
        )
        updated_at = datetime.now(UTC)

        try:
            await self.store.update_profile(
                target.id, {"role": role.value, "updated_at": updated_at}
            )
        except Exception:
            logger.error("role_change_failed", **request.model_dump(mode="json"))
            raise

        updated = target.model_copy(update={"role": role.value, "updated_at": updated_at})
        if target.id in self._profiles:
            self._profiles[target.id] = updated

        logger.info("role_changed", **request.model_dump(mode="json"))
        return updated
