"""Unit tests for role assignment rules."""

import pytest

from gymdesk.core.permissions.assignment import (
    can_assign_role,
    get_assignable_roles,
    requires_confirmation,
    roles_below,
)
from gymdesk.core.permissions.roles import RoleName
from tests.factories import UserProfileFactory


pytestmark = pytest.mark.unit


class TestCanAssignRole:
    """Tests for can_assign_role."""

    @pytest.mark.parametrize("role", list(RoleName))
    @pytest.mark.parametrize("proposed", list(RoleName))
    def test_nobody_changes_their_own_role(self, role, proposed):
        user = UserProfileFactory.build(role=role.value)

        assert can_assign_role(user, user, proposed) is False

    def test_admin_demotes_trainer_to_member(self, admin, trainer):
        assert can_assign_role(admin, trainer, RoleName.MEMBER)

    def test_admin_promotes_member_to_trainer(self, admin, member):
        assert can_assign_role(admin, member, "trainer")

    def test_admin_cannot_grant_admin(self, admin, trainer):
        assert not can_assign_role(admin, trainer, RoleName.ADMIN)

    def test_admin_cannot_act_on_other_admin(self, admin, other_admin):
        assert not can_assign_role(admin, other_admin, RoleName.MEMBER)

    def test_trainer_cannot_act_on_trainer(self, trainer, other_trainer):
        assert not can_assign_role(trainer, other_trainer, RoleName.MEMBER)

    def test_trainer_cannot_grant_trainer(self, trainer, member):
        assert not can_assign_role(trainer, member, RoleName.TRAINER)

    def test_trainer_may_act_on_member(self, trainer, member):
        assert can_assign_role(trainer, member, RoleName.MEMBER)

    def test_member_cannot_assign(self, member, other_member):
        assert not can_assign_role(member, other_member, RoleName.MEMBER)

    def test_unknown_roles_deny(self, admin):
        stranger = UserProfileFactory.build(role="owner")

        assert not can_assign_role(admin, stranger, RoleName.MEMBER)
        assert not can_assign_role(stranger, admin, RoleName.MEMBER)
        assert not can_assign_role(admin, stranger, "superuser")


class TestAssignableRoles:
    """Tests for get_assignable_roles and roles_below."""

    def test_admin(self, admin):
        assert get_assignable_roles(admin) == {RoleName.TRAINER, RoleName.MEMBER}

    def test_trainer(self, trainer):
        assert get_assignable_roles(trainer) == {RoleName.MEMBER}

    def test_member(self, member):
        assert get_assignable_roles(member) == set()

    def test_unknown_role(self):
        assert roles_below("owner") == set()
        assert roles_below(None) == set()


class TestRequiresConfirmation:
    """Tests for the admin demotion confirmation rule."""

    def test_demoting_admin(self, admin):
        assert requires_confirmation(admin, RoleName.TRAINER)
        assert requires_confirmation(admin, "member")

    def test_admin_to_admin(self, admin):
        assert not requires_confirmation(admin, RoleName.ADMIN)

    def test_non_admin_target(self, trainer):
        assert not requires_confirmation(trainer, RoleName.MEMBER)
