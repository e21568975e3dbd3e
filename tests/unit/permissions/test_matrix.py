"""Tests for permission matrix generation."""

import pytest

from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.matrix import EMPTY_MATRIX, generate_matrix
from gymdesk.core.permissions.roles import ROLE_DEFINITIONS, RoleName


pytestmark = pytest.mark.unit

MANAGEMENT = [
    Capability.MANAGE_USERS,
    Capability.MANAGE_ROLES,
    Capability.MANAGE_SYSTEM,
    Capability.MANAGE_PAYMENTS,
]


class TestGenerateMatrix:
    """Tests for generate_matrix."""

    @pytest.mark.parametrize("name", list(RoleName))
    def test_matches_role_permission_membership(self, name):
        matrix = generate_matrix(name)
        role = ROLE_DEFINITIONS[name]

        for capability in Capability:
            assert matrix[capability] is (capability.permission_id in role.permissions)

    @pytest.mark.parametrize("name", list(RoleName))
    def test_deterministic(self, name):
        assert generate_matrix(name) == generate_matrix(name.value)

    def test_covers_every_capability(self):
        assert set(generate_matrix("member")) == set(Capability)

    def test_admin_has_everything(self):
        matrix = generate_matrix(RoleName.ADMIN)
        assert all(matrix.values())

    def test_member_has_no_management_capability(self):
        matrix = generate_matrix(RoleName.MEMBER)
        assert not any(matrix[c] for c in MANAGEMENT)

    def test_member_grants(self):
        assert generate_matrix("member").granted() == [
            Capability.VIEW_CLASSES,
            Capability.VIEW_EQUIPMENT,
            Capability.VIEW_WORKOUTS,
            Capability.VIEW_ATTENDANCE,
            Capability.CHECK_IN_OUT,
            Capability.VIEW_OWN_DATA,
            Capability.UPDATE_OWN_PROFILE,
        ]

    @pytest.mark.parametrize("role_id", ["owner", "", None, "ADMIN"])
    def test_unknown_role_fails_closed(self, role_id):
        matrix = generate_matrix(role_id)

        assert matrix is EMPTY_MATRIX
        assert not any(matrix.values())

    def test_lookup_by_string_key(self):
        matrix = generate_matrix("trainer")

        assert matrix["can_send_sms"] is True
        assert matrix.allows("can_manage_system") is False

    def test_unknown_key(self):
        matrix = generate_matrix("admin")

        assert matrix.allows("can_fly") is False
        assert "can_fly" not in matrix
        with pytest.raises(KeyError):
            matrix["can_fly"]

    def test_to_dict_uses_plain_keys(self):
        data = generate_matrix("trainer").to_dict()

        assert data["can_manage_classes"] is True
        assert data["can_delete_classes"] is False
        assert len(data) == len(Capability)
