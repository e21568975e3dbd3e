"""Permission matrix generation.

A matrix is the flattened, per-role projection of a role's permission set:
one boolean per ``Capability``. It is derived data, regenerated on demand
and never stored.
"""

from collections.abc import Iterator, Mapping
from functools import lru_cache

import structlog

from gymdesk.core.permissions.catalog import Capability
from gymdesk.core.permissions.roles import ROLE_DEFINITIONS, RoleName


logger = structlog.get_logger()


class PermissionMatrix(Mapping[Capability, bool]):
    """Read-only mapping from every capability to whether it is granted.

    Indexing with an unknown key raises ``KeyError`` like any mapping;
    ``allows`` denies it instead.
    """

    __slots__ = ("_grants",)

    def __init__(self, granted: frozenset[Capability] = frozenset()) -> None:
        self._grants = {capability: capability in granted for capability in Capability}

    def __getitem__(self, key: Capability | str) -> bool:
        capability = Capability.parse(key)
        if capability is None:
            raise KeyError(key)
        return self._grants[capability]

    def __iter__(self) -> Iterator[Capability]:
        return iter(self._grants)

    def __len__(self) -> int:
        return len(self._grants)

    def __repr__(self) -> str:
        return f"<PermissionMatrix(granted={len(self.granted())}/{len(self)})>"

    def allows(self, key: Capability | str) -> bool:
        """Fail-closed lookup: unknown keys are denied."""
        capability = Capability.parse(key)
        if capability is None:
            return False
        return self._grants[capability]

    def granted(self) -> list[Capability]:
        """Capabilities set to True, in declaration order."""
        return [capability for capability, allowed in self._grants.items() if allowed]

    def to_dict(self) -> dict[str, bool]:
        return {capability.value: allowed for capability, allowed in self._grants.items()}


EMPTY_MATRIX = PermissionMatrix()


@lru_cache(maxsize=None)
def _matrix_for(name: RoleName) -> PermissionMatrix:
    role = ROLE_DEFINITIONS[name]
    return PermissionMatrix(
        frozenset(
            capability
            for capability in Capability
            if role.has_permission(capability.permission_id)
        )
    )


def generate_matrix(role_id: "str | RoleName | None") -> PermissionMatrix:
    """Build the permission matrix for a role.

    Unknown roles get the all-false matrix and are logged as a
    configuration problem.
    """
    name = RoleName.parse(role_id)
    if name is None:
        logger.error("unknown_role", role=str(role_id))
        return EMPTY_MATRIX
    return _matrix_for(name)
