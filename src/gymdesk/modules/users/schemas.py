"""Pydantic schemas for profiles and role changes."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from gymdesk.core.constants import MAX_NAME_LENGTH, MAX_REASON_LENGTH
from gymdesk.core.permissions.roles import RoleName


class UserProfile(BaseModel):
    """A user profile as read from the profile store.

    ``role`` keeps the stored string as-is; an unrecognized value is a
    configuration error that the access layer resolves by denying.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    email: EmailStr
    first_name: str = Field(..., max_length=MAX_NAME_LENGTH)
    last_name: str = Field(..., max_length=MAX_NAME_LENGTH)
    role: str
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def role_name(self) -> RoleName | None:
        """The stored role as a ``RoleName``, or None if unknown."""
        return RoleName.parse(self.role)


class RoleChangeRequest(BaseModel):
    """A sanctioned role change, recorded when the store accepts it."""

    user_id: str
    current_role: str
    new_role: RoleName
    requested_by: str
    reason: str | None = None


class RoleUpdate(BaseModel):
    """Request body for changing a user's role."""

    role: RoleName
    confirm: bool = False
    reason: str | None = Field(None, max_length=MAX_REASON_LENGTH)


class RoleSummary(BaseModel):
    """Role overview entry."""

    name: RoleName
    display_name: str
    description: str
    level: int
    permissions: list[str]


class AccessSummary(BaseModel):
    """The caller's resolved access."""

    user: UserProfile | None
    role: RoleName | None
    level: int | None
    capabilities: list[str]


class NavigationEntry(BaseModel):
    """A console section shown in navigation."""

    title: str
    url: str
