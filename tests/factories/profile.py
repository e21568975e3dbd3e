"""Profile factory for tests."""

from datetime import UTC, datetime
from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from gymdesk.core.permissions.roles import RoleName
from gymdesk.modules.users.schemas import UserProfile


class UserProfileFactory(ModelFactory[UserProfile]):
    """Factory for creating test UserProfile instances."""

    __model__ = UserProfile

    @classmethod
    def id(cls) -> str:
        return str(uuid4())

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def first_name(cls) -> str:
        return "Test"

    @classmethod
    def last_name(cls) -> str:
        return f"User {uuid4().hex[:4]}"

    @classmethod
    def role(cls) -> str:
        """Default to the least privileged role."""
        return RoleName.MEMBER.value

    @classmethod
    def created_at(cls) -> datetime:
        return datetime.now(UTC)

    @classmethod
    def updated_at(cls) -> datetime:
        return datetime.now(UTC)
