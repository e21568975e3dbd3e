"""Profile store: the protocol the access layer consumes and its SQLAlchemy adapter."""

from typing import Any, Protocol
from uuid import UUID

import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.core.errors import ConflictError, ProfileNotFoundError, ProfileStoreError
from gymdesk.modules.users.models import Profile
from gymdesk.modules.users.schemas import UserProfile


logger = structlog.get_logger()

# Columns update_profile may write
UPDATABLE_FIELDS = frozenset({"email", "first_name", "last_name", "role", "updated_at"})


class ProfileStore(Protocol):
    """Read/write access to user profiles."""

    async def get_profile(self, user_id: str) -> UserProfile:
        """Fetch one profile.

        Raises:
            ProfileNotFoundError: If no profile has this id
            ProfileStoreError: If the store fails
        """
        ...

    async def list_profiles(self) -> list[UserProfile]:
        """All profiles, newest first.

        Raises:
            ProfileStoreError: If the store fails
        """
        ...

    async def update_profile(self, user_id: str, fields: dict[str, Any]) -> None:
        """Apply ``fields`` to one profile.

        Raises:
            ProfileNotFoundError: If no profile has this id
            ProfileStoreError: If the store fails
        """
        ...


def to_user_profile(profile: Profile) -> UserProfile:
    """Convert a row, raising ``ProfileStoreError`` if it fails validation."""
    try:
        return UserProfile(
            id=str(profile.id),
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            role=profile.role,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
    except ValidationError as exc:
        logger.error(
            "profile_row_invalid",
            user_id=str(profile.id),
            errors=exc.error_count(),
        )
        raise ProfileStoreError(
            "Stored profile is invalid", details={"user_id": str(profile.id)}
        ) from exc


class ProfileRepository:
    """SQLAlchemy-backed profile store.

    Database errors are wrapped in ``ProfileStoreError``; nothing is
    retried here.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get(self, user_id: str) -> Profile:
        try:
            key = UUID(str(user_id))
        except ValueError as exc:
            raise ProfileNotFoundError(user_id) from exc

        try:
            result = await self.session.execute(select(Profile).where(Profile.id == key))
            profile = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("profile_store_read_failed", user_id=str(user_id), error=str(exc))
            raise ProfileStoreError(details={"user_id": str(user_id)}) from exc

        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def get_profile(self, user_id: str) -> UserProfile:
        """Get a profile by user id.

        Args:
            user_id: The identity service's user id

        Returns:
            The profile

        Raises:
            ProfileNotFoundError: If not found or the id is malformed
            ProfileStoreError: On database failure
        """
        return to_user_profile(await self._get(user_id))

    async def list_profiles(self) -> list[UserProfile]:
        try:
            result = await self.session.execute(
                select(Profile).order_by(Profile.created_at.desc())
            )
            rows = result.scalars().all()
        except SQLAlchemyError as exc:
            logger.error("profile_store_read_failed", error=str(exc))
            raise ProfileStoreError() from exc
        return [to_user_profile(row) for row in rows]

    async def create(self, profile: Profile) -> UserProfile:
        """Insert a profile row and return it as a ``UserProfile``.

        Raises:
            ConflictError: If a profile with this id already exists
            ProfileStoreError: If the write fails
        """
        try:
            self.session.add(profile)
            await self.session.commit()
            await self.session.refresh(profile)
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(
                "Profile already exists", details={"user_id": str(profile.id)}
            ) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise ProfileStoreError() from exc
        return to_user_profile(profile)

    async def update_profile(self, user_id: str, fields: dict[str, Any]) -> None:
        """Write ``fields`` to the profile and commit.

        Args:
            user_id: The profile to update
            fields: Column values; unknown columns are rejected

        Raises:
            ValueError: If ``fields`` names a column that may not be written
            ProfileNotFoundError: If the profile does not exist
            ProfileStoreError: If the write fails (the session is rolled back)
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update profile fields: {', '.join(sorted(unknown))}")

        profile = await self._get(user_id)
        for name, value in fields.items():
            setattr(profile, name, str(value) if name == "role" else value)

        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("profile_store_write_failed", user_id=str(user_id), error=str(exc))
            raise ProfileStoreError(details={"user_id": str(user_id)}) from exc
