"""Integration tests for the SQLAlchemy profile store."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from gymdesk.core.auth.session import Session
from gymdesk.core.database import Base, create_engine, get_session_factory
from gymdesk.core.errors import ConflictError, ProfileNotFoundError, ProfileStoreError
from gymdesk.core.permissions.context import AccessControlContext, ContextState
from gymdesk.modules.users.models import Profile
from gymdesk.modules.users.repos import ProfileRepository
from tests.fakes import FakeIdentity


pytestmark = pytest.mark.integration


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    """In-memory SQLite session with the schema created."""
    engine = create_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_session_factory(engine)() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repo(session: AsyncSession) -> ProfileRepository:
    return ProfileRepository(session)


async def add_profile(repo: ProfileRepository, role: str = "member", **fields):
    return await repo.create(
        Profile(
            email=fields.pop("email", f"user-{uuid4().hex[:8]}@example.com"),
            first_name=fields.pop("first_name", "Test"),
            last_name=fields.pop("last_name", "User"),
            role=role,
            **fields,
        )
    )


class TestCreate:
    """Tests for ProfileRepository.create."""

    async def test_duplicate_id_conflicts(self, repo, session):
        created = await add_profile(repo)
        session.expunge_all()

        with pytest.raises(ConflictError):
            await add_profile(repo, id=UUID(created.id))

    async def test_timestamps_set_on_insert(self, repo):
        created = await add_profile(repo)

        assert created.created_at is not None
        assert created.updated_at is not None


class TestGetProfile:
    """Tests for ProfileRepository.get_profile."""

    async def test_round_trip(self, repo):
        created = await add_profile(repo, role="trainer", first_name="Tess")

        profile = await repo.get_profile(created.id)

        assert profile.id == created.id
        assert profile.first_name == "Tess"
        assert profile.role == "trainer"

    async def test_missing(self, repo):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            await repo.get_profile(str(uuid4()))

        assert exc_info.value.status_code == 404

    async def test_malformed_id_is_not_found(self, repo):
        with pytest.raises(ProfileNotFoundError):
            await repo.get_profile("not-a-uuid")

    async def test_unknown_stored_role_is_returned_as_is(self, repo):
        created = await add_profile(repo, role="owner")

        profile = await repo.get_profile(created.id)

        assert profile.role == "owner"
        assert profile.role_name is None


class TestInvalidRows:
    """Rows that fail profile validation surface as ProfileStoreError."""

    @pytest.fixture
    async def invalid_row(self, session) -> Profile:
        row = Profile(email="coach@localhost", first_name="Cory", role="trainer")
        session.add(row)
        await session.commit()
        return row

    async def test_get_profile(self, repo, invalid_row):
        with pytest.raises(ProfileStoreError) as exc_info:
            await repo.get_profile(str(invalid_row.id))

        assert exc_info.value.details == {"user_id": str(invalid_row.id)}

    async def test_list_profiles(self, repo, invalid_row):
        with pytest.raises(ProfileStoreError):
            await repo.list_profiles()

    async def test_context_resolves_to_signed_out(self, repo, invalid_row):
        context = AccessControlContext(
            FakeIdentity(Session(str(invalid_row.id))), repo
        )

        snapshot = await context.start()

        assert snapshot.state is ContextState.READY
        assert snapshot.user is None
        assert snapshot.role is None


class TestListProfiles:
    """Tests for ProfileRepository.list_profiles."""

    async def test_newest_first(self, repo):
        older = await add_profile(repo, created_at=datetime(2024, 1, 1, tzinfo=UTC))
        newer = await add_profile(repo, created_at=datetime(2025, 1, 1, tzinfo=UTC))

        profiles = await repo.list_profiles()

        assert [p.id for p in profiles] == [newer.id, older.id]

    async def test_empty(self, repo):
        assert await repo.list_profiles() == []


class TestUpdateProfile:
    """Tests for ProfileRepository.update_profile."""

    async def test_updates_role(self, repo):
        created = await add_profile(repo)
        stamp = datetime(2025, 6, 1, tzinfo=UTC)

        await repo.update_profile(created.id, {"role": "trainer", "updated_at": stamp})

        profile = await repo.get_profile(created.id)
        assert profile.role == "trainer"

    async def test_rejects_unknown_fields(self, repo):
        created = await add_profile(repo)

        with pytest.raises(ValueError, match="id"):
            await repo.update_profile(created.id, {"id": str(uuid4())})

    async def test_missing_profile(self, repo):
        with pytest.raises(ProfileNotFoundError):
            await repo.update_profile(str(uuid4()), {"role": "member"})


class TestStoreFailures:
    """Database errors surface as ProfileStoreError."""

    @pytest.fixture
    def broken_session(self) -> AsyncMock:
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        return session

    async def test_read_failure(self, broken_session):
        repo = ProfileRepository(broken_session)

        with pytest.raises(ProfileStoreError):
            await repo.get_profile(str(uuid4()))

        with pytest.raises(ProfileStoreError):
            await repo.list_profiles()

    async def test_write_failure_rolls_back(self, repo):
        created = await add_profile(repo)

        with pytest.raises(ProfileStoreError):
            await repo.update_profile(created.id, {"email": None})

        profile = await repo.get_profile(created.id)
        assert profile.email == created.email
