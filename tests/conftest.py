"""Shared fixtures: profiles for each role and signed-in access handles."""

from collections.abc import Awaitable, Callable

import pytest

from gymdesk.core.auth.session import Session
from gymdesk.core.permissions.checker import AccessControl
from gymdesk.core.permissions.context import AccessControlContext
from gymdesk.core.permissions.roles import RoleName
from gymdesk.modules.users.schemas import UserProfile
from tests.factories import UserProfileFactory
from tests.fakes import FakeIdentity, FakeProfileStore


@pytest.fixture
def admin() -> UserProfile:
    return UserProfileFactory.build(role=RoleName.ADMIN.value, first_name="Ada")


@pytest.fixture
def other_admin() -> UserProfile:
    return UserProfileFactory.build(role=RoleName.ADMIN.value, first_name="Alan")


@pytest.fixture
def trainer() -> UserProfile:
    return UserProfileFactory.build(role=RoleName.TRAINER.value, first_name="Tess")


@pytest.fixture
def other_trainer() -> UserProfile:
    return UserProfileFactory.build(role=RoleName.TRAINER.value, first_name="Toby")


@pytest.fixture
def member() -> UserProfile:
    return UserProfileFactory.build(role=RoleName.MEMBER.value, first_name="Mia")


@pytest.fixture
def other_member() -> UserProfile:
    return UserProfileFactory.build(role=RoleName.MEMBER.value, first_name="Max")


@pytest.fixture
def store(admin, other_admin, trainer, other_trainer, member, other_member) -> FakeProfileStore:
    return FakeProfileStore(
        admin, other_admin, trainer, other_trainer, member, other_member
    )


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity()


@pytest.fixture
def context(identity: FakeIdentity, store: FakeProfileStore) -> AccessControlContext:
    return AccessControlContext(identity, store)


@pytest.fixture
def signed_in(
    store: FakeProfileStore,
) -> Callable[[UserProfile | None], Awaitable[AccessControl]]:
    """Build a started context signed in as ``profile`` (None = signed out)."""

    async def factory(profile: UserProfile | None) -> AccessControl:
        identity = FakeIdentity(Session(profile.id) if profile else None)
        context = AccessControlContext(identity, store)
        await context.start()
        return AccessControl(context)

    return factory
