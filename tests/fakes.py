"""In-memory collaborators: an identity service and a profile store."""

import asyncio
from collections.abc import Callable
from typing import Any

from gymdesk.core.auth.session import AuthEvent, AuthListener, Session
from gymdesk.core.errors import IdentityError, ProfileNotFoundError, ProfileStoreError
from gymdesk.modules.users.schemas import UserProfile


class FakeIdentity:
    """Identity service whose session and events are driven by the test."""

    def __init__(self, session: Session | None = None) -> None:
        self.session = session
        self.fail = False
        self.listeners: list[AuthListener] = []

    async def get_current_session(self) -> Session | None:
        if self.fail:
            raise IdentityError()
        return self.session

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)

    async def emit(self, event: AuthEvent) -> None:
        for listener in list(self.listeners):
            await listener(event)


class FakeProfileStore:
    """Dict-backed profile store.

    ``gates`` lets a test hold a ``get_profile`` call open until it sets
    the matching event, to order concurrent fetches deterministically.
    """

    def __init__(self, *profiles: UserProfile) -> None:
        self.profiles = {p.id: p for p in profiles}
        self.fail_reads = False
        self.fail_writes = False
        self.gates: dict[str, asyncio.Event] = {}
        self.updates: list[tuple[str, dict[str, Any]]] = []

    def add(self, *profiles: UserProfile) -> None:
        for p in profiles:
            self.profiles[p.id] = p

    async def get_profile(self, user_id: str) -> UserProfile:
        gate = self.gates.get(user_id)
        if gate is not None:
            await gate.wait()
        if self.fail_reads:
            raise ProfileStoreError()
        try:
            return self.profiles[user_id]
        except KeyError:
            raise ProfileNotFoundError(user_id) from None

    async def list_profiles(self) -> list[UserProfile]:
        if self.fail_reads:
            raise ProfileStoreError()
        return sorted(self.profiles.values(), key=lambda p: p.created_at, reverse=True)

    async def update_profile(self, user_id: str, fields: dict[str, Any]) -> None:
        if self.fail_writes:
            raise ProfileStoreError(details={"user_id": user_id})
        if user_id not in self.profiles:
            raise ProfileNotFoundError(user_id)
        self.updates.append((user_id, fields))
        self.profiles[user_id] = self.profiles[user_id].model_copy(update=fields)
