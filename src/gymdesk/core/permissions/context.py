"""Access control context: the per-session owner of "who is acting".

The context is a versioned state cell. Its single writer reacts to the
start-up session check and to sign-in / sign-out events from the identity
service; readers take an immutable ``AccessSnapshot`` and never block.

Every transition bumps ``generation``. A profile fetch only applies its
result if no newer transition started while it was awaiting the store, so
a slow start-up check cannot clobber a later sign-in, and a sign-out always
wins over a fetch that was still in flight.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from gymdesk.core.auth.session import AuthEvent, IdentityProvider, SignedIn, SignedOut
from gymdesk.core.errors import IdentityError, NotFoundError, ProfileStoreError
from gymdesk.core.permissions.matrix import EMPTY_MATRIX, PermissionMatrix, generate_matrix
from gymdesk.core.permissions.roles import Role, get_role


if TYPE_CHECKING:
    from collections.abc import Callable

    from gymdesk.modules.users.repos import ProfileStore
    from gymdesk.modules.users.schemas import UserProfile


logger = structlog.get_logger()


class ContextState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class AccessSnapshot:
    """Immutable view of the context at one generation."""

    state: ContextState = ContextState.UNINITIALIZED
    user: "UserProfile | None" = None
    role: Role | None = None
    matrix: PermissionMatrix = field(default_factory=lambda: EMPTY_MATRIX)
    generation: int = 0

    @property
    def loading(self) -> bool:
        return self.state is not ContextState.READY

    @property
    def authenticated(self) -> bool:
        """Ready with both a profile and a resolved role."""
        return (
            self.state is ContextState.READY
            and self.user is not None
            and self.role is not None
        )


class AccessControlContext:
    """Owns the current user, role and permission matrix for one session.

    Args:
        identity: The identity service reporting sessions and auth events
        profiles: The profile store the acting user's profile is read from
    """

    def __init__(self, identity: IdentityProvider, profiles: "ProfileStore") -> None:
        self.identity = identity
        self.profiles = profiles
        self._generation = 0
        self._snapshot = AccessSnapshot()
        self._unsubscribe: "Callable[[], None] | None" = None

    @property
    def snapshot(self) -> AccessSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    async def start(self) -> AccessSnapshot:
        """Subscribe to auth events and resolve the current session."""
        if self._unsubscribe is None:
            self._unsubscribe = self.identity.subscribe(self.handle_event)

        generation = self._begin(ContextState.LOADING)
        try:
            session = await self.identity.get_current_session()
        except IdentityError as exc:
            logger.error("session_check_failed", error=exc.message)
            self._apply(generation, None)
            return self._snapshot

        if session is None:
            self._apply(generation, None)
            return self._snapshot

        await self._load_profile(generation, session.user_id)
        return self._snapshot

    async def handle_event(self, event: AuthEvent) -> None:
        """React to an identity event."""
        if isinstance(event, SignedIn):
            generation = self._begin(ContextState.LOADING)
            await self._load_profile(generation, event.user_id)
        elif isinstance(event, SignedOut):
            generation = self._begin(ContextState.READY)
            self._apply(generation, None)
            logger.info("signed_out", generation=generation)

    async def refresh(self) -> AccessSnapshot:
        """Re-read the acting user's profile, e.g. after a role change."""
        user = self._snapshot.user
        if user is None:
            return self._snapshot
        generation = self._begin(ContextState.LOADING)
        await self._load_profile(generation, user.id)
        return self._snapshot

    def close(self) -> None:
        """Unsubscribe from auth events and tear the context down."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._generation += 1
        self._snapshot = AccessSnapshot(generation=self._generation)

    def _begin(self, state: ContextState) -> int:
        self._generation += 1
        self._snapshot = AccessSnapshot(state=state, generation=self._generation)
        return self._generation

    async def _load_profile(self, generation: int, user_id: str) -> None:
        try:
            profile = await self.profiles.get_profile(user_id)
        except (NotFoundError, ProfileStoreError) as exc:
            if generation == self._generation:
                logger.error(
                    "profile_fetch_failed",
                    user_id=user_id,
                    error_code=exc.error_code,
                )
            self._apply(generation, None)
            return

        self._apply(generation, profile)

    def _apply(self, generation: int, profile: "UserProfile | None") -> None:
        if generation != self._generation:
            logger.info(
                "stale_fetch_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return

        if profile is None:
            self._snapshot = AccessSnapshot(
                state=ContextState.READY, generation=generation
            )
            return

        role = get_role(profile.role)
        if role is None:
            logger.error("unknown_role", user_id=profile.id, role=profile.role)
            self._snapshot = AccessSnapshot(
                state=ContextState.READY, generation=generation
            )
            return

        self._snapshot = AccessSnapshot(
            state=ContextState.READY,
            user=profile,
            role=role,
            matrix=generate_matrix(role.name),
            generation=generation,
        )
        logger.info(
            "access_context_ready",
            user_id=profile.id,
            role=role.id,
            generation=generation,
        )
