"""Identity service boundary.

The console never verifies credentials itself. An external identity
service reports the current session and pushes sign-in / sign-out events;
this module defines the shapes the access control context consumes.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Session:
    """An established session, identified only by an opaque user id."""

    user_id: str


@dataclass(frozen=True)
class SignedIn:
    """The identity service confirmed a sign-in."""

    user_id: str


@dataclass(frozen=True)
class SignedOut:
    """The identity service ended the session."""


AuthEvent = SignedIn | SignedOut
AuthListener = Callable[[AuthEvent], Awaitable[None]]


class IdentityProvider(Protocol):
    """What the access control context needs from the identity service."""

    async def get_current_session(self) -> Session | None:
        """Return the active session, or None when signed out.

        Raises:
            IdentityError: If the service cannot be reached
        """
        ...

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener`` for auth events; returns an unsubscribe callable."""
        ...
