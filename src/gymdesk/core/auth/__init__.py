"""Identity service boundary: sessions and auth events."""

from gymdesk.core.auth.session import (
    AuthEvent,
    AuthListener,
    IdentityProvider,
    Session,
    SignedIn,
    SignedOut,
)


__all__ = [
    "AuthEvent",
    "AuthListener",
    "IdentityProvider",
    "Session",
    "SignedIn",
    "SignedOut",
]
