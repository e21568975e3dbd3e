"""Database module: declarative base and session helpers."""

from gymdesk.core.database.base import Base, TimestampMixin, UUIDMixin
from gymdesk.core.database.session import create_engine, get_session_factory


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_engine",
    "get_session_factory",
]
