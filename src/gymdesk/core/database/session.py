"""Async engine and session factory for the profile store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gymdesk.config import settings


def create_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """Create the async engine, defaulting to the configured database."""
    return create_async_engine(
        url or settings.database_url,
        echo=settings.database_echo if echo is None else echo,
    )


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)
