"""Fixtures for HTTP-level tests."""

from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack

import pytest
from httpx import ASGITransport, AsyncClient

from gymdesk.core.auth.session import Session
from gymdesk.core.permissions.context import AccessControlContext
from gymdesk.main import create_app
from tests.fakes import FakeIdentity


@pytest.fixture
async def client_for(store) -> AsyncGenerator:
    """Build an HTTP client for an app whose session belongs to ``profile``."""
    async with AsyncExitStack() as stack:

        async def factory(profile) -> AsyncClient:
            identity = FakeIdentity(Session(profile.id) if profile else None)
            context = AccessControlContext(identity, store)
            await context.start()
            stack.callback(context.close)
            return await stack.enter_async_context(
                AsyncClient(
                    transport=ASGITransport(app=create_app(context)),
                    base_url="http://test",
                )
            )

        yield factory
