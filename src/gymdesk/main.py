"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from gymdesk import __version__
from gymdesk.api.router import api_router
from gymdesk.config import settings
from gymdesk.core.errors import register_exception_handlers
from gymdesk.core.logging import configure_logging
from gymdesk.core.permissions.context import AccessControlContext, ContextState


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Resolve the session on startup and unsubscribe on shutdown."""
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    context: AccessControlContext | None = getattr(app.state, "access_context", None)
    if context is not None and context.snapshot.state is ContextState.UNINITIALIZED:
        await context.start()

    yield

    logger.info("application_shutdown")
    if context is not None:
        context.close()


def create_app(context: AccessControlContext | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: The session's access control context. Without one, every
            access endpoint answers 503.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Access control for the gym operations console",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )
    app.state.access_context = context

    register_exception_handlers(app)
    app.include_router(api_router)

    return app
