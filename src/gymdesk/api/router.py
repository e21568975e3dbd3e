"""Root API router with health endpoints and module mounting."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from gymdesk.config import settings
from gymdesk.modules.users.routes import router as users_router


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str


api_router = APIRouter()

health_router = APIRouter(tags=["health"])


@health_router.get("/health/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    return HealthResponse(status="alive")


@health_router.get("/info")
async def info() -> dict[str, Any]:
    return {
        "app": settings.app_name,
        "environment": settings.environment,
    }


v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(users_router)

api_router.include_router(health_router)
api_router.include_router(v1_router)
