"""Liveness endpoint."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from presence.config import Settings
from presence.util.observability import SERVICE_NAME, SERVICE_VERSION

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Process liveness; does not touch the database or Stripe."""

    status: str
    service: str
    version: str
    environment: str
    checked_at: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
        environment=settings.environment,
        checked_at=datetime.now(timezone.utc),
    )
