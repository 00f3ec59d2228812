"""Health check routes."""

from datetime import datetime, timezone

import logfire
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from comments.config import Settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Liveness response, with the moderation posture of this deployment."""

    status: str
    timestamp: datetime
    git_sha: str
    environment: str
    guests_allowed: bool
    moderation_required: bool


class ReadinessResponse(BaseModel):
    """Readiness response."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
@inject
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up.

    Returns:
        Build and configuration summary
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        git_sha=settings.git_sha,
        environment=settings.environment,
        guests_allowed=settings.comments.allow_guest,
        moderation_required=settings.comments.require_moderation,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
@inject
async def readiness_check(
    response: Response, engine: FromDishka[AsyncEngine]
) -> ReadinessResponse:
    """Report whether the database accepts queries.

    Returns:
        Readiness state; the status code is 503 while the database is down
    """
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logfire.error("Readiness check failed", error=str(e))
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="unavailable", database="unreachable")

    return ReadinessResponse(status="ready", database="ok")
