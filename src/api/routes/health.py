"""Liveness and readiness endpoints."""

from datetime import datetime

import structlog
from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from infrastructure.database.session import engine

logger = structlog.get_logger()

router = APIRouter(tags=["health"])

API_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None


def _report(status: str, database: str | None = None) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=API_VERSION,
        timestamp=datetime.utcnow().isoformat(),
        environment=settings.app_env,
        database=database,
    )


async def _check_database() -> str:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health_database_unreachable", error_type=type(e).__name__)
        return f"unhealthy: {type(e).__name__}"
    return "healthy"


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    """Answer without touching the document store. For load balancers."""
    return _report("healthy")


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Readiness check",
)
async def detailed_health_check() -> HealthResponse:
    """Also run a trivial query; ``degraded`` when the store is unreachable."""
    database = await _check_database()
    return _report("healthy" if database == "healthy" else "degraded", database)
