"""Liveness and store health endpoints."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from domain.constants import Namespace
from infrastructure.database.models import RecordModel
from infrastructure.database.session import get_async_session

logger = structlog.get_logger()

router = APIRouter(tags=["health"])


class StoreStats(BaseModel):
    """Allocation totals for the record store."""

    records: dict[str, int]
    deposits_held: int


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    store: StoreStats | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    """Report that the process is serving, without touching the store."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=_now(),
        environment=settings.app_env,
    )


async def _store_stats(db: AsyncSession) -> StoreStats:
    rows = await db.execute(
        select(
            RecordModel.namespace,
            func.count(),
            func.coalesce(func.sum(RecordModel.deposit), 0),
        ).group_by(RecordModel.namespace)
    )
    records = {namespace.value: 0 for namespace in Namespace}
    deposits_held = 0
    for namespace, count, deposits in rows:
        records[namespace] = count
        deposits_held += deposits
    return StoreStats(records=records, deposits_held=deposits_held)


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Store health and allocation totals",
)
async def detailed_health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Check the record store and report how many records of each kind are
    allocated and how much deposit they hold.

    An unreachable store reports ``degraded`` rather than failing.
    """
    try:
        stats = await _store_stats(db)
    except SQLAlchemyError as exc:
        logger.warning("health_store_unreachable", error_type=type(exc).__name__)
        return HealthResponse(
            status="degraded",
            version=settings.app_version,
            timestamp=_now(),
            environment=settings.app_env,
            database="unreachable",
        )

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=_now(),
        environment=settings.app_env,
        database="healthy",
        store=stats,
    )
