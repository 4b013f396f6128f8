# aura/modules/telemetry/router.py
from typing import Optional

from fastapi import APIRouter, Query

from aura.modules.telemetry.schemas import (
    ErrorLogIn, ErrorListOut, ResolveOut, MetricIn, StoredOut, PerformanceOut,
)
from aura.modules.telemetry.service import TelemetryService
from aura.shared.deps import AdminDep, DbDep, OptionalUserDep, TrackerDep

router = APIRouter(prefix="/telemetry", tags=["Telemetry"])
service = TelemetryService()


# ── Error logs ─────────────────────────────────────────────

@router.post("/errors", response_model=StoredOut)
async def log_error(payload: ErrorLogIn, db: DbDep, current_user: OptionalUserDep):
    """Client-side error report. Token optional, never fails on storage."""
    return await service.log_error(db, current_user, payload)


@router.get("/errors", response_model=ErrorListOut)
async def list_errors(
    db: DbDep,
    admin: AdminDep,
    resolved: Optional[bool] = Query(None),
    limit: int = Query(100, ge=1, le=500),
):
    return await service.list_errors(db, resolved=resolved, limit=limit)


@router.post("/errors/{error_id}/resolve", response_model=ResolveOut)
async def resolve_error(error_id: int, db: DbDep, admin: AdminDep):
    return await service.resolve_error(db, error_id)


# ── Metrics ────────────────────────────────────────────────

@router.post("/metrics", response_model=StoredOut)
async def record_metric(payload: MetricIn, db: DbDep):
    return await service.record_metric(db, payload)


@router.get("/performance", response_model=PerformanceOut)
async def get_performance(admin: AdminDep, tracker: TrackerDep):
    """Slow operations currently held in memory (not yet flushed)."""
    return service.performance(tracker)
