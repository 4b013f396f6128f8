# aura/modules/telemetry/service.py
"""
Client error reports, client metrics, and the server-side slow-operation
samples kept by PerformanceTracker.

Reporting endpoints are best-effort: a DB failure is logged and the client
still gets success=True (stored=False).
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from aura.core.database import AsyncSessionLocal
from aura.infra.telemetry import PerformanceSample, PerformanceTracker
from aura.modules.telemetry.repository import TelemetryRepository
from aura.modules.telemetry.schemas import ErrorLogIn, MetricIn
from aura.shared.errors import NotFound, PersistenceFailure
from aura.shared.models import User

logger = logging.getLogger(__name__)

repo = TelemetryRepository()


class TelemetryService:

    # ── Error logs ────────────────────────────────────────────

    async def log_error(self, db, user: Optional[User], payload: ErrorLogIn) -> Dict:
        data = payload.model_dump(exclude_none=True)
        user_id = user.id if user else None
        try:
            await repo.create_error(db, user_id, data)
        except PersistenceFailure:
            logger.error(
                "Client error (not stored): %s [user=%s severity=%s url=%s]",
                payload.message, user_id, payload.severity.value, payload.url,
            )
            return {"success": True, "stored": False}
        return {"success": True, "stored": True}

    async def list_errors(self, db, resolved: Optional[bool] = None, limit: int = 100) -> Dict:
        errors = await repo.list_errors(db, resolved=resolved, limit=limit)
        return {"errors": errors, "total": len(errors)}

    async def resolve_error(self, db, error_id: int) -> Dict:
        error = await repo.get_error(db, error_id)
        if error is None:
            raise NotFound("Error log not found")
        if not error.resolved:
            error = await repo.resolve_error(db, error)
        return {"success": True, "error": error}

    # ── Metrics ───────────────────────────────────────────────

    async def record_metric(self, db, payload: MetricIn) -> Dict:
        try:
            await repo.record_metric(
                db, payload.name, payload.value, payload.tags, payload.timestamp
            )
        except PersistenceFailure:
            logger.info("Metric (not stored): %s = %s %s", payload.name, payload.value, payload.tags)
            return {"success": True, "stored": False}
        return {"success": True, "stored": True}

    def performance(self, tracker: PerformanceTracker) -> Dict:
        return {
            "threshold_ms": tracker.threshold_ms,
            "capacity": tracker.buffer.capacity,
            "samples": tracker.snapshot(),
        }


def sample_to_metric(sample: PerformanceSample) -> Dict:
    return {
        "name": sample.operation,
        "value": sample.duration_ms,
        "tags": {k: str(v) for k, v in sample.metadata.items()},
        "timestamp": datetime.fromtimestamp(sample.timestamp, tz=timezone.utc),
    }


async def store_samples(samples: List[PerformanceSample]) -> None:
    """
    PerformanceTracker sink. Runs outside any request, so it opens its own
    session. Failures propagate to the tracker, which logs and drops the batch.
    """
    async with AsyncSessionLocal() as db:
        await repo.record_metrics(db, [sample_to_metric(s) for s in samples])
