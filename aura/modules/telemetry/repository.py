# aura/modules/telemetry/repository.py
"""
error_logs + performance_metrics.
Every write wraps SQLAlchemyError into PersistenceFailure after rollback;
the service decides whether that failure is swallowed.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aura.shared.errors import PersistenceFailure
from aura.shared.models import ErrorLog, PerformanceMetric

logger = logging.getLogger(__name__)


class TelemetryRepository:

    # ── Error logs ────────────────────────────────────────────

    async def create_error(
        self, db: AsyncSession, user_id: Optional[int], data: Dict[str, Any]
    ) -> ErrorLog:
        db_obj = ErrorLog(user_id=user_id, **data)
        await self._commit(db, db_obj, "error log")
        return db_obj

    async def list_errors(
        self, db: AsyncSession, resolved: Optional[bool] = None, limit: int = 100
    ) -> List[ErrorLog]:
        query = select(ErrorLog).order_by(ErrorLog.timestamp.desc()).limit(limit)
        if resolved is not None:
            query = query.where(ErrorLog.resolved == resolved)
        r = await db.execute(query)
        return list(r.scalars().all())

    async def get_error(self, db: AsyncSession, error_id: int) -> Optional[ErrorLog]:
        r = await db.execute(select(ErrorLog).where(ErrorLog.id == error_id))
        return r.scalar_one_or_none()

    async def resolve_error(self, db: AsyncSession, error: ErrorLog) -> ErrorLog:
        error.resolved = True
        error.resolved_at = datetime.now(timezone.utc)
        await self._commit(db, error, "error resolution")
        return error

    # ── Metrics ───────────────────────────────────────────────

    async def record_metric(
        self,
        db: AsyncSession,
        name: str,
        value: float,
        tags: Optional[Dict[str, Any]] = None,
        timestamp: Optional[datetime] = None,
    ) -> PerformanceMetric:
        db_obj = PerformanceMetric(name=name, value=value, tags=tags or {})
        if timestamp is not None:
            db_obj.timestamp = timestamp
        await self._commit(db, db_obj, "metric")
        return db_obj

    async def record_metrics(self, db: AsyncSession, rows: Iterable[Dict[str, Any]]) -> int:
        """Bulk insert for tracker flushes, one commit."""
        objs = [PerformanceMetric(**row) for row in rows]
        try:
            db.add_all(objs)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise PersistenceFailure("Failed to store metrics") from e
        return len(objs)

    # ── Private ───────────────────────────────────────────────

    async def _commit(self, db: AsyncSession, obj, what: str) -> None:
        try:
            db.add(obj)
            await db.commit()
            await db.refresh(obj)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not store %s", what)
            raise PersistenceFailure(f"Failed to store {what}") from e
