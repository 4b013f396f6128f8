# aura/modules/assessment/repository.py
"""
DB access for the assessment module.
Every SQL query lives here: services never write queries directly.

Write failures are rolled back and re-raised as PersistenceFailure:
the user must know their results were not saved.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aura.shared.errors import PersistenceFailure
from aura.shared.models import TestResult

logger = logging.getLogger(__name__)


class AssessmentRepository:

    # ── Write ─────────────────────────────────────────────────

    async def save_result(
        self,
        db: AsyncSession,
        user_id: int,
        answers: List[Dict[str, Any]],
        traits: Dict[str, float],
        insights: List[str],
    ) -> TestResult:
        db_obj = TestResult(
            user_id=user_id,
            answers=answers,
            traits=traits,
            insights=insights,
            completed_at=datetime.now(timezone.utc),
        )
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not save test result for user %s", user_id)
            raise PersistenceFailure("Failed to save test result") from e
        return db_obj

    async def update_insights(
        self, db: AsyncSession, result: TestResult, insights: List[str]
    ) -> TestResult:
        try:
            result.insights = insights
            await db.commit()
            await db.refresh(result)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not update insights of test %s", result.id)
            raise PersistenceFailure("Failed to update insights") from e
        return result

    # ── Read ──────────────────────────────────────────────────

    async def get_result(
        self, db: AsyncSession, test_id: int, user_id: int
    ) -> Optional[TestResult]:
        """Owner-scoped: another user's id → None."""
        r = await db.execute(
            select(TestResult).where(
                TestResult.id == test_id,
                TestResult.user_id == user_id,
            )
        )
        return r.scalar_one_or_none()

    async def get_latest_result(
        self, db: AsyncSession, user_id: int
    ) -> Optional[TestResult]:
        r = await db.execute(
            select(TestResult)
            .where(
                TestResult.user_id == user_id,
                TestResult.completed_at.is_not(None),
            )
            .order_by(TestResult.completed_at.desc())
            .limit(1)
        )
        return r.scalar_one_or_none()

    async def get_history(
        self, db: AsyncSession, user_id: int, page: int, page_size: int
    ) -> Tuple[List[TestResult], int]:
        total = await db.scalar(
            select(func.count(TestResult.id)).where(TestResult.user_id == user_id)
        )
        r = await db.execute(
            select(TestResult)
            .where(TestResult.user_id == user_id)
            .order_by(TestResult.completed_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return list(r.scalars().all()), total or 0

    # ── Activity (progress) ───────────────────────────────────

    async def count_completed(self, db: AsyncSession, user_id: int) -> int:
        total = await db.scalar(
            select(func.count(TestResult.id)).where(
                TestResult.user_id == user_id,
                TestResult.completed_at.is_not(None),
            )
        )
        return total or 0

    async def count_with_insights(self, db: AsyncSession, user_id: int) -> int:
        total = await db.scalar(
            select(func.count(TestResult.id)).where(
                TestResult.user_id == user_id,
                func.json_array_length(TestResult.insights) > 0,
            )
        )
        return total or 0

    async def get_activity_times(self, db: AsyncSession, user_id: int) -> List[datetime]:
        r = await db.execute(
            select(TestResult.created_at).where(TestResult.user_id == user_id)
        )
        return [t for t in r.scalars().all() if t is not None]
