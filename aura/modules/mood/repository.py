# aura/modules/mood/repository.py
"""
DB access for mood entries.
Every read is scoped to its owner: another user's entry is never visible.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aura.shared.errors import PersistenceFailure
from aura.shared.models import MoodEntry

logger = logging.getLogger(__name__)


class MoodRepository:

    # ── Write ─────────────────────────────────────────────────

    async def upsert(
        self,
        db: AsyncSession,
        user_id: int,
        day: date,
        level: int,
        category,
        notes: str,
        factors: List[str],
    ) -> MoodEntry:
        """Rewrites the day's entry when there is one, creates it otherwise."""
        entry = await self.get_for_day(db, user_id, day)
        if entry is None:
            entry = MoodEntry(user_id=user_id, date=day)
            db.add(entry)
        entry.level = level
        entry.category = category
        entry.notes = notes
        entry.factors = factors
        try:
            await db.commit()
            await db.refresh(entry)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not save mood entry of %s for user %s", day, user_id)
            raise PersistenceFailure("Failed to save mood entry") from e
        return entry

    async def delete(self, db: AsyncSession, entry: MoodEntry) -> None:
        try:
            await db.delete(entry)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not delete mood entry %s", entry.id)
            raise PersistenceFailure("Failed to delete mood entry") from e

    # ── Read ──────────────────────────────────────────────────

    async def get(self, db: AsyncSession, entry_id: int, user_id: int) -> Optional[MoodEntry]:
        r = await db.execute(
            select(MoodEntry).where(MoodEntry.id == entry_id, MoodEntry.user_id == user_id)
        )
        return r.scalar_one_or_none()

    async def get_for_day(self, db: AsyncSession, user_id: int, day: date) -> Optional[MoodEntry]:
        r = await db.execute(
            select(MoodEntry).where(MoodEntry.user_id == user_id, MoodEntry.date == day)
        )
        return r.scalar_one_or_none()

    async def list_for_user(self, db: AsyncSession, user_id: int) -> List[MoodEntry]:
        """Newest day first."""
        r = await db.execute(
            select(MoodEntry)
            .where(MoodEntry.user_id == user_id)
            .order_by(MoodEntry.date.desc())
        )
        return list(r.scalars().all())

    async def get_latest(self, db: AsyncSession, user_id: int) -> Optional[MoodEntry]:
        r = await db.execute(
            select(MoodEntry)
            .where(MoodEntry.user_id == user_id)
            .order_by(MoodEntry.date.desc())
            .limit(1)
        )
        return r.scalar_one_or_none()

    async def count(self, db: AsyncSession, user_id: int) -> int:
        total = await db.scalar(
            select(func.count(MoodEntry.id)).where(MoodEntry.user_id == user_id)
        )
        return total or 0

    async def get_days(self, db: AsyncSession, user_id: int) -> List[date]:
        r = await db.execute(select(MoodEntry.date).where(MoodEntry.user_id == user_id))
        return list(r.scalars().all())
