# aura/modules/mood/service.py
"""
Mood log: one entry per user and day.

Logging a second time on the same day replaces that day's level,
category, notes and factors.
"""
import logging
from typing import List, Optional

from aura.modules.mood.repository import MoodRepository
from aura.modules.mood.schemas import MoodEntryIn
from aura.shared.errors import NotFound
from aura.shared.models import MoodEntry, User

logger = logging.getLogger(__name__)

repo = MoodRepository()


class MoodService:

    async def log(self, db, user: User, payload: MoodEntryIn) -> MoodEntry:
        entry = await repo.upsert(
            db,
            user.id,
            payload.date,
            payload.level,
            payload.category,
            payload.notes.strip(),
            [f.strip() for f in payload.factors if f.strip()],
        )
        logger.info("Mood of %s logged for user %s", payload.date, user.id)
        return entry

    async def list_entries(self, db, user: User) -> List[MoodEntry]:
        return await repo.list_for_user(db, user.id)

    async def latest(self, db, user: User) -> Optional[MoodEntry]:
        return await repo.get_latest(db, user.id)

    async def delete(self, db, user: User, entry_id: int) -> None:
        entry = await repo.get(db, entry_id, user.id)
        if entry is None:
            raise NotFound("Mood entry not found")
        await repo.delete(db, entry)
