# aura/modules/mood/router.py
"""
POST   /mood             → log today's (or any day's) mood, replaces that day's entry
GET    /mood             → every entry of the user, newest day first
GET    /mood/latest      → most recent entry, or mood=null
DELETE /mood/{entry_id}  → owner only
"""
from fastapi import APIRouter, status

from aura.modules.mood.schemas import MoodEntryIn, MoodEntryOut, MoodListOut, LatestMoodOut
from aura.modules.mood.service import MoodService
from aura.shared.deps import DbDep, UserDep

router = APIRouter(prefix="/mood", tags=["Mood"])
service = MoodService()


@router.post("", response_model=MoodEntryOut)
async def log_mood(payload: MoodEntryIn, db: DbDep, current_user: UserDep):
    return await service.log(db, current_user, payload)


@router.get("", response_model=MoodListOut)
async def list_moods(db: DbDep, current_user: UserDep):
    return {"entries": await service.list_entries(db, current_user)}


@router.get("/latest", response_model=LatestMoodOut)
async def latest_mood(db: DbDep, current_user: UserDep):
    return {"mood": await service.latest(db, current_user)}


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mood(entry_id: int, db: DbDep, current_user: UserDep):
    await service.delete(db, current_user, entry_id)
