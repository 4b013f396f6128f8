# aura/modules/progress/router.py
"""
GET /progress → level, experience, achievements and activity stats
"""
from fastapi import APIRouter

from aura.modules.progress.schemas import ProgressOut
from aura.modules.progress.service import ProgressService
from aura.shared.deps import DbDep, UserDep

router = APIRouter(prefix="/progress", tags=["Progress"])
service = ProgressService()


@router.get("", response_model=ProgressOut)
async def get_progress(db: DbDep, current_user: UserDep):
    return await service.get_progress(db, current_user)
