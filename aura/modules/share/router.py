# aura/modules/share/router.py
"""
POST /share          → owner creates (or gets back) the link
GET  /shared/{id}    → public read, no token
"""
from fastapi import APIRouter

from aura.modules.share.schemas import ShareIn, ShareOut, SharedResultOut
from aura.modules.share.service import ShareService
from aura.shared.deps import DbDep, UserDep

router = APIRouter(tags=["Share"])
service = ShareService()


@router.post("/share", response_model=ShareOut)
async def share_result(payload: ShareIn, db: DbDep, current_user: UserDep):
    return await service.share(db, current_user, payload.test_id)


@router.get("/shared/{share_id}", response_model=SharedResultOut)
async def view_shared_result(share_id: str, db: DbDep):
    return await service.view(db, share_id)
