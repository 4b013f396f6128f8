# aura/modules/insights/router.py
from fastapi import APIRouter

from aura.modules.insights.schemas import InsightsIn, InsightsOut
from aura.modules.insights.service import InsightService
from aura.shared.deps import AIClientDep, DbDep, UserDep

router = APIRouter(prefix="/insights", tags=["Insights"])
service = InsightService()


@router.post("", response_model=InsightsOut)
async def regenerate_insights(
    payload: InsightsIn, db: DbDep, current_user: UserDep, ai: AIClientDep
):
    """
    Regenerates the insights of one of the user's results.
    AI unavailable → deterministic local insights, isFallback=true.
    """
    return await service.regenerate(db, ai, current_user, payload.test_id)
