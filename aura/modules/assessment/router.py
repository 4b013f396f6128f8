# aura/modules/assessment/router.py
"""
Test lifecycle endpoints.
Questions → (adaptive batch) → Submission → Results

Rule: this file never touches the DB or the engine.
Everything goes through AssessmentService.
"""
from typing import Optional

from fastapi import APIRouter, Query, status

from aura.modules.assessment.service import AssessmentService
from aura.modules.assessment.schemas import (
    QuestionsOut,
    GenerateQuestionsIn,
    AdaptiveIn,
    AdaptiveOut,
    SubmitTestIn,
    SubmitOut,
    TestResultOut,
    LatestResultOut,
    HistoryOut,
)
from aura.shared.deps import DbDep, UserDep, QuestionSupplyDep

router = APIRouter(prefix="/tests", tags=["Assessment"])
service = AssessmentService()


# ── Questions ──────────────────────────────────────────────

@router.get("/questions", response_model=QuestionsOut)
async def get_questions(
    current_user: UserDep,
    supply: QuestionSupplyDep,
    count: int = Query(15, ge=1, le=15),
    seed: Optional[int] = Query(None),
):
    """Initial questions from the static bank, balanced across the five traits."""
    return service.get_initial_questions(supply, count, seed=seed)


@router.post("/generate-questions", response_model=QuestionsOut)
async def generate_questions(
    payload: GenerateQuestionsIn, current_user: UserDep, supply: QuestionSupplyDep
):
    """
    Fresh AI batch, cached per (user, count).
    AI down → static fallback batch, isAi=false. Never an error.
    """
    return await service.generate_questions(
        supply, current_user, payload.count, payload.use_cache
    )


@router.post("/adaptive", response_model=AdaptiveOut)
async def adaptive_questions(
    payload: AdaptiveIn, current_user: UserDep, supply: QuestionSupplyDep
):
    return await service.adaptive_questions(
        supply, payload.previous_answers, payload.current_scores, payload.count
    )


# ── Submission ─────────────────────────────────────────────

@router.post("/submit", response_model=SubmitOut, status_code=status.HTTP_201_CREATED)
async def submit_test(payload: SubmitTestIn, db: DbDep, current_user: UserDep):
    test_id = await service.submit(
        db, current_user, payload.answers, payload.trait_scores, payload.scale
    )
    return {"test_id": test_id}


# ── Results ────────────────────────────────────────────────

@router.get("/latest", response_model=LatestResultOut)
async def get_latest(db: DbDep, current_user: UserDep):
    return await service.get_latest(db, current_user)


@router.get("/history", response_model=HistoryOut)
async def get_history(
    db: DbDep,
    current_user: UserDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50, alias="pageSize"),
):
    return await service.get_history(db, current_user, page, page_size)


@router.get("/{test_id}", response_model=TestResultOut)
async def get_test_result(test_id: int, db: DbDep, current_user: UserDep):
    """Full result: only its owner can read it."""
    return await service.get_result(db, current_user, test_id)
