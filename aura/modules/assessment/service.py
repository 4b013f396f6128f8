# aura/modules/assessment/service.py
"""
Assessment lifecycle orchestration.

Responsibilities:
1. Serve questions (static bank, AI batches, adaptive batches) via QuestionSupply
2. Bring submitted scores onto the canonical 1–5 scale (engine/psychometrics/scoring.py)
3. Compute the initial insights locally (engine/psychometrics/insights.py)
4. Persist the result and read it back (owner-scoped)
"""
import logging
import math
from typing import Dict, List, Mapping, Optional

from aura.engine.psychometrics.insights import local_insights
from aura.engine.psychometrics.scoring import calculate_trait_scores, normalize_scores
from aura.engine.questions.bank import LIKERT_OPTIONS, get_question
from aura.modules.assessment.repository import AssessmentRepository
from aura.modules.assessment.schemas import AnswerIn
from aura.modules.assessment.supply import QuestionSupply
from aura.shared.enums import ScoreScale
from aura.shared.errors import NotFound
from aura.shared.models import TestResult, User

logger = logging.getLogger(__name__)

repo = AssessmentRepository()

_LIKERT_LABELS = dict(LIKERT_OPTIONS)


class AssessmentService:

    # ── Questions ─────────────────────────────────────────────

    def get_initial_questions(
        self, supply: QuestionSupply, count: int, seed: Optional[int] = None
    ) -> Dict:
        questions = supply.get_initial_questions(count, seed=seed)
        return {"questions": [q.to_dict() for q in questions], "is_ai": False, "cached": False}

    async def generate_questions(
        self, supply: QuestionSupply, user: User, count: int, use_cache: bool
    ) -> Dict:
        batch = await supply.generate_questions(user.id, count, use_cache=use_cache)
        return {**batch, "questions": [q.to_dict() for q in batch["questions"]]}

    async def adaptive_questions(
        self,
        supply: QuestionSupply,
        previous_answers: List[AnswerIn],
        current_scores: Mapping,
        count: int,
    ) -> Dict:
        batch = await supply.request_adaptive_questions(
            [a.model_dump() for a in previous_answers],
            _plain_keys(current_scores),
            count=count,
        )
        return {**batch, "questions": [q.to_dict() for q in batch["questions"]]}

    # ── Submission ────────────────────────────────────────────

    async def submit(
        self,
        db,
        user: User,
        answers: List[AnswerIn],
        trait_scores: Mapping,
        scale: ScoreScale = ScoreScale.FIVE_POINT,
    ) -> int:
        """
        Pipeline:
        1. Scores → canonical 1–5 (0 on the 1–5 scale = unanswered trait, dropped)
        2. No usable score → recomputed from the answers
        3. Initial insights from the rules (AI insights come later, POST /insights)
        4. Persist; a DB error surfaces as PersistenceFailure
        """
        stored_answers = [_stored_answer(a) for a in answers]

        scores = _plain_keys(trait_scores)
        if scale == ScoreScale.FIVE_POINT:
            scores = {t: v for t, v in scores.items() if v != 0}
        traits = normalize_scores(scores, unit_scale=scale == ScoreScale.UNIT)
        if not traits:
            traits = calculate_trait_scores(stored_answers)

        insights = local_insights(traits)
        result = await repo.save_result(db, user.id, stored_answers, traits, insights)
        logger.info("Test %s saved for user %s (%d answers)", result.id, user.id, len(stored_answers))
        return result.id

    # ── Results ───────────────────────────────────────────────

    async def get_result(self, db, user: User, test_id: int) -> TestResult:
        result = await repo.get_result(db, test_id, user.id)
        if result is None:
            raise NotFound("Test result not found")
        return result

    async def get_latest(self, db, user: User) -> TestResult:
        result = await repo.get_latest_result(db, user.id)
        if result is None:
            raise NotFound("No completed test found")
        return result

    async def get_history(self, db, user: User, page: int, page_size: int) -> Dict:
        results, total = await repo.get_history(db, user.id, page, page_size)
        return {
            "results": results,
            "pagination": {
                "total": total,
                "pages": math.ceil(total / page_size) if total else 0,
                "page": page,
                "page_size": page_size,
            },
        }


def _plain_keys(scores: Mapping) -> Dict[str, float]:
    """Trait enum keys → their string value."""
    return {getattr(k, "value", k): float(v) for k, v in scores.items()}


def _stored_answer(answer: AnswerIn) -> Dict:
    """Answer as kept in test_results.answers, texts filled from the bank when missing."""
    data = answer.model_dump(mode="json")
    question = get_question(answer.question_id)
    if not data.get("question_text") and question is not None:
        data["question_text"] = question.text
    if not data.get("answer_text") and float(answer.value).is_integer():
        data["answer_text"] = _LIKERT_LABELS.get(int(answer.value))
    return data
