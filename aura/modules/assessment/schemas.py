# aura/modules/assessment/schemas.py
from pydantic import Field, model_validator
from typing import List, Optional, Dict, Any
from datetime import datetime

from aura.shared.enums import ScoreScale, Trait
from aura.shared.schemas import CamelModel


# ── Questions ──────────────────────────────────────────────

class OptionOut(CamelModel):
    value: int
    text: str


class QuestionOut(CamelModel):
    id: str
    text: str
    trait: Trait
    weight: float = 1.0
    options: List[OptionOut]


class QuestionsOut(CamelModel):
    questions: List[QuestionOut]
    is_ai: bool = False
    cached: bool = False


class GenerateQuestionsIn(CamelModel):
    count: int = Field(10, ge=1, le=30)
    use_cache: bool = True


# ── Answers ────────────────────────────────────────────────

class AnswerIn(CamelModel):
    question_id: str = Field(..., min_length=1)
    value: float
    trait: Trait
    question_text: Optional[str] = None
    answer_text: Optional[str] = None


class AdaptiveIn(CamelModel):
    previous_answers: List[AnswerIn]
    current_scores: Dict[Trait, float] = {}
    count: int = Field(5, ge=1, le=15)


class AdaptiveOut(CamelModel):
    questions: List[QuestionOut]
    is_adaptive: bool


# ── Submission ─────────────────────────────────────────────

class SubmitTestIn(CamelModel):
    """
    trait_scores on `scale` (1–5 by default, 0–1 with scale="unit").

    On the 1–5 scale a 0 means "trait not answered" (older clients send it)
    and the trait is dropped. Anything else outside the scale is rejected.
    An empty map → scores are recomputed from the answers.
    """
    answers: List[AnswerIn] = Field(..., min_length=1)
    trait_scores: Dict[Trait, float]
    scale: ScoreScale = ScoreScale.FIVE_POINT

    @model_validator(mode="after")
    def scores_within_scale(self):
        unit = self.scale == ScoreScale.UNIT
        for trait, score in self.trait_scores.items():
            # 0 on the 1–5 scale is the "not answered" marker
            valid = (0.0 <= score <= 1.0) if unit else (score == 0 or 1.0 <= score <= 5.0)
            if not valid:
                raise ValueError(f"{trait.value} score {score} is outside the {self.scale.value} scale")
        return self


class SubmitOut(CamelModel):
    test_id: int


# ── Results ────────────────────────────────────────────────

class TestResultOut(CamelModel):
    id: int
    answers: List[Dict[str, Any]]
    traits: Dict[str, float]
    insights: List[str]
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class LatestResultOut(CamelModel):
    id: int
    traits: Dict[str, float]
    completed_at: Optional[datetime] = None


class HistoryItemOut(CamelModel):
    id: int
    traits: Dict[str, float]
    insights: List[str]
    completed_at: Optional[datetime] = None


class PaginationOut(CamelModel):
    total: int
    pages: int
    page: int
    page_size: int


class HistoryOut(CamelModel):
    results: List[HistoryItemOut]
    pagination: PaginationOut
