# aura/modules/insights/service.py
"""
Insight regeneration for a stored test result.

    AI reply → split_insights() → stored on the result
    AI down / empty reply / DB update failure → local_insights(traits)

The caller always gets a list; is_fallback tells which path produced it.
"""
import logging
from typing import Dict, List, Mapping, Sequence

from aura.engine.psychometrics.insights import (
    INSIGHT_COUNT, format_answers, format_scores, local_insights, split_insights,
)
from aura.infra.ai_client import AIClient
from aura.modules.assessment.repository import AssessmentRepository
from aura.shared.errors import NotFound, PersistenceFailure, UpstreamFailure
from aura.shared.models import User

logger = logging.getLogger(__name__)

repo = AssessmentRepository()

SYSTEM_PROMPT = (
    "You are an expert personality analyst. Your task is to generate insightful, "
    "personalized analysis based on personality test results.\n"
    "Focus on providing actionable insights, strengths, potential growth areas, and how "
    "these traits might manifest in different life situations.\n"
    f"Provide {INSIGHT_COUNT} distinct insights, each 2-3 sentences long, as a numbered list. "
    "Make them specific, personalized, and psychologically sound."
)


def build_insight_prompt(traits: Mapping[str, float], answers: Sequence[Mapping]) -> List[Dict[str, str]]:
    user_prompt = (
        "Here are the personality trait scores from a test (1-5 scale):\n\n"
        f"{format_scores(traits)}\n\n"
        "And here's a summary of some of their answers:\n\n"
        f"{format_answers(answers) or 'No answers recorded.'}\n\n"
        f"Based on this information, generate {INSIGHT_COUNT} insightful observations about this "
        "person's personality, strengths, potential growth areas, and how these traits might "
        "manifest in different situations."
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


class InsightService:

    async def regenerate(self, db, ai: AIClient, user: User, test_id: int) -> Dict:
        result = await repo.get_result(db, test_id, user.id)
        if result is None:
            raise NotFound("Test result not found")

        traits = result.traits or {}
        answers = [a for a in (result.answers or []) if isinstance(a, Mapping)]

        insights = await self._ai_insights(ai, traits, answers)
        is_fallback = not insights
        if is_fallback:
            insights = local_insights(traits)

        try:
            await repo.update_insights(db, result, insights)
        except PersistenceFailure:
            logger.warning("Insights of test %s not stored, serving local insights", test_id)
            return {"success": True, "insights": local_insights(traits), "is_fallback": True}

        return {"success": True, "insights": insights, "is_fallback": is_fallback}

    async def _ai_insights(self, ai: AIClient, traits, answers) -> List[str]:
        if not ai.enabled:
            return []
        try:
            reply = await ai.complete(
                build_insight_prompt(traits, answers),
                temperature=0.7,
                max_tokens=1000,
                operation="ai.insights",
            )
        except UpstreamFailure as e:
            logger.warning("ai.insights: using local insights (%s)", e.detail)
            return []

        insights = split_insights(reply)[:INSIGHT_COUNT]
        if not insights:
            logger.warning("ai.insights: reply held no usable insight")
        return insights
