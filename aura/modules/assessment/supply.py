# aura/modules/assessment/supply.py
"""
Question supply: static initial set + AI-generated batches.

One QuestionSupply per process, built in main.lifespan and injected via
QuestionSupplyDep. It owns its cachetools.TTLCache, so tests get a fresh one each.

Contract of every AI-backed method: it returns questions, never raises.
Timeout, provider error, unreadable JSON or an empty batch → the static
fallback batch from engine/questions/bank.py.
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence

from cachetools import TTLCache

from aura.engine.psychometrics.insights import format_answers, format_scores
from aura.engine.questions.bank import Question, get_fallback_questions, get_initial_questions
from aura.engine.questions.parsing import Parsed, Unrecognized, extract_json_array, questions_from_reply
from aura.infra.ai_client import AIClient
from aura.shared.errors import UpstreamFailure

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert in personality psychology and psychometric testing.
Your task is to generate insightful, probing questions for a personality test based on the Big Five personality traits:

1. Openness to Experience: Curiosity, creativity, and preference for variety vs. consistency and routine
2. Conscientiousness: Organization, responsibility, and self-discipline vs. spontaneity and flexibility
3. Extraversion: Sociability, assertiveness, and energy from external stimulation vs. solitude and internal processing
4. Agreeableness: Compassion, cooperation, and trust vs. skepticism and prioritizing self-interest
5. Neuroticism: Emotional sensitivity, anxiety, and stress response vs. emotional stability and resilience

For each question, provide:
1. A clear, concise statement the user can agree or disagree with, probing one specific trait
2. The trait it primarily measures (one of: openness, conscientiousness, extraversion, agreeableness, neuroticism)
3. A weight value of 1 (standard importance)

Format your response as a valid JSON array of question objects."""

RESPONSE_FORMAT = """Return ONLY a valid JSON array of question objects with the following structure:
[
  {
    "text": "Question text here",
    "trait": "one of: openness, conscientiousness, extraversion, agreeableness, neuroticism",
    "weight": 1
  }
]"""


def build_question_prompt(
    count: int,
    previous_answers: Sequence[Mapping] = (),
    current_scores: Optional[Mapping[str, float]] = None,
) -> List[Dict[str, str]]:
    parts = [f"Please generate {count} unique personality test questions."]

    if previous_answers:
        parts.append("Here are the previous answers from this user:\n" + format_answers(previous_answers))
    if current_scores:
        parts.append("Here are their current trait scores (1-5 scale):\n" + format_scores(current_scores))

    if previous_answers or current_scores:
        parts.append("Please tailor the new questions to explore areas that need more clarity based on these responses.")
    else:
        parts.append("Please create a balanced set of questions covering all five traits.")
    parts.append(RESPONSE_FORMAT)

    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "\n\n".join(parts)},
    ]


class QuestionSupply:

    def __init__(self, ai_client: AIClient, cache: TTLCache):
        self.ai = ai_client
        self.cache = cache

    def get_initial_questions(self, count: int, seed: Optional[int] = None) -> List[Question]:
        return get_initial_questions(count, seed=seed)

    async def request_adaptive_questions(
        self,
        previous_answers: Sequence[Mapping],
        current_scores: Mapping[str, float],
        count: int = 5,
    ) -> Dict:
        """
        Returns {"questions": [...], "is_adaptive": bool}.
        is_adaptive=False means the static fallback batch was served.
        """
        questions = await self._generate(
            build_question_prompt(count, previous_answers, current_scores),
            count,
            operation="ai.adaptive_questions",
        )
        if questions:
            return {"questions": questions, "is_adaptive": True}
        return {"questions": get_fallback_questions(count), "is_adaptive": False}

    async def generate_questions(self, user_id: int, count: int, use_cache: bool = True) -> Dict:
        """
        Fresh AI batch without prior answers, cached per (user, count).
        Only real AI batches are cached.
        """
        cache_key = (user_id, count)
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Question cache hit for %s", cache_key)
                return {"questions": cached, "is_ai": True, "cached": True}

        questions = await self._generate(
            build_question_prompt(count), count, operation="ai.generate_questions"
        )
        if not questions:
            return {"questions": get_fallback_questions(count), "is_ai": False, "cached": False}

        self.cache[cache_key] = questions
        return {"questions": questions, "is_ai": True, "cached": False}

    async def _generate(self, messages, count: int, operation: str) -> List[Question]:
        if not self.ai.enabled:
            return []
        try:
            raw = await self.ai.complete(messages, temperature=0.7, max_tokens=1500, operation=operation)
        except UpstreamFailure as e:
            logger.warning("%s: using fallback questions (%s)", operation, e.detail)
            return []

        reply = extract_json_array(raw)
        if isinstance(reply, Unrecognized):
            logger.warning("%s: no JSON array in AI reply (%d chars)", operation, len(reply.raw_text))
            return []

        questions = questions_from_reply(reply)[:count]
        if not questions and isinstance(reply, Parsed):
            logger.warning("%s: JSON array held no valid question", operation)
        return questions
