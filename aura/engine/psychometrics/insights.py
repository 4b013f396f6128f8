# aura/engine/psychometrics/insights.py
"""
Local (deterministic) insight generation + parsing of AI insight text.

Two fallback tiers, used whenever the AI path is unavailable:
    1. rule_insights()  : per-trait sentence when score > 4 or < 2
    2. GENERIC_INSIGHTS : five canned sentences when tier 1 is empty

Same scores in → same list out, whatever the AI availability.
"""
import re
from typing import Dict, List, Mapping, Sequence

from aura.engine.psychometrics.scoring import THRESHOLD_HIGH, THRESHOLD_LOW, TRAITS

INSIGHT_COUNT = 5

# trait → (high sentence, low sentence)
TRAIT_RULES: Dict[str, tuple] = {
    "openness": (
        "You show a high level of openness to new experiences, indicating creativity and intellectual curiosity.",
        "You tend to prefer routine and familiar situations, valuing tradition and conventional approaches.",
    ),
    "conscientiousness": (
        "Your high conscientiousness suggests you are organized, responsible, and goal-oriented.",
        "You may prefer a more flexible and spontaneous approach to life, valuing freedom over structure.",
    ),
    "extraversion": (
        "Your high extraversion indicates you are energized by social interactions and enjoy being around others.",
        "You tend to be more reserved and may prefer solitary activities or small group settings.",
    ),
    "agreeableness": (
        "Your high agreeableness suggests you are compassionate, cooperative, and value harmony in relationships.",
        "You may be more direct and competitive, prioritizing personal goals over social harmony.",
    ),
    "neuroticism": (
        "You may experience emotions more intensely and be more sensitive to stress and negative situations.",
        "You tend to be emotionally stable and resilient, handling stress and challenges with composure.",
    ),
}

GENERIC_INSIGHTS: List[str] = [
    "You show a strong balance between analytical thinking and emotional intelligence, allowing you to approach problems from multiple angles while maintaining empathy for others involved.",
    "Your responses indicate a preference for structured environments, but you also demonstrate adaptability when faced with unexpected changes or challenges.",
    "You tend to be introspective and value self-improvement, which helps you continuously grow but may sometimes lead to overthinking or being too self-critical.",
    "In social situations, you strike a balance between listening and contributing, making you an effective communicator who can both understand others' perspectives and clearly express your own.",
    "Your decision-making process combines logical analysis with consideration of how choices affect people, leading to well-rounded decisions that account for both practical outcomes and human factors.",
]

# item numbers start a line or follow the end of a sentence, never mid-sentence
_NUMBERED = re.compile(r"(?:^\s*|(?<=[.!?:])\s+)\d+[.)]\s+", re.MULTILINE)
_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def rule_insights(scores: Mapping[str, float]) -> List[str]:
    """Tier 1: fixed trait order, thresholds are strict (> 4, < 2)."""
    insights = []
    for trait in TRAITS:
        score = scores.get(trait)
        if score is None:
            continue
        high, low = TRAIT_RULES[trait]
        if score > THRESHOLD_HIGH:
            insights.append(high)
        elif score < THRESHOLD_LOW:
            insights.append(low)
    return insights


def local_insights(scores: Mapping[str, float]) -> List[str]:
    return rule_insights(scores) or list(GENERIC_INSIGHTS)


def split_insights(text: str) -> List[str]:
    """
    Splits free AI text into discrete insights.

    Numbered list ("1. …", "2) …") → one insight per item, preamble dropped.
    Otherwise → one insight per non-empty line, bullets stripped.
    """
    if not text or not text.strip():
        return []

    if len(_NUMBERED.findall(text)) >= 2:
        parts = _NUMBERED.split(text)
        # parts[0] is whatever precedes "1.": an intro sentence, not an insight
        items = parts[1:]
    else:
        items = text.splitlines()

    insights = []
    for item in items:
        cleaned = " ".join(_BULLET.sub("", item).split())
        if cleaned:
            insights.append(cleaned)
    return insights


def format_scores(scores: Mapping[str, float]) -> str:
    return "\n".join(f"{trait}: {float(score):.2f}" for trait, score in scores.items())


def format_answers(answers: Sequence[Mapping]) -> str:
    lines = []
    for i, answer in enumerate(answers, start=1):
        text = answer.get("question_text") or answer.get("questionText") or "Question"
        label = answer.get("answer_text") or answer.get("answerText") or "Answer"
        value = answer.get("value", answer.get("answerValue"))
        suffix = f" (Value: {value})" if value is not None else ""
        lines.append(f"Q{i}: {text} - Answer: {label}{suffix}")
    return "\n".join(lines)
