# aura/engine/questions/bank.py
"""
Static question banks: ZERO DB access.

STANDARD_BANK : 15 items (q1–q15), 3 per trait: initial test
FALLBACK_BANK : 15 items (ai-q1–ai-q15): served when AI generation fails

Both banks alternate traits in Big-Five order, so any prefix is balanced.
"""
import random
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

from aura.shared.enums import Trait

LIKERT_OPTIONS: Tuple[Tuple[int, str], ...] = (
    (1, "Strongly Disagree"),
    (2, "Disagree"),
    (3, "Neutral"),
    (4, "Agree"),
    (5, "Strongly Agree"),
)


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    trait: str
    weight: float = 1.0
    options: Tuple[Tuple[int, str], ...] = field(default=LIKERT_OPTIONS)

    def option_label(self, value: int) -> str:
        return next((label for v, label in self.options if v == value), "")

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["options"] = [{"value": v, "text": label} for v, label in self.options]
        return data


def _bank(prefix: str, texts: List[Tuple[str, Trait]]) -> List[Question]:
    return [
        Question(id=f"{prefix}{i}", text=text, trait=trait.value)
        for i, (text, trait) in enumerate(texts, start=1)
    ]


STANDARD_BANK: List[Question] = _bank("q", [
    ("I enjoy trying new and different things.", Trait.OPENNESS),
    ("I am usually well-prepared for my tasks and responsibilities.", Trait.CONSCIENTIOUSNESS),
    ("I feel energized when spending time with others.", Trait.EXTRAVERSION),
    ("I am sympathetic and caring towards others.", Trait.AGREEABLENESS),
    ("I often feel anxious or worried.", Trait.NEUROTICISM),
    ("I have a vivid imagination.", Trait.OPENNESS),
    ("I pay attention to details.", Trait.CONSCIENTIOUSNESS),
    ("I start conversations with new people easily.", Trait.EXTRAVERSION),
    ("I believe in helping others.", Trait.AGREEABLENESS),
    ("I get stressed easily.", Trait.NEUROTICISM),
    ("I enjoy thinking about abstract concepts.", Trait.OPENNESS),
    ("I follow a schedule and stick to it.", Trait.CONSCIENTIOUSNESS),
    ("I prefer being in groups rather than being alone.", Trait.EXTRAVERSION),
    ("I try to understand how others feel.", Trait.AGREEABLENESS),
    ("I worry about things that might go wrong.", Trait.NEUROTICISM),
])

FALLBACK_BANK: List[Question] = _bank("ai-q", [
    ("I often find myself lost in thought about abstract concepts and ideas.", Trait.OPENNESS),
    ("I prefer to have a detailed plan before starting any project.", Trait.CONSCIENTIOUSNESS),
    ("I feel energized after spending time at social gatherings.", Trait.EXTRAVERSION),
    ("I prioritize others' needs over my own in most situations.", Trait.AGREEABLENESS),
    ("I tend to worry about things that might go wrong in the future.", Trait.NEUROTICISM),
    ("I enjoy exploring new artistic and cultural experiences.", Trait.OPENNESS),
    ("I keep my belongings organized and know where everything is.", Trait.CONSCIENTIOUSNESS),
    ("I find it easy to introduce myself to strangers.", Trait.EXTRAVERSION),
    ("I believe in giving people second chances.", Trait.AGREEABLENESS),
    ("I get frustrated easily when things don't go as planned.", Trait.NEUROTICISM),
    ("I enjoy thinking about philosophical questions.", Trait.OPENNESS),
    ("I follow through on commitments I make.", Trait.CONSCIENTIOUSNESS),
    ("I prefer being the center of attention in social situations.", Trait.EXTRAVERSION),
    ("I go out of my way to make others feel comfortable.", Trait.AGREEABLENESS),
    ("I often feel overwhelmed by my responsibilities.", Trait.NEUROTICISM),
])


def get_question(question_id: str) -> Optional[Question]:
    return next(
        (q for q in STANDARD_BANK + FALLBACK_BANK if q.id == question_id), None
    )


def get_initial_questions(count: int, seed: Optional[int] = None) -> List[Question]:
    """
    `count` questions from STANDARD_BANK, balanced across traits.

    Each trait's questions are shuffled, then traits are drawn round-robin
    (in an order that is itself shuffled), so per-trait counts differ by at
    most one. Same seed → same list. count is clamped to [0, len(bank)].
    """
    count = max(0, min(count, len(STANDARD_BANK)))
    rng = random.Random(seed)

    by_trait: Dict[str, List[Question]] = {}
    for question in STANDARD_BANK:
        by_trait.setdefault(question.trait, []).append(question)
    for pool in by_trait.values():
        rng.shuffle(pool)

    order = list(by_trait)
    rng.shuffle(order)

    picked: List[Question] = []
    while len(picked) < count:
        for trait in order:
            if by_trait[trait] and len(picked) < count:
                picked.append(by_trait[trait].pop())
    return picked


def get_fallback_questions(count: int) -> List[Question]:
    """First `count` fallback items: a deterministic, trait-balanced prefix."""
    return FALLBACK_BANK[:max(0, count)]
