# aura/engine/psychometrics/scoring.py
"""
Big-Five trait scoring: ZERO DB access.
Receives answers as parameters, returns a plain {trait: score} map.

Called by: modules/assessment/service.py, engine/session.py

Canonical scale is 1–5 (the Likert option values). Clients that hold
scores on 0–1 go through from_unit_scale() at the submission boundary.
"""
from typing import Any, Dict, Iterable, Mapping, Optional

from aura.shared.enums import Trait

# --- SCALE ---
SCALE_MIN = 1.0
SCALE_MAX = 5.0
SCALE_MIDPOINT = 3.0

# --- LEVEL THRESHOLDS (strict) ---
THRESHOLD_HIGH = 4.0
THRESHOLD_LOW = 2.0

TRAITS = tuple(t.value for t in Trait)


def _field(answer: Any, name: str, default=None):
    if isinstance(answer, Mapping):
        return answer.get(name, default)
    return getattr(answer, name, default)


def clamp(score: float) -> float:
    return max(SCALE_MIN, min(SCALE_MAX, score))


def calculate_trait_scores(
    answers: Iterable[Any],
    weights: Optional[Mapping[str, float]] = None,   # {question_id: weight}
) -> Dict[str, float]:
    """
    Weighted mean of answer values per trait.

    score(trait) = Σ value·weight / Σ weight, with weight = 1 when the
    question is absent from `weights`: so unit weights give the plain
    average. Values are clamped into [1, 5] first, so the result always
    stays within the scale.

    Traits without answers are omitted. Answers whose trait is unknown or
    whose value is not numeric are skipped. Empty input → {}.
    """
    weights = weights or {}
    totals: Dict[str, Dict[str, float]] = {}

    for answer in answers:
        trait = _field(answer, "trait")
        if isinstance(trait, Trait):
            trait = trait.value
        if trait not in TRAITS:
            continue

        try:
            value = float(_field(answer, "value"))
        except (TypeError, ValueError):
            continue

        question_id = _field(answer, "question_id") or _field(answer, "questionId")
        weight = float(weights.get(question_id, 1.0))
        if weight <= 0:
            continue

        bucket = totals.setdefault(trait, {"sum": 0.0, "weight": 0.0})
        bucket["sum"] += clamp(value) * weight
        bucket["weight"] += weight

    return {
        trait: round(clamp(data["sum"] / data["weight"]), 2)
        for trait, data in totals.items()
    }


def level_label(score: float) -> str:
    if score > THRESHOLD_HIGH:
        return "high"
    if score < THRESHOLD_LOW:
        return "low"
    return "moderate"


# ── Scale conversion ──────────────────────────────────────────

def to_unit_scale(score: float) -> float:
    """1–5 → 0–1."""
    return round((clamp(score) - SCALE_MIN) / (SCALE_MAX - SCALE_MIN), 4)


def from_unit_scale(score: float) -> float:
    """0–1 → 1–5."""
    unit = max(0.0, min(1.0, score))
    return round(SCALE_MIN + unit * (SCALE_MAX - SCALE_MIN), 2)


def normalize_scores(scores: Mapping[str, float], unit_scale: bool = False) -> Dict[str, float]:
    """
    Brings a client-supplied trait map onto the canonical scale.
    Unknown traits are dropped, values are clamped.
    """
    normalized = {}
    for trait, score in scores.items():
        if trait not in TRAITS:
            continue
        value = from_unit_scale(score) if unit_scale else round(clamp(float(score)), 2)
        normalized[trait] = value
    return normalized
