# aura/engine/questions/parsing.py
"""
Typed reading of AI replies.

The provider is asked for "ONLY a JSON array" but regularly wraps it in
prose or markdown fences. extract_json_array() returns a tagged result:

    Parsed(data)          : the first well-formed JSON array in the text
    Unrecognized(raw_text): nothing usable

Every consumer handles both variants explicitly.
"""
import json
from dataclasses import dataclass
from typing import Any, List, Union

from aura.engine.questions.bank import LIKERT_OPTIONS, Question
from aura.engine.psychometrics.scoring import TRAITS

MAX_QUESTION_LENGTH = 300


@dataclass(frozen=True)
class Parsed:
    data: Any


@dataclass(frozen=True)
class Unrecognized:
    raw_text: str


AIResponse = Union[Parsed, Unrecognized]

_decoder = json.JSONDecoder()


def extract_json_array(text: str) -> AIResponse:
    """
    Whole text first, then every '[' in order until one decodes to a list.
    A '[' inside a sentence ("see [1]") just fails to decode and is skipped.
    """
    if not text:
        return Unrecognized(text or "")

    stripped = text.strip()
    try:
        data = json.loads(stripped)
        if isinstance(data, list):
            return Parsed(data)
    except ValueError:
        pass

    start = stripped.find("[")
    while start != -1:
        try:
            data, _ = _decoder.raw_decode(stripped, start)
        except ValueError:
            data = None
        if isinstance(data, list):
            return Parsed(data)
        start = stripped.find("[", start + 1)

    return Unrecognized(text)


def questions_from_reply(reply: AIResponse, id_prefix: str = "ai-q") -> List[Question]:
    """
    Keeps items shaped like {text, trait, weight?} with a known trait.
    Unrecognized → [] (the caller decides on the fallback).
    """
    if isinstance(reply, Unrecognized):
        return []

    questions: List[Question] = []
    for item in reply.data:
        if not isinstance(item, dict):
            continue
        text = str(item.get("text") or "").strip()
        trait = str(item.get("trait") or "").strip().lower()
        if not text or trait not in TRAITS:
            continue
        try:
            weight = float(item.get("weight") or 1)
        except (TypeError, ValueError):
            weight = 1.0
        if weight <= 0:
            weight = 1.0

        questions.append(Question(
            id=f"{id_prefix}{len(questions) + 1}",
            text=text[:MAX_QUESTION_LENGTH],
            trait=trait,
            weight=weight,
            options=LIKERT_OPTIONS,
        ))
    return questions
