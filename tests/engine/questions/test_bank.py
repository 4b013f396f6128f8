# tests/engine/questions/test_bank.py
"""
Unit tests for engine.questions.bank

Coverage:
    - Both banks: 15 items, 3 per trait, Likert 1–5 options
    - get_initial_questions(): balanced, seeded → deterministic, clamped
    - get_fallback_questions(): prefix of the fallback bank
    - Question.to_dict() wire shape
"""
import pytest
from collections import Counter

from aura.engine.questions.bank import (
    FALLBACK_BANK,
    STANDARD_BANK,
    get_fallback_questions,
    get_initial_questions,
    get_question,
)
from aura.shared.enums import Trait

pytestmark = pytest.mark.engine


class TestBanks:
    @pytest.mark.parametrize("bank", [STANDARD_BANK, FALLBACK_BANK])
    def test_three_questions_per_trait(self, bank):
        assert len(bank) == 15
        assert Counter(q.trait for q in bank) == {t.value: 3 for t in Trait}

    def test_ids(self):
        assert [q.id for q in STANDARD_BANK][:2] == ["q1", "q2"]
        assert FALLBACK_BANK[-1].id == "ai-q15"

    def test_likert_options(self):
        question = STANDARD_BANK[0]
        assert [v for v, _ in question.options] == [1, 2, 3, 4, 5]
        assert question.option_label(5) == "Strongly Agree"
        assert question.option_label(7) == ""

    def test_get_question(self):
        assert get_question("q1").text == "I enjoy trying new and different things."
        assert get_question("ai-q2").trait == "conscientiousness"
        assert get_question("nope") is None


class TestInitialQuestions:
    def test_balanced_across_traits(self):
        counts = Counter(q.trait for q in get_initial_questions(10, seed=1))
        assert set(counts) == {t.value for t in Trait}
        assert max(counts.values()) - min(counts.values()) <= 1

    def test_five_questions_cover_every_trait(self):
        assert {q.trait for q in get_initial_questions(5, seed=42)} == {t.value for t in Trait}

    def test_seeded_is_deterministic(self):
        a = [q.id for q in get_initial_questions(8, seed=7)]
        b = [q.id for q in get_initial_questions(8, seed=7)]
        assert a == b

    def test_no_duplicates(self):
        ids = [q.id for q in get_initial_questions(15, seed=3)]
        assert len(ids) == len(set(ids)) == 15

    def test_count_is_clamped(self):
        assert len(get_initial_questions(50)) == 15
        assert get_initial_questions(0) == []
        assert get_initial_questions(-3) == []


class TestFallbackQuestions:
    def test_prefix(self):
        assert get_fallback_questions(3) == FALLBACK_BANK[:3]

    def test_prefix_of_five_is_balanced(self):
        assert {q.trait for q in get_fallback_questions(5)} == {t.value for t in Trait}

    def test_clamped(self):
        assert len(get_fallback_questions(40)) == 15
        assert get_fallback_questions(0) == []


def test_to_dict_shape():
    data = STANDARD_BANK[0].to_dict()
    assert data["id"] == "q1"
    assert data["trait"] == "openness"
    assert data["weight"] == 1.0
    assert data["options"][0] == {"value": 1, "text": "Strongly Disagree"}
