# aura/engine/session.py
"""
Test-taking flow for one user tab: ZERO I/O.

    presenting(i) ──answer──> presenting(i+1) … ──begin_submit──> submitting
         ^                                                            │
         └───────────────── fail_submit ───────────── complete <──────┘

Adaptive mode: once `adaptive_threshold` answers are recorded with use_ai
on, needs_adaptive_questions turns True. The caller fetches a batch and
hands it to extend_adaptive(); the trigger is consumed whatever the batch
size and adaptive mode never switches back off.
"""
from typing import Dict, List, Optional, Sequence

from aura.engine.psychometrics.scoring import calculate_trait_scores
from aura.engine.questions.bank import Question
from aura.shared.enums import SessionState

DEFAULT_ADAPTIVE_THRESHOLD = 6


class SessionStateError(RuntimeError):
    pass


class TestSession:
    __test__ = False   # not a pytest class

    def __init__(
        self,
        questions: Sequence[Question],
        use_ai: bool = True,
        adaptive_threshold: int = DEFAULT_ADAPTIVE_THRESHOLD,
    ):
        if not questions:
            raise ValueError("A session needs at least one question.")
        self.questions: List[Question] = list(questions)
        self.use_ai = use_ai
        self.adaptive_threshold = adaptive_threshold

        self.index = 0
        self.state = SessionState.PRESENTING
        self.is_adaptive = False
        self.error: Optional[str] = None
        self.test_id: Optional[int] = None

        self._answers: Dict[str, Dict] = {}
        self._adaptive_triggered = False

    # ── Read ──────────────────────────────────────────────────

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        return self.questions[self.index]

    @property
    def answers(self) -> List[Dict]:
        """Answers in question order (not answer order)."""
        return [self._answers[q.id] for q in self.questions if q.id in self._answers]

    @property
    def progress(self) -> float:
        return round(len(self._answers) / self.total_questions * 100, 1)

    @property
    def needs_adaptive_questions(self) -> bool:
        return (
            self.use_ai
            and not self._adaptive_triggered
            and self.state == SessionState.PRESENTING
            and len(self._answers) >= self.adaptive_threshold
        )

    @property
    def is_ready_to_submit(self) -> bool:
        return (
            self.state == SessionState.PRESENTING
            and all(q.id in self._answers for q in self.questions)
        )

    def stored_value(self, index: Optional[int] = None) -> Optional[int]:
        """Previously chosen value for a question: pre-selects it on "Previous"."""
        question = self.questions[self.index if index is None else index]
        answer = self._answers.get(question.id)
        return answer["value"] if answer else None

    def trait_scores(self) -> Dict[str, float]:
        weights = {q.id: q.weight for q in self.questions}
        return calculate_trait_scores(self.answers, weights)

    # ── Transitions ───────────────────────────────────────────

    def answer(self, value: int) -> None:
        self._require(SessionState.PRESENTING)
        question = self.current_question
        if value not in {v for v, _ in question.options}:
            raise ValueError(f"{value} is not an option of question {question.id}.")

        self._answers[question.id] = {
            "questionId": question.id,
            "value": value,
            "trait": question.trait,
            "questionText": question.text,
            "answerText": question.option_label(value),
        }
        self.error = None
        if self.index < self.total_questions - 1:
            self.index += 1

    def previous(self) -> None:
        self._require(SessionState.PRESENTING)
        if self.index > 0:
            self.index -= 1

    def extend_adaptive(self, questions: Sequence[Question]) -> None:
        """
        Enters adaptive mode (one time only) and appends the fetched batch
        after the existing sequence. An empty batch still switches the mode.
        """
        if self._adaptive_triggered:
            raise SessionStateError("Adaptive questions were already requested.")
        self._require(SessionState.PRESENTING)
        self._adaptive_triggered = True
        self.is_adaptive = True

        known = {q.id for q in self.questions}
        fresh = [q for q in questions if q.id not in known]
        if not fresh:
            return

        on_last = self.index == self.total_questions - 1 and self.current_question.id in self._answers
        self.questions.extend(fresh)
        if on_last:
            self.index += 1

    def skip_adaptive(self) -> None:
        """User declined personalization: consume the trigger, stay standard."""
        self._adaptive_triggered = True

    def begin_submit(self) -> Dict:
        if not self.is_ready_to_submit:
            raise SessionStateError("Every question must be answered before submitting.")
        self.state = SessionState.SUBMITTING
        return {"answers": self.answers, "traitScores": self.trait_scores()}

    def complete(self, test_id: int) -> None:
        self._require(SessionState.SUBMITTING)
        self.test_id = test_id
        self.state = SessionState.COMPLETE

    def fail_submit(self, message: str) -> None:
        self._require(SessionState.SUBMITTING)
        self.state = SessionState.PRESENTING
        self.index = self.total_questions - 1
        self.error = message

    def _require(self, state: SessionState) -> None:
        if self.state != state:
            raise SessionStateError(f"Expected state {state.value}, got {self.state.value}.")
