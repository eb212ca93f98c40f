"""
Per-attempt answer state.

``AnswerSheet`` is an immutable, caller-owned value. ``select_option()``
returns a NEW sheet: any earlier answer to the same question is dropped and
the new answer is appended, so a sheet never holds two answers for one
question. Nothing here is global; two users taking the quiz at once simply
hold two different sheets.

``QuizSession`` drives the one-question-at-a-time flow (current question,
next/previous, progress) on top of an ``AnswerSheet``. It checks chosen
options against the bank immediately so a typo surfaces at selection time
rather than at scoring time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from career_pathfinder.models.quiz import Answer, QuizQuestion
from career_pathfinder.quiz.question_bank import QuestionBank


class AnswerSheet(BaseModel):
    """Immutable ordered set of answers, at most one per question."""

    model_config = ConfigDict(frozen=True)

    answers: tuple[Answer, ...] = ()

    @classmethod
    def from_pairs(cls, pairs: list[tuple[int, str]]) -> "AnswerSheet":
        """Build a sheet by selecting each ``(question_id, option_id)`` in order."""
        sheet = cls()
        for question_id, option_id in pairs:
            sheet = sheet.select_option(question_id, option_id)
        return sheet

    def select_option(self, question_id: int, option_id: str) -> "AnswerSheet":
        """Return a new sheet with ``option_id`` chosen for ``question_id``."""
        kept = tuple(a for a in self.answers if a.question_id != question_id)
        return AnswerSheet(
            answers=kept + (Answer(question_id=question_id, option_id=option_id),)
        )

    def clear(self, question_id: int) -> "AnswerSheet":
        """Return a new sheet without an answer for ``question_id``."""
        return AnswerSheet(
            answers=tuple(a for a in self.answers if a.question_id != question_id)
        )

    def get(self, question_id: int) -> str | None:
        """Return the chosen option id for ``question_id``, or ``None``."""
        for a in self.answers:
            if a.question_id == question_id:
                return a.option_id
        return None

    @property
    def answered_ids(self) -> set[int]:
        return {a.question_id for a in self.answers}

    def missing(self, bank: QuestionBank) -> list[int]:
        """Question ids in ``bank`` (display order) that have no answer."""
        answered = self.answered_ids
        return [qid for qid in bank.question_ids if qid not in answered]

    def is_complete(self, bank: QuestionBank) -> bool:
        return not self.missing(bank)

    def to_answers(self) -> list[Answer]:
        return list(self.answers)

    def __len__(self) -> int:
        return len(self.answers)


class QuizSession:
    """Step-by-step quiz progression over a question bank.

    ``index`` runs from 0 to ``len(bank)``; ``index == len(bank)`` means the
    user has moved past the last question (the completion screen).

    Args:
        bank: The question bank to walk through.
        sheet: Optional pre-filled answers (e.g. a resumed attempt).
    """

    def __init__(self, bank: QuestionBank, sheet: AnswerSheet | None = None) -> None:
        self.bank = bank
        self.sheet = sheet if sheet is not None else AnswerSheet()
        self.index = 0

    @property
    def total_questions(self) -> int:
        return len(self.bank)

    @property
    def is_finished(self) -> bool:
        return self.index >= self.total_questions

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.is_finished:
            return None
        return self.bank[self.index]

    @property
    def progress(self) -> float:
        """Fraction of questions answered, 0.0–1.0."""
        return len(self.sheet) / self.total_questions

    def select_option(self, option_id: str) -> AnswerSheet:
        """Answer the current question, replacing any earlier choice.

        Raises:
            InvalidReferenceError: If ``option_id`` is not an option of the
                current question.
            RuntimeError: If the session has already moved past the last question.
        """
        question = self.current_question
        if question is None:
            raise RuntimeError("Quiz is finished; no current question to answer.")
        self.bank.get_option(question.question_id, option_id)
        self.sheet = self.sheet.select_option(question.question_id, option_id)
        return self.sheet

    def next(self) -> QuizQuestion | None:
        """Advance one question; returns the new current question or ``None``."""
        if not self.is_finished:
            self.index += 1
        return self.current_question

    def previous(self) -> QuizQuestion | None:
        """Go back one question (no-op on the first question)."""
        if self.index > 0:
            self.index -= 1
        return self.current_question
