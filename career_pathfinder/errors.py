"""
Exception hierarchy for the career pathfinder.

``InvalidReferenceError`` — an answer names a question or option that does not
    exist in the question bank. Raised per call; never silently skipped.
``ConfigurationError``   — the question bank, career catalog, or app config is
    malformed. Raised once, at load time.
``IncompleteAnswersError`` — the caller asked for full completion and some
    questions are unanswered.
``CVNotFoundError``      — a CV id does not exist or belongs to another user.
"""

from __future__ import annotations

from typing import Optional


class CareerPathfinderError(Exception):
    """Base class for all errors raised by this package."""


class InvalidReferenceError(CareerPathfinderError, LookupError):
    """An answer references an unknown question id or option id."""

    def __init__(self, question_id: int, option_id: Optional[str] = None) -> None:
        self.question_id = question_id
        self.option_id = option_id
        if option_id is None:
            msg = f"Unknown question id {question_id}."
        else:
            msg = f"Unknown option '{option_id}' for question {question_id}."
        super().__init__(msg)


class ConfigurationError(CareerPathfinderError, ValueError):
    """Static quiz data or configuration failed validation."""


class IncompleteAnswersError(CareerPathfinderError, ValueError):
    """Some questions were left unanswered when completion was required."""

    def __init__(self, missing_question_ids: list[int]) -> None:
        self.missing_question_ids = list(missing_question_ids)
        ids = ", ".join(str(q) for q in self.missing_question_ids)
        super().__init__(f"Please answer all questions. Unanswered: {ids}.")


class CVNotFoundError(CareerPathfinderError, LookupError):
    """No CV with this id exists for the given user."""

    def __init__(self, cv_id: int, user_id: str) -> None:
        self.cv_id = cv_id
        self.user_id = user_id
        super().__init__(f"CV #{cv_id} not found for user '{user_id}'.")
