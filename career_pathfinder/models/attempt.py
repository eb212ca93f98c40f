"""
Finalized quiz attempt — the record the persistence gateway stores.

A ``QuizAttempt`` is built from the engine's output *after* scoring; the
engine itself never creates or stores one. It keeps:

  - the primary ``category`` and its raw ``score``,
  - the complete ``scores`` vector (so history can be re-ranked later),
  - the raw ``answers`` in submission order,
  - ``answered_count`` / ``total_questions`` for completion statistics.

Frozen once created. ``attempt_id`` is assigned by the repository on insert.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from career_pathfinder.models.career import RecommendationSet
from career_pathfinder.models.quiz import Answer, ScoreVector
from career_pathfinder.taxonomy.career_taxonomy import CATEGORY_ORDER, CareerCategory


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class QuizAttempt(BaseModel):
    """One completed (or partially completed) quiz attempt for a user.

    Attributes:
        attempt_id: Auto-assigned DB PK; ``None`` before insertion.
        user_id: Owner of the attempt.
        category: Primary recommended category.
        score: Raw summed score of ``category``.
        scores: Complete ScoreVector the ranking was derived from.
        answered_count: Number of distinct questions answered.
        total_questions: Questions in the bank at the time of the attempt.
        answers: Raw answers in submission order.
        created_at: UTC timestamp of the attempt.
    """

    model_config = ConfigDict(frozen=True)

    attempt_id: Optional[int] = None
    user_id: str
    category: CareerCategory
    score: int
    scores: ScoreVector
    answered_count: int
    total_questions: int
    answers: list[Answer] = []
    created_at: datetime = Field(default_factory=_utcnow)

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("user_id must not be empty.")
        return v.strip()

    @field_validator("scores")
    @classmethod
    def complete_scores(cls, v: ScoreVector) -> ScoreVector:
        return {cat: v.get(cat, 0) for cat in CATEGORY_ORDER}

    @model_validator(mode="after")
    def validate_counts(self) -> "QuizAttempt":
        if self.total_questions < 1:
            raise ValueError("total_questions must be >= 1.")
        if not 0 <= self.answered_count <= self.total_questions:
            raise ValueError(
                f"answered_count ({self.answered_count}) must be in "
                f"[0, total_questions={self.total_questions}]."
            )
        if self.scores[self.category] != self.score:
            raise ValueError(
                f"score ({self.score}) does not match scores['{self.category.value}'] "
                f"({self.scores[self.category]})."
            )
        return self

    @property
    def completion_pct(self) -> float:
        return self.answered_count / self.total_questions * 100

    @classmethod
    def from_recommendations(
        cls,
        user_id: str,
        answers: list[Answer],
        result: RecommendationSet,
        total_questions: int,
        created_at: Optional[datetime] = None,
    ) -> "QuizAttempt":
        """Build an attempt record from the engine's output."""
        return cls(
            user_id=user_id,
            category=result.primary.category,
            score=result.primary.score,
            scores=result.scores,
            answered_count=len({a.question_id for a in answers}),
            total_questions=total_questions,
            answers=list(answers),
            created_at=created_at or _utcnow(),
        )
