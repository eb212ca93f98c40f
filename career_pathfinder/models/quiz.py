"""
Quiz question bank models.

A ``QuizQuestion`` holds an ordered tuple of ``QuizOption`` objects. Each
option carries a per-category weight vector; choosing that option adds the
weights to the attempt's ``ScoreVector``. Weights are raw non-negative
integers — they need not sum to any fixed total, and a category absent from
``weights`` contributes 0.

``Answer`` is the caller's choice for one question. It references the bank
by id only; resolution (and the ``InvalidReferenceError`` on unknown ids)
happens in the recommendation engine.

All models are frozen: the question bank is process-wide constant
configuration and must not be mutated after load.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from career_pathfinder.taxonomy.career_taxonomy import CareerCategory

# Category → summed weight. Always complete when produced by the engine.
ScoreVector = dict[CareerCategory, int]


class QuizOption(BaseModel):
    """One selectable answer to a quiz question.

    Attributes:
        option_id: Identifier unique within its question, e.g. ``"a"``.
        label: Text shown to the user.
        weights: Per-category contribution; missing categories count as 0.
    """

    model_config = ConfigDict(frozen=True)

    option_id: str
    label: str
    weights: dict[CareerCategory, int] = {}

    @field_validator("option_id")
    @classmethod
    def validate_option_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("option_id must not be empty.")
        return v.strip()

    @field_validator("weights")
    @classmethod
    def validate_weights_non_negative(
        cls, v: dict[CareerCategory, int]
    ) -> dict[CareerCategory, int]:
        for cat, weight in v.items():
            if weight < 0:
                raise ValueError(
                    f"Weight for '{cat.value}' must be non-negative, got {weight}."
                )
        return v

    def weight_for(self, category: CareerCategory) -> int:
        """Return this option's weight for ``category`` (0 if absent)."""
        return self.weights.get(category, 0)


class QuizQuestion(BaseModel):
    """A multiple-choice question in the question bank.

    Attributes:
        question_id: Stable unique integer id.
        prompt: Question text.
        options: Ordered, non-empty tuple of options with unique ids.
    """

    model_config = ConfigDict(frozen=True)

    question_id: int
    prompt: str
    options: tuple[QuizOption, ...]

    @model_validator(mode="after")
    def validate_options(self) -> "QuizQuestion":
        if not self.options:
            raise ValueError(f"Question {self.question_id} has no options.")
        seen: set[str] = set()
        for opt in self.options:
            if opt.option_id in seen:
                raise ValueError(
                    f"Question {self.question_id} has duplicate option id "
                    f"'{opt.option_id}'."
                )
            seen.add(opt.option_id)
        return self

    def find_option(self, option_id: str) -> QuizOption | None:
        """Return the option with ``option_id``, or ``None``."""
        for opt in self.options:
            if opt.option_id == option_id:
                return opt
        return None

    @property
    def option_ids(self) -> list[str]:
        return [opt.option_id for opt in self.options]


class Answer(BaseModel):
    """The option a user picked for one question."""

    model_config = ConfigDict(frozen=True)

    question_id: int
    option_id: str
