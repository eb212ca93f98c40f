"""
Question bank loader: JSON → validated, read-only ``QuestionBank``.

File format (``config/quiz/questions.json``)
---------------------------------------------
A JSON array, one object per question, in display order::

    [
      {
        "id": 1,
        "prompt": "Which aspect of technology interests you the most?",
        "options": [
          {"id": "a", "label": "...", "weights": {"frontend": 3, "design": 4}},
          ...
        ]
      },
      ...
    ]

Validation rules
----------------
- Root must be a non-empty array.
- Question ids are unique integers.
- Each question has at least one option; option ids are unique per question.
- Weight keys must be ``CareerCategory`` values; weights are integers >= 0.

Any violation raises ``ConfigurationError`` at load time. The loader never
touches the network.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from career_pathfinder.errors import ConfigurationError, InvalidReferenceError
from career_pathfinder.models.quiz import QuizOption, QuizQuestion
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory

log = logging.getLogger(__name__)

_VALID_CATEGORIES: frozenset[str] = frozenset(c.value for c in CareerCategory)


class QuestionBank:
    """Ordered, read-only collection of quiz questions with id lookups.

    Args:
        questions: Questions in display order. Ids must be unique.

    Raises:
        ConfigurationError: On duplicate question ids or an empty bank.
    """

    def __init__(self, questions: list[QuizQuestion] | tuple[QuizQuestion, ...]) -> None:
        if not questions:
            raise ConfigurationError("Question bank must contain at least one question.")
        by_id: dict[int, QuizQuestion] = {}
        for q in questions:
            if q.question_id in by_id:
                raise ConfigurationError(f"Duplicate question id {q.question_id}.")
            by_id[q.question_id] = q
        self._questions: tuple[QuizQuestion, ...] = tuple(questions)
        self._by_id = by_id

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[QuizQuestion]:
        return iter(self._questions)

    def __getitem__(self, index: int) -> QuizQuestion:
        return self._questions[index]

    @property
    def question_ids(self) -> list[int]:
        """Question ids in display order."""
        return [q.question_id for q in self._questions]

    def get_question(self, question_id: int) -> QuizQuestion:
        """Return the question with ``question_id``.

        Raises:
            InvalidReferenceError: If no such question exists.
        """
        question = self._by_id.get(question_id)
        if question is None:
            raise InvalidReferenceError(question_id)
        return question

    def get_option(self, question_id: int, option_id: str) -> QuizOption:
        """Resolve ``(question_id, option_id)`` to a ``QuizOption``.

        Raises:
            InvalidReferenceError: If the question or the option does not exist.
        """
        option = self.get_question(question_id).find_option(option_id)
        if option is None:
            raise InvalidReferenceError(question_id, option_id)
        return option


# ── Validation ────────────────────────────────────────────────────────────────

def _validate_raw_questions(records: Any) -> None:
    """Raise ConfigurationError for structural problems pydantic can't name well."""
    if not isinstance(records, list):
        raise ConfigurationError("Question bank JSON must contain an array.")
    if not records:
        raise ConfigurationError("Question bank JSON array is empty.")

    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise ConfigurationError(f"Question at index {i} is not an object.")
        if "id" not in rec:
            raise ConfigurationError(f"Question at index {i} is missing 'id'.")
        options = rec.get("options")
        if not isinstance(options, list) or not options:
            raise ConfigurationError(
                f"Question {rec['id']} must have a non-empty 'options' array."
            )
        for j, opt in enumerate(options):
            weights = opt.get("weights", {}) if isinstance(opt, dict) else None
            if not isinstance(weights, dict):
                raise ConfigurationError(
                    f"Question {rec['id']} option #{j}: 'weights' must be an object."
                )
            unknown = set(weights) - _VALID_CATEGORIES
            if unknown:
                raise ConfigurationError(
                    f"Question {rec['id']} option #{j} has unknown categories "
                    f"{sorted(unknown)}. Valid values: {sorted(_VALID_CATEGORIES)}"
                )


def _to_question(rec: dict[str, Any]) -> QuizQuestion:
    return QuizQuestion(
        question_id=rec["id"],
        prompt=rec.get("prompt", ""),
        options=tuple(
            QuizOption(
                option_id=opt.get("id", ""),
                label=opt.get("label", ""),
                weights=opt.get("weights", {}),
            )
            for opt in rec["options"]
        ),
    )


def parse_question_bank(records: Any) -> QuestionBank:
    """Build a ``QuestionBank`` from already-decoded JSON data.

    Raises:
        ConfigurationError: If the data violates any validation rule.
    """
    _validate_raw_questions(records)
    questions: list[QuizQuestion] = []
    for i, rec in enumerate(records):
        try:
            questions.append(_to_question(rec))
        except ValidationError as exc:
            raise ConfigurationError(
                f"Question at index {i} failed validation: {exc}"
            ) from exc
    return QuestionBank(questions)


def load_question_bank(path: Path | str) -> QuestionBank:
    """Load and validate the question bank JSON file at ``path``.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or malformed.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read question bank {path}: {exc}") from exc

    bank = parse_question_bank(records)
    log.info("Loaded question bank: %d questions from %s", len(bank), path)
    return bank
