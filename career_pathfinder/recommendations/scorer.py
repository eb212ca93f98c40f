"""
Quiz scoring: converts a sequence of answers into a complete ScoreVector.

Score formula
-------------
    scores[c] = Σ  option.weights.get(c, 0)      for every category c
               over the effective answers

Effective answers
-----------------
If two answers share a ``question_id`` the later one in the sequence wins,
mirroring replace-on-resubmit in the quiz UI. Every answer is still resolved
against the bank first, so an unknown id raises ``InvalidReferenceError``
even when a later answer would have superseded it.

No normalization or percentage scaling is applied: ranking works on the raw
integer sums.

Pure function of its input plus the static question bank; no I/O.
"""

from __future__ import annotations

import logging
from typing import Iterable

from career_pathfinder.models.quiz import Answer, QuizOption, ScoreVector
from career_pathfinder.quiz.question_bank import QuestionBank
from career_pathfinder.taxonomy.career_taxonomy import CATEGORY_ORDER

logger = logging.getLogger(__name__)


def empty_scores() -> ScoreVector:
    """Return a ScoreVector with every category at 0, in declaration order."""
    return {cat: 0 for cat in CATEGORY_ORDER}


def resolve_answers(
    answers: Iterable[Answer],
    bank: QuestionBank,
) -> dict[int, QuizOption]:
    """Resolve answers to options, keeping only the last answer per question.

    Returns:
        Dict ``question_id → QuizOption`` for the effective answers.

    Raises:
        InvalidReferenceError: If any answer names an unknown question or option.
    """
    effective: dict[int, QuizOption] = {}
    for answer in answers:
        option = bank.get_option(answer.question_id, answer.option_id)
        # Remove then re-insert so the dict order follows the latest submission.
        effective.pop(answer.question_id, None)
        effective[answer.question_id] = option
    return effective


def score(answers: Iterable[Answer], bank: QuestionBank) -> ScoreVector:
    """Compute the summed per-category weights for ``answers``.

    Args:
        answers: Zero or more answers; later duplicates replace earlier ones.
        bank:    The question bank the answers refer to.

    Returns:
        ScoreVector with an entry (>= 0) for every ``CareerCategory``.

    Raises:
        InvalidReferenceError: If any answer names an unknown question or option.
    """
    totals = empty_scores()
    effective = resolve_answers(answers, bank)
    for option in effective.values():
        for cat in CATEGORY_ORDER:
            totals[cat] += option.weight_for(cat)

    logger.debug(
        "Scored %d effective answers: %s",
        len(effective),
        {cat.value: val for cat, val in totals.items()},
    )
    return totals


def add_scores(left: ScoreVector, right: ScoreVector) -> ScoreVector:
    """Element-wise sum of two score vectors (missing entries count as 0)."""
    return {cat: left.get(cat, 0) + right.get(cat, 0) for cat in CATEGORY_ORDER}
