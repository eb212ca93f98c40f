"""
Recommendation ranker: orders a ScoreVector and attaches catalog records.

Usage flow
----------
1. scorer.score(answers, bank)
   -> ScoreVector  (every category, raw summed weights)

2. rank(scores)
   -> list[(CareerCategory, score)]  (total order over every category)

3. recommend(answers, bank, catalog)
   -> RecommendationSet  (primary = rank 1, secondary = ranks 2..3)

Ordering
--------
Primary sort: score descending. Ties are broken by ``CareerCategory``
declaration order (frontend, backend, data, devops, security, design), so an
all-zero vector ranks ``frontend`` first. There is exactly one ranking path;
``primary`` is always ``rank(scores)[0]``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from career_pathfinder.errors import IncompleteAnswersError
from career_pathfinder.models.career import CareerPath, Recommendation, RecommendationSet
from career_pathfinder.models.quiz import Answer, ScoreVector
from career_pathfinder.quiz.question_bank import QuestionBank
from career_pathfinder.recommendations.scorer import score
from career_pathfinder.taxonomy.career_taxonomy import (
    CATEGORY_ORDER,
    CareerCategory,
    category_position,
)

logger = logging.getLogger(__name__)

DEFAULT_SECONDARY_COUNT = 2


def rank(scores: Mapping[CareerCategory, int]) -> list[tuple[CareerCategory, int]]:
    """Order every category by score descending, ties by declaration order.

    Categories absent from ``scores`` are ranked with a score of 0.

    Returns:
        One ``(category, score)`` pair per ``CareerCategory``.
    """
    pairs = [(cat, scores.get(cat, 0)) for cat in CATEGORY_ORDER]
    return sorted(pairs, key=lambda p: (-p[1], category_position(p[0])))


def build_recommendation_set(
    scores: ScoreVector,
    catalog: Mapping[CareerCategory, CareerPath],
    secondary_count: int = DEFAULT_SECONDARY_COUNT,
) -> RecommendationSet:
    """Rank ``scores`` and enrich the top entries with their catalog records.

    Args:
        scores:          A ScoreVector (missing categories count as 0).
        catalog:         Career-path records keyed by category.
        secondary_count: How many runners-up to include after the primary.

    Returns:
        ``RecommendationSet``. ``secondary`` holds fewer entries only when
        fewer categories exist.

    Raises:
        ValueError: If ``secondary_count`` is negative.
    """
    if secondary_count < 0:
        raise ValueError(f"secondary_count must be >= 0, got {secondary_count}.")
    ranked = rank(scores)
    top = [
        Recommendation(
            rank=position,
            category=cat,
            score=value,
            career_path=catalog[cat],
        )
        for position, (cat, value) in enumerate(ranked[: 1 + secondary_count], start=1)
    ]
    logger.debug(
        "Ranked categories: %s",
        ", ".join(f"{cat.value}={value}" for cat, value in ranked),
    )
    return RecommendationSet(
        primary=top[0],
        secondary=tuple(top[1:]),
        scores={cat: scores.get(cat, 0) for cat in CATEGORY_ORDER},
    )


def recommend(
    answers:          Iterable[Answer],
    bank:             QuestionBank,
    catalog:          Mapping[CareerCategory, CareerPath],
    require_complete: bool = False,
    secondary_count:  int = DEFAULT_SECONDARY_COUNT,
) -> RecommendationSet:
    """Score ``answers`` and return the primary and secondary recommendations.

    Partial and empty answer sets are accepted by default: unanswered
    questions simply contribute zero weight.

    Args:
        answers:          Answers in submission order; later duplicates win.
        bank:             Question bank the answers refer to.
        catalog:          Career-path records keyed by category.
        require_complete: If True, every bank question must be answered.
        secondary_count:  Number of runner-up recommendations (default 2).

    Raises:
        InvalidReferenceError: If any answer names an unknown question/option.
        IncompleteAnswersError: If ``require_complete`` and questions are missing.
        ValueError: If ``secondary_count`` is negative.
    """
    answers = list(answers)
    scores = score(answers, bank)

    if require_complete:
        answered = {a.question_id for a in answers}
        missing = [qid for qid in bank.question_ids if qid not in answered]
        if missing:
            raise IncompleteAnswersError(missing)

    result = build_recommendation_set(scores, catalog, secondary_count)
    logger.debug(
        "Recommendation: primary=%s (%d), secondary=%s",
        result.primary.category.value,
        result.primary.score,
        [r.category.value for r in result.secondary],
    )
    return result
