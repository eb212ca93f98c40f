"""
Recommendation report writer: JSON output for a scored quiz attempt.

Pure I/O — no DB access. The JSON payload carries the full ScoreVector and
the chosen category, and ``load_recommendation_json()`` reads both back
losslessly, so a saved report can be re-ranked without the raw answers.

Output file
-----------
  data/outputs/recommendations/
    recommendations_{user}_{date}.json
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from career_pathfinder.models.career import Recommendation, RecommendationSet
from career_pathfinder.models.quiz import Answer, ScoreVector
from career_pathfinder.taxonomy.career_taxonomy import CATEGORY_ORDER, CareerCategory

logger = logging.getLogger(__name__)


def _recommendation_to_dict(rec: Recommendation) -> dict:
    return {
        "rank":     rec.rank,
        "category": rec.category.value,
        "score":    rec.score,
        "title":    rec.career_path.title,
    }


def recommendation_payload(
    result:  RecommendationSet,
    user_id: str | None = None,
    answers: list[Answer] | None = None,
) -> dict:
    """Build the JSON-serialisable report dict for ``result``."""
    return {
        "user_id":      user_id,
        "generated_at": datetime.now(tz=timezone.utc).isoformat(),
        "primary":      _recommendation_to_dict(result.primary),
        "secondary":    [_recommendation_to_dict(r) for r in result.secondary],
        "scores":       {cat.value: result.scores.get(cat, 0) for cat in CATEGORY_ORDER},
        "answers":      [a.model_dump() for a in answers or []],
    }


def write_recommendation_json(
    result:     RecommendationSet,
    output_dir: Path,
    user_id:    str,
    answers:    list[Answer] | None = None,
    run_date:   date | None = None,
) -> Path:
    """Write ``recommendations_{user}_{date}.json`` and return its path."""
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"recommendations_{user_id}_{run_date}.json"
    payload = recommendation_payload(result, user_id=user_id, answers=answers)
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    logger.info("Wrote recommendation report: %s", json_path)
    return json_path


def load_recommendation_json(path: Path) -> tuple[CareerCategory, ScoreVector]:
    """Read a report back as ``(primary category, ScoreVector)``.

    Raises:
        ValueError: If the file has no primary category or an unknown one.
    """
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    try:
        primary = CareerCategory(payload["primary"]["category"])
        raw_scores = payload["scores"]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed recommendation report {path}: {exc}") from exc
    scores = {cat: int(raw_scores.get(cat.value, 0)) for cat in CATEGORY_ORDER}
    return primary, scores
