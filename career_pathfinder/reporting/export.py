"""
Export helpers for spreadsheet / pandas analysis of quiz history.

All functions write to disk and return the written ``Path``.

CSV exports are flat (no nested dicts): ``flatten_attempts_for_export()``
expands each attempt's ScoreVector into one ``score_<category>`` column per
category so the file loads directly in Excel or pandas.
"""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path

from career_pathfinder.models.attempt import QuizAttempt
from career_pathfinder.taxonomy.career_taxonomy import CATEGORY_ORDER

HISTORY_FIELDNAMES: list[str] = [
    "attempt_id", "user_id", "created_at", "category", "score",
    "answered_count", "total_questions",
    *(f"score_{cat.value}" for cat in CATEGORY_ORDER),
    "answers",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order. If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records and fieldnames is None:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_attempts_for_export(attempts: list[QuizAttempt]) -> list[dict]:
    """One flat row per attempt with a column per category score.

    ``answers`` is compacted to ``"1=b;2=c;..."`` in submission order.
    """
    rows: list[dict] = []
    for a in attempts:
        row = {
            "attempt_id":      a.attempt_id,
            "user_id":         a.user_id,
            "created_at":      a.created_at.isoformat(),
            "category":        a.category.value,
            "score":           a.score,
            "answered_count":  a.answered_count,
            "total_questions": a.total_questions,
            "answers":         ";".join(f"{ans.question_id}={ans.option_id}" for ans in a.answers),
        }
        for cat in CATEGORY_ORDER:
            row[f"score_{cat.value}"] = a.scores[cat]
        rows.append(row)
    return rows


def write_history_csv(
    attempts: list[QuizAttempt],
    output_dir: Path,
    user_id: str,
    run_date: date | None = None,
) -> Path:
    """Write a user's attempt history to ``history_{user}_{date}.csv``."""
    if run_date is None:
        run_date = date.today()
    path = output_dir / f"history_{user_id}_{run_date}.csv"
    return export_to_csv(
        flatten_attempts_for_export(attempts), path, fieldnames=HISTORY_FIELDNAMES
    )
