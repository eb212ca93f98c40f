"""
Repository for finalized quiz attempts.

ScoreVector and answers are stored as JSON; ``_row_to_attempt`` rebuilds
them so a stored attempt compares equal to the one that was inserted
(apart from the assigned ``attempt_id``).
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from career_pathfinder.db.repositories.base import BaseRepository
from career_pathfinder.models.attempt import QuizAttempt
from career_pathfinder.models.quiz import Answer
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory

logger = logging.getLogger(__name__)


class QuizAttemptRepository(BaseRepository):
    """Read/write access to the ``quiz_attempts`` table."""

    table = "quiz_attempts"

    def insert(self, attempt: QuizAttempt) -> int:
        """Insert an attempt and return its ``attempt_id``."""
        attempt_id = self.insert_row({
            "user_id":         attempt.user_id,
            "category":        attempt.category.value,
            "score":           attempt.score,
            "scores_json":     json.dumps({cat.value: val for cat, val in attempt.scores.items()}),
            "answered_count":  attempt.answered_count,
            "total_questions": attempt.total_questions,
            "answers_json":    json.dumps([a.model_dump() for a in attempt.answers]),
            "created_at":      _to_utc_iso(attempt.created_at),
        })
        logger.info(
            "Saved quiz attempt %d for user=%s category=%s",
            attempt_id, attempt.user_id, attempt.category.value,
        )
        return attempt_id

    def get_by_id(self, attempt_id: int) -> Optional[QuizAttempt]:
        """Fetch an attempt by primary key, or ``None``."""
        row = self.fetchone(
            "SELECT * FROM quiz_attempts WHERE attempt_id = ?;", (attempt_id,)
        )
        return _row_to_attempt(row) if row else None

    def list_for_user(self, user_id: str, limit: Optional[int] = None) -> list[QuizAttempt]:
        """Fetch a user's attempts, newest first.

        Args:
            user_id: Owner to filter by.
            limit:   Optional maximum number of rows.
        """
        sql = """
            SELECT * FROM quiz_attempts
            WHERE user_id = ?
            ORDER BY created_at DESC, attempt_id DESC
        """
        params: tuple = (user_id,)
        if limit is not None:
            sql += " LIMIT ?"
            params = (user_id, limit)
        rows = self.fetchall(sql + ";", params)
        return [_row_to_attempt(r) for r in rows]

    def count_for_user(self, user_id: str) -> int:
        return self.count_where("user_id = ?", (user_id,))

    def list_user_ids(self) -> list[str]:
        """Distinct owners with at least one attempt, sorted."""
        rows = self.fetchall(
            "SELECT DISTINCT user_id FROM quiz_attempts ORDER BY user_id;"
        )
        return [row["user_id"] for row in rows]

    def delete(self, attempt_id: int, user_id: Optional[str] = None) -> bool:
        """Delete an attempt. Returns True if a row was removed.

        When ``user_id`` is given the row is only deleted if it belongs to
        that user.
        """
        if user_id is None:
            removed = self.delete_where("attempt_id = ?", (attempt_id,))
        else:
            removed = self.delete_where(
                "attempt_id = ? AND user_id = ?", (attempt_id, user_id)
            )
        if removed:
            logger.info("Deleted quiz attempt %d", attempt_id)
        return removed > 0


def _to_utc_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _row_to_attempt(row: sqlite3.Row) -> QuizAttempt:
    created = datetime.fromisoformat(row["created_at"].replace("Z", "+00:00"))
    return QuizAttempt(
        attempt_id=row["attempt_id"],
        user_id=row["user_id"],
        category=CareerCategory(row["category"]),
        score=row["score"],
        scores={CareerCategory(k): int(v) for k, v in json.loads(row["scores_json"]).items()},
        answered_count=row["answered_count"],
        total_questions=row["total_questions"],
        answers=[Answer(**a) for a in json.loads(row["answers_json"])],
        created_at=created,
    )
