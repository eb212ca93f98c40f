"""
Dashboard data loader.

All functions are decorated with ``@st.cache_data`` so Streamlit only
re-queries SQLite or re-reads files when the TTL expires, not on every
widget interaction. Call ``st.cache_data.clear()`` after a new quiz run
to see it immediately.

Functions return empty lists / ``None`` (rather than raising) when the
database or report directory does not exist yet, so every view can show a
graceful "no data yet" message.
"""

from __future__ import annotations

import logging
from pathlib import Path

import streamlit as st

from career_pathfinder.db.connection import get_connection
from career_pathfinder.db.repositories.attempt_repo import QuizAttemptRepository
from career_pathfinder.db.schema import get_existing_tables
from career_pathfinder.models.attempt import QuizAttempt
from career_pathfinder.models.quiz import ScoreVector
from career_pathfinder.recommendations.reporter import load_recommendation_json
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory

logger = logging.getLogger(__name__)


def _find_latest(directory: Path, pattern: str) -> Path | None:
    """Return the most-recently-modified file matching ``pattern``."""
    if not directory.exists():
        return None
    matches = list(directory.glob(pattern))
    return max(matches, key=lambda p: p.stat().st_mtime) if matches else None


# ── Loaders ──────────────────────────────────────────────────────────────────


def _has_store(db_path: str) -> bool:
    """True once ``init-db`` or a saved attempt has created the table."""
    if not Path(db_path).exists():
        return False
    with get_connection(db_path, read_only=True) as conn:
        return "quiz_attempts" in get_existing_tables(conn)


@st.cache_data(ttl=60)
def load_attempts(db_path: str, user_id: str) -> list[QuizAttempt]:
    """All saved attempts for ``user_id``, newest first.

    TTL: 1 minute (picks up attempts saved from the CLI).
    """
    if not _has_store(db_path):
        return []
    with get_connection(db_path, read_only=True) as conn:
        return QuizAttemptRepository(conn).list_for_user(user_id)


@st.cache_data(ttl=60)
def load_user_ids(db_path: str) -> list[str]:
    """Distinct user ids with at least one saved attempt, sorted."""
    if not _has_store(db_path):
        return []
    with get_connection(db_path, read_only=True) as conn:
        return QuizAttemptRepository(conn).list_user_ids()


@st.cache_data(ttl=300)
def load_latest_report(
    user_id: str, output_dir: str
) -> tuple[CareerCategory, ScoreVector] | None:
    """Latest ``recommendations_{user}_*.json`` report, or ``None``."""
    path = _find_latest(Path(output_dir), f"recommendations_{user_id}_*.json")
    if path is None:
        return None
    try:
        return load_recommendation_json(path)
    except ValueError as exc:
        logger.warning("Skipping unreadable report %s: %s", path, exc)
        return None
