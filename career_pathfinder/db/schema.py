"""
SQLite schema DDL — CREATE TABLE and CREATE INDEX statements.

All statements use ``IF NOT EXISTS`` so ``apply_schema()`` is **idempotent**:
safe to call on an already-initialized database (e.g. after restart or in tests).

Tables
------
  quiz_attempts — one row per finalized quiz attempt. ``scores_json`` holds
                  the complete ScoreVector and ``answers_json`` the raw answers,
                  both as JSON objects/arrays so they round-trip losslessly.
  profiles      — one row per user with contact details; the quiz completion
                  count is derived from ``quiz_attempts``, not stored.
  cvs           — saved CVs. Header fields and section lists live in
                  ``body_json``; a partial unique index allows at most one
                  ``is_default`` row per user.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# ── DDL statements ─────────────────────────────────────────────────────────────

_DDL_QUIZ_ATTEMPTS = """
CREATE TABLE IF NOT EXISTS quiz_attempts (
    attempt_id       INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id          TEXT    NOT NULL,
    category         TEXT    NOT NULL,
    score            INTEGER NOT NULL CHECK (score >= 0),
    scores_json      TEXT    NOT NULL,
    answered_count   INTEGER NOT NULL CHECK (answered_count >= 0),
    total_questions  INTEGER NOT NULL CHECK (total_questions >= 1),
    answers_json     TEXT    NOT NULL,
    created_at       TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now')),
    CHECK (answered_count <= total_questions)
);

CREATE INDEX IF NOT EXISTS idx_attempts_user_time
    ON quiz_attempts (user_id, created_at);

CREATE INDEX IF NOT EXISTS idx_attempts_category
    ON quiz_attempts (category);
"""

_DDL_PROFILES = """
CREATE TABLE IF NOT EXISTS profiles (
    user_id       TEXT PRIMARY KEY,
    full_name     TEXT,
    email         TEXT,
    phone_number  TEXT,
    location      TEXT,
    bio           TEXT,
    created_at    TEXT NOT NULL,
    updated_at    TEXT NOT NULL
);
"""

_DDL_CVS = """
CREATE TABLE IF NOT EXISTS cvs (
    cv_id        INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id      TEXT    NOT NULL,
    title        TEXT    NOT NULL,
    template     TEXT    NOT NULL,
    is_default   INTEGER NOT NULL DEFAULT 0 CHECK (is_default IN (0, 1)),
    body_json    TEXT    NOT NULL,
    created_at   TEXT    NOT NULL,
    updated_at   TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_cvs_user_updated
    ON cvs (user_id, updated_at);

CREATE UNIQUE INDEX IF NOT EXISTS idx_cvs_one_default
    ON cvs (user_id) WHERE is_default = 1;
"""

_ALL_DDL = [
    _DDL_QUIZ_ATTEMPTS,
    _DDL_PROFILES,
    _DDL_CVS,
]

ALL_TABLE_NAMES = [
    "quiz_attempts",
    "profiles",
    "cvs",
]


def apply_schema(conn: sqlite3.Connection) -> None:
    """Apply all DDL statements to ``conn``.

    Idempotent — safe to call on an already-initialized database.

    Args:
        conn: An open ``sqlite3.Connection``.
    """
    logger.debug("Applying schema to database...")

    for ddl in _ALL_DDL:
        for statement in _split_ddl(ddl):
            conn.execute(statement)

    conn.commit()
    logger.info("Schema applied: %d tables, indexes created/verified.", len(ALL_TABLE_NAMES))


def _split_ddl(ddl: str) -> list[str]:
    """Split a multi-statement DDL block on semicolons."""
    return [s.strip() for s in ddl.split(";") if s.strip()]


def get_existing_tables(conn: sqlite3.Connection) -> list[str]:
    """Return table names present in the database (sorted alphabetically)."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;"
    ).fetchall()
    return [row[0] for row in rows]


def get_existing_indexes(conn: sqlite3.Connection) -> list[str]:
    """Return index names present in the database (sorted alphabetically)."""
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='index' ORDER BY name;"
    ).fetchall()
    return [row[0] for row in rows]
