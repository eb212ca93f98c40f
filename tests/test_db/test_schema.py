"""Tests for schema creation and idempotency."""

from __future__ import annotations

import sqlite3

import pytest

from career_pathfinder.db.connection import get_connection
from career_pathfinder.db.schema import (
    ALL_TABLE_NAMES,
    apply_schema,
    get_existing_indexes,
    get_existing_tables,
)


def test_all_tables_created(in_memory_db):
    tables = get_existing_tables(in_memory_db)
    for name in ALL_TABLE_NAMES:
        assert name in tables


def test_indexes_created(in_memory_db):
    indexes = get_existing_indexes(in_memory_db)
    assert "idx_attempts_user_time" in indexes
    assert "idx_attempts_category" in indexes
    assert "idx_cvs_user_updated" in indexes
    assert "idx_cvs_one_default" in indexes


def test_apply_schema_is_idempotent(in_memory_db):
    apply_schema(in_memory_db)
    apply_schema(in_memory_db)
    assert get_existing_tables(in_memory_db).count("quiz_attempts") == 1


def test_check_constraint_rejects_negative_score(in_memory_db):
    with pytest.raises(sqlite3.IntegrityError):
        in_memory_db.execute(
            """
            INSERT INTO quiz_attempts (
                user_id, category, score, scores_json,
                answered_count, total_questions, answers_json
            ) VALUES ('alice', 'data', -1, '{}', 0, 5, '[]');
            """
        )


def test_check_constraint_rejects_overcount(in_memory_db):
    with pytest.raises(sqlite3.IntegrityError):
        in_memory_db.execute(
            """
            INSERT INTO quiz_attempts (
                user_id, category, score, scores_json,
                answered_count, total_questions, answers_json
            ) VALUES ('alice', 'data', 1, '{}', 6, 5, '[]');
            """
        )


def test_get_connection_creates_file_and_commits(tmp_path):
    db_file = tmp_path / "nested" / "quiz.db"
    with get_connection(db_file) as conn:
        apply_schema(conn)
    assert db_file.exists()
    with get_connection(db_file) as conn:
        assert "quiz_attempts" in get_existing_tables(conn)


def test_profile_and_cv_tables_listed():
    assert ALL_TABLE_NAMES == ["quiz_attempts", "profiles", "cvs"]


def test_cv_default_flag_must_be_boolean(in_memory_db):
    with pytest.raises(sqlite3.IntegrityError):
        in_memory_db.execute(
            """
            INSERT INTO cvs (user_id, title, template, is_default, body_json, created_at, updated_at)
            VALUES ('alice', 'CV', 'modern', 2, '{}', 'now', 'now');
            """
        )
