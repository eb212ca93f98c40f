"""
Shared pytest fixtures for the Career Pathfinder test suite.

Provides:
  - ``in_memory_db``: A fresh in-memory SQLite connection with the full
    schema applied. Created anew for each test that requests it.
  - ``bank`` / ``catalog``: The bundled question bank and career catalog
    from ``config/quiz/``.
  - Small hand-built banks, plus attempt and CV factories for focused tests.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import pytest

from career_pathfinder.db.schema import apply_schema
from career_pathfinder.models.attempt import QuizAttempt
from career_pathfinder.models.cv import CurriculumVitae, Education, Experience, Language, Skill
from career_pathfinder.models.quiz import Answer, QuizOption, QuizQuestion
from career_pathfinder.quiz.catalog import CareerCatalog, load_career_catalog
from career_pathfinder.quiz.question_bank import QuestionBank, load_question_bank
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory

QUIZ_DIR = Path(__file__).resolve().parent.parent / "config" / "quiz"
QUESTIONS_FILE = QUIZ_DIR / "questions.json"
CATALOG_FILE = QUIZ_DIR / "career_paths.json"


# ── Database fixture ──────────────────────────────────────────────────────────

@pytest.fixture
def in_memory_db() -> Generator[sqlite3.Connection, None, None]:
    """Yield a fresh in-memory SQLite connection with the full schema applied.

    Rows come back as ``sqlite3.Row``, as from ``get_connection``.
    Connection is closed after the test.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    apply_schema(conn)
    yield conn
    conn.close()


# ── Bundled quiz data ─────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def bank() -> QuestionBank:
    return load_question_bank(QUESTIONS_FILE)


@pytest.fixture(scope="session")
def catalog() -> CareerCatalog:
    return load_career_catalog(CATALOG_FILE)


@pytest.fixture
def all_b_answers() -> list[Answer]:
    """Option "b" for every bundled question: backend wins with 18."""
    return [Answer(question_id=q, option_id="b") for q in range(1, 6)]


# ── Small hand-built bank ─────────────────────────────────────────────────────

@pytest.fixture
def tiny_bank() -> QuestionBank:
    """Two questions with sparse weights (absent categories count as 0)."""
    return QuestionBank([
        QuizQuestion(
            question_id=10,
            prompt="Pick one",
            options=(
                QuizOption(option_id="x", label="X", weights={CareerCategory.DATA: 2}),
                QuizOption(option_id="y", label="Y", weights={CareerCategory.DESIGN: 1}),
            ),
        ),
        QuizQuestion(
            question_id=20,
            prompt="Pick another",
            options=(
                QuizOption(option_id="x", label="X", weights={CareerCategory.DEVOPS: 5}),
                QuizOption(option_id="y", label="Y", weights={}),
            ),
        ),
    ])


# ── Attempt factory ───────────────────────────────────────────────────────────

def make_attempt(
    category: CareerCategory = CareerCategory.BACKEND,
    score: int = 18,
    created_at: datetime | None = None,
    user_id: str = "alice",
    answered_count: int = 5,
    total_questions: int = 5,
) -> QuizAttempt:
    """Build a valid ``QuizAttempt`` whose primary score matches ``scores``."""
    return QuizAttempt(
        user_id=user_id,
        category=category,
        score=score,
        scores={category: score},
        answered_count=answered_count,
        total_questions=total_questions,
        answers=[Answer(question_id=1, option_id="b")],
        created_at=created_at or datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_attempt() -> QuizAttempt:
    return make_attempt()


# ── CV factory ────────────────────────────────────────────────────────────────

def make_cv(user_id: str = "alice", title: str = "Backend roles", **overrides) -> CurriculumVitae:
    """A CV with a filled header and one entry in the main sections."""
    fields = dict(
        user_id=user_id,
        title=title,
        full_name="Alice Ade",
        email="alice@example.com",
        phone="+234 800 000 0000",
        location="Lagos, Nigeria",
        github_url="https://github.com/alice",
        summary="Backend developer focused on APIs and data pipelines.",
        education=[Education(degree="BSc Computer Science", institution="UNILAG",
                             start_date="2018", end_date="2022")],
        experience=[Experience(title="Backend Intern", company="Paystack",
                               start_date="2023-01", current=True,
                               description="Built payment reconciliation jobs.")],
        skills=[Skill(name="Python", level="Advanced"), Skill(name="SQL")],
        languages=[Language(name="English", proficiency="Native")],
    )
    fields.update(overrides)
    return CurriculumVitae(**fields)
