"""Tests for quiz-history analytics (distribution, trends, streaks)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from career_pathfinder.reporting.history import (
    average_scores,
    career_path_distribution,
    completion_rate,
    completion_streak,
    monthly_trends,
    summarize_history,
    unique_paths,
)
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory as C

from conftest import make_attempt

_T0 = datetime(2026, 10, 10, 9, 0, tzinfo=timezone.utc)


def _day(offset: int, hour: int = 9):
    return _T0 + timedelta(days=offset, hours=hour - 9)


class TestDistribution:
    def test_counts_and_percentages(self):
        attempts = [
            make_attempt(C.DATA, 5),
            make_attempt(C.DATA, 7),
            make_attempt(C.BACKEND, 3),
            make_attempt(C.DESIGN, 2),
        ]
        assert career_path_distribution(attempts) == [
            {"category": "data", "count": 2, "percentage": 50.0},
            {"category": "backend", "count": 1, "percentage": 25.0},
            {"category": "design", "count": 1, "percentage": 25.0},
        ]

    def test_ties_in_declaration_order(self):
        attempts = [make_attempt(C.SECURITY, 1), make_attempt(C.FRONTEND, 1)]
        assert [row["category"] for row in career_path_distribution(attempts)] == [
            "frontend", "security",
        ]

    def test_empty(self):
        assert career_path_distribution([]) == []


class TestMonthlyTrends:
    def test_grouped_by_month_oldest_first(self):
        attempts = [
            make_attempt(C.DATA, 1, created_at=datetime(2026, 10, 2, tzinfo=timezone.utc)),
            make_attempt(C.DATA, 1, created_at=datetime(2026, 9, 30, tzinfo=timezone.utc)),
            make_attempt(C.DEVOPS, 1, created_at=datetime(2026, 10, 5, tzinfo=timezone.utc)),
        ]
        assert monthly_trends(attempts) == [
            {"month": "2026-09", "data": 1},
            {"month": "2026-10", "data": 1, "devops": 1},
        ]


class TestCompletion:
    def test_rate_is_mean_percentage(self):
        attempts = [
            make_attempt(answered_count=5, total_questions=5),
            make_attempt(answered_count=2, total_questions=5),
        ]
        assert completion_rate(attempts) == pytest.approx(70.0)

    def test_rate_empty(self):
        assert completion_rate([]) == 0.0


class TestStreak:
    def test_consecutive_days(self):
        attempts = [make_attempt(created_at=_day(d)) for d in (0, -1, -2)]
        assert completion_streak(attempts) == 3

    def test_gap_breaks_streak(self):
        attempts = [make_attempt(created_at=_day(d)) for d in (0, -1, -3, -4)]
        assert completion_streak(attempts) == 2

    def test_same_day_counts_once(self):
        attempts = [make_attempt(created_at=_day(0, h)) for h in (8, 12, 20)]
        assert completion_streak(attempts) == 1

    def test_input_order_irrelevant(self):
        attempts = [make_attempt(created_at=_day(d)) for d in (-2, 0, -1)]
        assert completion_streak(attempts) == 3

    def test_days_are_utc(self):
        # 23:30 at UTC-5 is the next day in UTC.
        est = timezone(timedelta(hours=-5))
        attempts = [
            make_attempt(created_at=datetime(2026, 10, 9, 23, 30, tzinfo=est)),
            make_attempt(created_at=datetime(2026, 10, 11, 1, 0, tzinfo=timezone.utc)),
        ]
        assert completion_streak(attempts) == 2

    def test_empty(self):
        assert completion_streak([]) == 0


class TestAggregates:
    def test_unique_paths(self):
        attempts = [make_attempt(C.DATA, 1), make_attempt(C.DATA, 2), make_attempt(C.DESIGN, 1)]
        assert unique_paths(attempts) == 2

    def test_average_scores(self):
        attempts = [make_attempt(C.DATA, 4), make_attempt(C.DATA, 1)]
        averages = average_scores(attempts)
        assert averages[C.DATA] == 2.5
        assert averages[C.BACKEND] == 0.0
        assert list(averages) == list(C)

    def test_summary(self):
        attempts = [
            make_attempt(C.BACKEND, 18, created_at=_day(-1)),
            make_attempt(C.DATA, 9, created_at=_day(0), answered_count=3),
        ]
        summary = summarize_history(attempts)
        assert summary["total_attempts"] == 2
        assert summary["completion_rate"] == 80.0
        assert summary["streak_days"] == 2
        assert summary["unique_paths"] == 2
        assert summary["latest_category"] == "data"
        assert summary["latest_at"] == _day(0).isoformat()

    def test_summary_empty(self):
        summary = summarize_history([])
        assert summary["total_attempts"] == 0
        assert summary["latest_category"] is None
