"""
Quiz-history analytics for the dashboard and the ``stats`` CLI command.

All functions are pure: they take a list of ``QuizAttempt`` records (any
order) and return plain dicts / numbers ready for charting or formatting.

Streak rule
-----------
``completion_streak`` counts consecutive calendar days (UTC) with at least
one attempt, walking back from the most recent attempt day. Several
attempts on the same day count as one day.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, timedelta, timezone

from career_pathfinder.models.attempt import QuizAttempt
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory, category_position


def _attempt_day(attempt: QuizAttempt) -> date:
    ts = attempt.created_at
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return ts.date()


def career_path_distribution(attempts: list[QuizAttempt]) -> list[dict]:
    """How often each category was the primary recommendation.

    Returns:
        ``[{"category", "count", "percentage"}]`` sorted by count descending,
        ties in declaration order. Categories never recommended are omitted.
    """
    if not attempts:
        return []
    counts = Counter(a.category for a in attempts)
    total = len(attempts)
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], category_position(kv[0])))
    return [
        {
            "category": cat.value,
            "count": n,
            "percentage": round(n / total * 100, 1),
        }
        for cat, n in ordered
    ]


def monthly_trends(attempts: list[QuizAttempt]) -> list[dict]:
    """Primary-category counts per ``YYYY-MM`` month, oldest month first.

    Each row is ``{"month": "2026-10", "<category>": count, ...}`` and only
    includes categories seen in that month.
    """
    by_month: dict[str, dict[str, int]] = defaultdict(dict)
    for a in attempts:
        month = _attempt_day(a).strftime("%Y-%m")
        bucket = by_month[month]
        bucket[a.category.value] = bucket.get(a.category.value, 0) + 1
    return [{"month": month, **by_month[month]} for month in sorted(by_month)]


def completion_rate(attempts: list[QuizAttempt]) -> float:
    """Mean percentage of questions answered per attempt (1 dp); 0.0 if none."""
    if not attempts:
        return 0.0
    total = sum(a.completion_pct for a in attempts)
    return round(total / len(attempts), 1)


def completion_streak(attempts: list[QuizAttempt]) -> int:
    """Consecutive attempt days ending on the most recent attempt day."""
    if not attempts:
        return 0
    days = sorted({_attempt_day(a) for a in attempts}, reverse=True)
    streak = 1
    for prev, current in zip(days, days[1:]):
        if prev - current == timedelta(days=1):
            streak += 1
        else:
            break
    return streak


def unique_paths(attempts: list[QuizAttempt]) -> int:
    """Number of distinct primary categories across ``attempts``."""
    return len({a.category for a in attempts})


def average_scores(attempts: list[QuizAttempt]) -> dict[CareerCategory, float]:
    """Mean raw score per category across attempts (1 dp), declaration order."""
    if not attempts:
        return {cat: 0.0 for cat in CareerCategory}
    return {
        cat: round(sum(a.scores[cat] for a in attempts) / len(attempts), 1)
        for cat in CareerCategory
    }


def summarize_history(attempts: list[QuizAttempt]) -> dict:
    """Bundle the headline numbers shown on the dashboard."""
    latest = max(attempts, key=lambda a: a.created_at) if attempts else None
    return {
        "total_attempts": len(attempts),
        "completion_rate": completion_rate(attempts),
        "streak_days": completion_streak(attempts),
        "unique_paths": unique_paths(attempts),
        "latest_category": latest.category.value if latest else None,
        "latest_at": latest.created_at.isoformat() if latest else None,
    }
