"""
ASCII terminal formatters for CLI commands.

All formatters accept domain objects or plain dicts and return multi-line
strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from career_pathfinder.models.attempt import QuizAttempt
from career_pathfinder.models.career import Recommendation, RecommendationSet
from career_pathfinder.models.cv import CurriculumVitae
from career_pathfinder.models.profile import UserProfile
from career_pathfinder.models.quiz import QuizQuestion
from career_pathfinder.recommendations.ranker import rank
from career_pathfinder.reporting.cv_document import contact_line, cv_sections, links_line
from career_pathfinder.taxonomy.career_taxonomy import RoadmapTier

_RULE = "-" * 60


# ── Questions ─────────────────────────────────────────────────────────────────


def format_question(
    question: QuizQuestion,
    position: int,
    total: int,
    selected: str | None = None,
) -> str:
    """Render one question with its lettered options.

    The currently selected option (if any) is marked with ``*``.
    """
    lines = [f"Question {position} of {total}", f"  {question.prompt}", ""]
    for opt in question.options:
        marker = "*" if opt.option_id == selected else " "
        lines.append(f"  {marker} {opt.option_id}) {opt.label}")
    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def _format_one(rec: Recommendation, detailed: bool) -> list[str]:
    path = rec.career_path
    lines = [f"  #{rec.rank}  {path.title:<28} score={rec.score}"]
    if not detailed:
        return lines
    lines.append(f"      {path.description}")
    if path.skills:
        lines.append(f"      Skills: {', '.join(path.skills)}")
    for tier in RoadmapTier:
        steps = path.roadmap.steps_for(tier)
        if steps:
            lines.append(f"      {tier.value.capitalize()}:")
            lines.extend(f"        - {step}" for step in steps)
    if path.resources:
        lines.append("      Resources:")
        lines.extend(
            f"        - {res.name} ({res.resource_type}): {res.url}"
            for res in path.resources
        )
    return lines


def format_recommendations(result: RecommendationSet, show_roadmap: bool = True) -> str:
    """Render primary + secondary recommendations and the full score table."""
    lines = ["Your recommended career path", _RULE]
    lines.extend(_format_one(result.primary, detailed=show_roadmap))
    if result.secondary:
        lines.append("")
        lines.append("Also worth exploring")
        lines.append(_RULE)
        for rec in result.secondary:
            lines.extend(_format_one(rec, detailed=False))
    lines.append("")
    lines.append("All scores")
    lines.append(_RULE)
    for cat, value in rank(result.scores):
        lines.append(f"  {cat.value:<10} {value:>4}  {'#' * value}")
    return "\n".join(lines)


# ── History ───────────────────────────────────────────────────────────────────


def format_history_table(attempts: list[QuizAttempt], user_id: str) -> str:
    """One row per attempt: id, timestamp, category, score, completion."""
    if not attempts:
        return f"No quiz attempts recorded for user '{user_id}'."
    header = f"  {'ID':>5}  {'Taken (UTC)':<20}  {'Category':<10}  {'Score':>5}  {'Answered':>8}"
    lines = [f"Quiz history for '{user_id}' ({len(attempts)} attempts)", header, _RULE]
    for a in attempts:
        taken = a.created_at.strftime("%Y-%m-%d %H:%M")
        answered = f"{a.answered_count}/{a.total_questions}"
        lines.append(
            f"  {a.attempt_id or '-':>5}  {taken:<20}  {a.category.value:<10}"
            f"  {a.score:>5}  {answered:>8}"
        )
    return "\n".join(lines)


def format_stats_summary(summary: dict, distribution: list[dict]) -> str:
    """Render the headline history numbers plus the category distribution."""
    lines = [
        "Quiz statistics",
        _RULE,
        f"  Attempts:        {summary['total_attempts']}",
        f"  Completion rate: {summary['completion_rate']:.1f}%",
        f"  Streak:          {summary['streak_days']} day(s)",
        f"  Paths explored:  {summary['unique_paths']}",
    ]
    if summary.get("latest_category"):
        lines.append(f"  Latest result:   {summary['latest_category']}")
    if distribution:
        lines.append("")
        lines.append("Career path distribution")
        lines.append(_RULE)
        for row in distribution:
            lines.append(
                f"  {row['category']:<10} {row['count']:>4}  {row['percentage']:>5.1f}%"
            )
    return "\n".join(lines)


# ── Profile and CVs ───────────────────────────────────────────────────────────


def format_profile(profile: UserProfile) -> str:
    """Render a profile; unset fields show as ``-``."""
    def show(value) -> str:
        return value if value else "-"

    lines = [
        f"Profile for '{profile.user_id}'",
        _RULE,
        f"  Name:            {show(profile.full_name)}",
        f"  Email:           {show(profile.email)}",
        f"  Phone:           {show(profile.phone_number)}",
        f"  Location:        {show(profile.location)}",
        f"  Bio:             {show(profile.bio)}",
        f"  Quizzes taken:   {profile.quiz_completion_count}",
    ]
    if profile.updated_at:
        lines.append(f"  Updated (UTC):   {profile.updated_at.strftime('%Y-%m-%d %H:%M')}")
    return "\n".join(lines)


def format_cv_list(cvs: list[CurriculumVitae], user_id: str) -> str:
    if not cvs:
        return f"No CVs saved for user '{user_id}'."
    header = f"  {'ID':>5}  {'Title':<28}  {'Template':<8}  {'Updated (UTC)':<16}"
    lines = [f"CVs for '{user_id}' ({len(cvs)})", header, _RULE]
    for cv in cvs:
        updated = cv.updated_at.strftime("%Y-%m-%d %H:%M") if cv.updated_at else "-"
        marker = " *" if cv.is_default else ""
        lines.append(f"  {cv.cv_id or '-':>5}  {cv.title:<28}  {cv.template:<8}  {updated:<16}{marker}")
    lines.append("")
    lines.append("  * default CV")
    return "\n".join(lines)


def format_cv(cv: CurriculumVitae) -> str:
    """Plain-text rendering of the same outline the PDF export uses."""
    lines = [cv.full_name or "(no name)", _RULE]
    for line in (contact_line(cv), links_line(cv)):
        if line:
            lines.append(f"  {line}")
    for heading, body in cv_sections(cv):
        lines.append("")
        lines.append(heading.upper())
        lines.extend(f"  {line}" for line in body)
    return "\n".join(lines)
