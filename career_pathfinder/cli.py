"""
Career Pathfinder — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the question bank / career catalog (fatal on ConfigurationError).
  4. Execute action (quiz, scoring, history query, export).
  5. Report result to stdout.

``config/default.toml`` and the quiz data under ``config/quiz/`` live at the
project root and are not installed as package data, so run from a source
checkout with an editable install, or pass ``--config`` pointing at a TOML
file whose quiz and database paths are absolute.

Install and run::

    pip install -e .
    career-pathfinder --help
    career-pathfinder init-db
    career-pathfinder validate-config
    career-pathfinder questions
    career-pathfinder take-quiz --user alice
    career-pathfinder recommend -a 1=b -a 2=b -a 3=b -a 4=b -a 5=b
    career-pathfinder history --user alice
    career-pathfinder stats --user alice
    career-pathfinder profile-update --user alice --full-name "Alice Ade"
    career-pathfinder cv-save --user alice --file my_cv.json
    career-pathfinder cv-export --user alice --format pdf
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

import typer

from career_pathfinder.errors import (
    ConfigurationError,
    IncompleteAnswersError,
    InvalidReferenceError,
)

app = typer.Typer(
    name="career-pathfinder",
    help="Career Pathfinder — career-path quiz, recommendations and history.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from career_pathfinder.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from career_pathfinder.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_quiz_data_or_exit(config):
    """Load the question bank and career catalog named in ``config``."""
    from career_pathfinder.config import resolve_path
    from career_pathfinder.quiz.catalog import load_career_catalog
    from career_pathfinder.quiz.question_bank import load_question_bank

    try:
        bank = load_question_bank(resolve_path(config.quiz.questions_file))
        catalog = load_career_catalog(resolve_path(config.quiz.catalog_file))
    except ConfigurationError as exc:
        typer.echo(f"[ERROR] Quiz data invalid: {exc}", err=True)
        raise typer.Exit(code=1)
    return bank, catalog


def _db_path(config, override: Optional[str] = None) -> str:
    from career_pathfinder.config import resolve_path

    if override:
        return override
    return str(resolve_path(config.database.db_path))


def _parse_answer_pairs(raw: list[str]) -> list[tuple[int, str]]:
    """Parse ``["1=b", "2=c"]`` into ``[(1, "b"), (2, "c")]``."""
    pairs: list[tuple[int, str]] = []
    for item in raw:
        qid, sep, oid = item.partition("=")
        if not sep or not oid.strip():
            raise ValueError(f"Answer '{item}' must look like QUESTION_ID=OPTION_ID.")
        try:
            pairs.append((int(qid.strip()), oid.strip()))
        except ValueError:
            raise ValueError(f"Answer '{item}': question id must be an integer.") from None
    return pairs


def _require_user(user: Optional[str], flag: str = "--user") -> str:
    """Return the stripped user id, or exit if it is missing or blank."""
    if not user or not user.strip():
        typer.echo(f"[ERROR] {flag} must be a non-empty user id.", err=True)
        raise typer.Exit(code=1)
    return user.strip()


@contextmanager
def _open_db(config, db_path: Optional[str] = None):
    """Open the configured database with the schema applied."""
    from career_pathfinder.db.connection import get_connection
    from career_pathfinder.db.schema import apply_schema

    with get_connection(
        _db_path(config, db_path),
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)
        yield conn


@contextmanager
def _attempt_store(config, db_path: Optional[str] = None):
    from career_pathfinder.db.repositories.attempt_repo import QuizAttemptRepository

    with _open_db(config, db_path) as conn:
        yield QuizAttemptRepository(conn)


def _save_attempt(config, attempt, db_path: Optional[str] = None) -> int:
    with _attempt_store(config, db_path) as repo:
        return repo.insert(attempt)


def _fetch_history(config, user: str, limit: Optional[int] = None, db_path: Optional[str] = None):
    with _attempt_store(config, db_path) as repo:
        return repo.list_for_user(user, limit=limit)


def _read_cv_file(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ValueError(f"CV file not found: {path}") from None
    except json.JSONDecodeError as exc:
        raise ValueError(f"CV file {path} is not valid JSON: {exc}") from None
    if not isinstance(data, dict):
        raise ValueError(f"CV file {path} must hold a JSON object.")
    return data


def _load_cv_or_exit(repo, user: str, cv_id: Optional[int]):
    """Fetch ``cv_id`` (or the user's default CV) or exit with an error."""
    from career_pathfinder.errors import CVNotFoundError

    if cv_id is None:
        cv = repo.get_default(user)
        if cv is None:
            typer.echo(f"[ERROR] User '{user}' has no saved CV. Use `cv-save` first.", err=True)
            raise typer.Exit(code=1)
        return cv
    try:
        return repo.get(cv_id, user)
    except CVNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(
        None,
        "--db-path",
        help="Override DB path from config (e.g. data/db/test.db).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Initialize the SQLite database and apply the schema.

    Safe to run multiple times — all DDL uses IF NOT EXISTS.
    """
    from career_pathfinder.db.connection import get_connection
    from career_pathfinder.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = _db_path(config, db_path)
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and the quiz data it points to.

    Exits with code 1 if the config or the quiz data fails validation.
    """
    config = _load_config_or_exit(config_path)
    bank, catalog = _load_quiz_data_or_exit(config)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:    {config.database.db_path}")
    typer.echo(f"  Questions file:   {config.quiz.questions_file} ({len(bank)} questions)")
    typer.echo(f"  Catalog file:     {config.quiz.catalog_file} ({len(catalog)} paths)")
    typer.echo(f"  Require complete: {config.quiz.require_complete}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("questions")
def list_questions(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print every question in the question bank with its options."""
    from career_pathfinder.reporting.formatters import format_question

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    bank, _ = _load_quiz_data_or_exit(config)

    for position, question in enumerate(bank, start=1):
        typer.echo(format_question(question, position, len(bank)))
        typer.echo("")


@app.command("take-quiz")
def take_quiz(
    user: str = typer.Option(..., "--user", "-u", help="User id to record the attempt under."),
    save: bool = typer.Option(True, "--save/--no-save", help="Persist the attempt to the database."),
    export: bool = typer.Option(False, "--export", help="Also write a recommendations JSON report."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Take the quiz interactively, one question at a time.

    \b
    At each prompt enter an option id (e.g. "b").
    Enter "back" to return to the previous question.
    """
    from career_pathfinder.config import resolve_path
    from career_pathfinder.models.attempt import QuizAttempt
    from career_pathfinder.quiz.session import QuizSession
    from career_pathfinder.recommendations.ranker import recommend
    from career_pathfinder.recommendations.reporter import write_recommendation_json
    from career_pathfinder.reporting.formatters import format_question, format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    if save:
        user = _require_user(user)
    bank, catalog = _load_quiz_data_or_exit(config)

    session = QuizSession(bank)
    typer.echo(f"Career Path Quiz — {len(bank)} questions. Type 'back' to go back.")
    typer.echo("")

    while not session.is_finished:
        question = session.current_question
        typer.echo(format_question(
            question,
            session.index + 1,
            session.total_questions,
            selected=session.sheet.get(question.question_id),
        ))
        choice = typer.prompt("Your answer").strip()
        if choice.lower() == "back":
            session.previous()
            continue
        try:
            session.select_option(choice)
        except InvalidReferenceError:
            typer.echo(
                f"  '{choice}' is not an option. Choose one of: "
                f"{', '.join(question.option_ids)}",
                err=True,
            )
            continue
        session.next()
        typer.echo("")

    answers = session.sheet.to_answers()
    try:
        result = recommend(
            answers, bank, catalog,
            require_complete=config.quiz.require_complete,
            secondary_count=config.quiz.secondary_count,
        )
    except IncompleteAnswersError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_recommendations(result))

    if save:
        attempt = QuizAttempt.from_recommendations(user, answers, result, len(bank))
        attempt_id = _save_attempt(config, attempt, db_path)
        typer.echo("")
        typer.echo(f"[OK] Saved attempt #{attempt_id} for user '{user}'.")

    if export:
        out_dir = resolve_path(config.output.export_dir) / "recommendations"
        path = write_recommendation_json(result, out_dir, user, answers=answers)
        typer.echo(f"[OK] Report written: {path}")


@app.command("recommend")
def recommend_cmd(
    answer: Optional[List[str]] = typer.Option(
        None,
        "--answer",
        "-a",
        help="Answer as QUESTION_ID=OPTION_ID. Repeatable; later answers to the same question win.",
    ),
    require_complete: Optional[bool] = typer.Option(
        None,
        "--require-complete/--allow-partial",
        help="Require every question to be answered. Defaults to config.quiz.require_complete.",
    ),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User id (needed with --save)."),
    save: bool = typer.Option(False, "--save", help="Persist the attempt to the database."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Score a set of answers non-interactively and print the recommendations."""
    from career_pathfinder.models.attempt import QuizAttempt
    from career_pathfinder.quiz.session import AnswerSheet
    from career_pathfinder.recommendations.ranker import recommend
    from career_pathfinder.recommendations.reporter import recommendation_payload
    from career_pathfinder.reporting.formatters import format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    bank, catalog = _load_quiz_data_or_exit(config)

    if save:
        if not user:
            typer.echo("[ERROR] --save requires --user.", err=True)
            raise typer.Exit(code=1)
        user = _require_user(user)

    try:
        sheet = AnswerSheet.from_pairs(_parse_answer_pairs(answer or []))
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    strict = config.quiz.require_complete if require_complete is None else require_complete
    answers = sheet.to_answers()
    try:
        result = recommend(
            answers, bank, catalog,
            require_complete=strict,
            secondary_count=config.quiz.secondary_count,
        )
    except (InvalidReferenceError, IncompleteAnswersError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(recommendation_payload(result, user_id=user, answers=answers), indent=2))
    else:
        typer.echo(format_recommendations(result))

    if save:
        attempt = QuizAttempt.from_recommendations(user, answers, result, len(bank))
        attempt_id = _save_attempt(config, attempt, db_path)
        if not as_json:
            typer.echo("")
            typer.echo(f"[OK] Saved attempt #{attempt_id} for user '{user}'.")


@app.command("history")
def history(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Show only the N most recent attempts."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List a user's saved quiz attempts, newest first."""
    from career_pathfinder.reporting.formatters import format_history_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    attempts = _fetch_history(config, user, limit=limit, db_path=db_path)
    typer.echo(format_history_table(attempts, user))


@app.command("stats")
def stats(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show completion rate, streak and career-path distribution for a user."""
    from career_pathfinder.reporting.formatters import format_stats_summary
    from career_pathfinder.reporting.history import (
        career_path_distribution,
        summarize_history,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    attempts = _fetch_history(config, user, db_path=db_path)
    if not attempts:
        typer.echo(f"No quiz attempts recorded for user '{user}'. Take the quiz first.")
        return
    typer.echo(format_stats_summary(summarize_history(attempts), career_path_distribution(attempts)))


@app.command("delete-attempt")
def delete_attempt(
    attempt_id: int = typer.Argument(..., help="Attempt id (see `history`)."),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Only delete if owned by this user."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete a saved quiz attempt. This cannot be undone."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if not yes:
        typer.confirm(f"Delete attempt #{attempt_id}? This cannot be undone.", abort=True)

    with _attempt_store(config, db_path) as repo:
        deleted = repo.delete(attempt_id, user_id=user)

    if not deleted:
        typer.echo(f"[ERROR] Attempt #{attempt_id} not found.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] Deleted attempt #{attempt_id}.")


@app.command("export-history")
def export_history(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", help="Directory for the CSV. Defaults to <export_dir>/history."
    ),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Export a user's quiz history to a flat CSV file."""
    from career_pathfinder.config import resolve_path
    from career_pathfinder.reporting.export import write_history_csv

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    attempts = _fetch_history(config, user, db_path=db_path)
    out_dir = Path(output_dir) if output_dir else resolve_path(config.output.export_dir) / "history"
    path = write_history_csv(attempts, out_dir, user)
    typer.echo(f"[OK] Exported {len(attempts)} attempt(s) to {path}")


@app.command("profile-show")
def profile_show(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show a user's profile and how many quizzes they have saved."""
    from career_pathfinder.db.repositories.profile_repo import ProfileRepository
    from career_pathfinder.reporting.formatters import format_profile

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    with _open_db(config, db_path) as conn:
        profile = ProfileRepository(conn).get_or_blank(user)

    typer.echo(format_profile(profile))
    if profile.is_blank:
        typer.echo("")
        typer.echo("Profile not filled in yet. Use `profile-update --full-name ...`.")


@app.command("profile-update")
def profile_update(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    full_name: Optional[str] = typer.Option(None, "--full-name", help="Display name (required once)."),
    email: Optional[str] = typer.Option(None, "--email"),
    phone: Optional[str] = typer.Option(None, "--phone"),
    location: Optional[str] = typer.Option(None, "--location", help="e.g. 'Lagos, Nigeria'."),
    bio: Optional[str] = typer.Option(None, "--bio"),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Create or edit a user's profile. Omitted options are left unchanged.

    Pass an empty string (e.g. --bio "") to clear a field.
    """
    from career_pathfinder.db.repositories.profile_repo import ProfileRepository
    from career_pathfinder.reporting.formatters import format_profile

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    changes = {
        "full_name": full_name,
        "email": email,
        "phone_number": phone,
        "location": location,
        "bio": bio,
    }
    with _open_db(config, db_path) as conn:
        repo = ProfileRepository(conn)
        try:
            profile = repo.get_or_blank(user).updated(changes)
        except ValueError as exc:
            typer.echo(f"[ERROR] Profile not saved: {exc}", err=True)
            raise typer.Exit(code=1)
        repo.upsert(profile)

    typer.echo(format_profile(profile))
    typer.echo("")
    typer.echo(f"[OK] Profile updated for user '{user}'.")


@app.command("cv-save")
def cv_save(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    cv_file: Path = typer.Option(..., "--file", "-f", help="JSON file with the CV fields and sections."),
    cv_id: Optional[int] = typer.Option(None, "--id", help="Update this CV instead of creating one."),
    make_default: bool = typer.Option(False, "--default", help="Make this the user's default CV."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Save a CV from a JSON file (the format `cv-export --format json` writes).

    \b
    A new CV takes any contact fields missing from the file from the user's
    profile. A user's first CV becomes their default.
    """
    from pydantic import ValidationError

    from career_pathfinder.db.repositories.cv_repo import CVRepository
    from career_pathfinder.db.repositories.profile_repo import ProfileRepository
    from career_pathfinder.errors import CVNotFoundError
    from career_pathfinder.models.cv import CurriculumVitae

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    try:
        data = _read_cv_file(cv_file)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    for key in ("cv_id", "user_id", "is_default", "created_at", "updated_at"):
        data.pop(key, None)

    with _open_db(config, db_path) as conn:
        repo = CVRepository(conn)
        try:
            if cv_id is None:
                profile = ProfileRepository(conn).get_or_blank(user)
                base = CurriculumVitae.from_profile(profile).model_dump(
                    include={"full_name", "email", "phone", "location"}
                )
                base = {k: v for k, v in base.items() if v}
                cv = CurriculumVitae(**{**base, **data}, user_id=user, is_default=make_default)
            else:
                cv = CurriculumVitae(**data, user_id=user, cv_id=cv_id, is_default=make_default)
            saved = repo.save(cv)
        except ValidationError as exc:
            typer.echo(f"[ERROR] CV invalid: {exc}", err=True)
            raise typer.Exit(code=1)
        except CVNotFoundError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)

    default = " (default)" if saved.is_default else ""
    typer.echo(f"[OK] Saved CV #{saved.cv_id} '{saved.title}'{default} for user '{user}'.")


@app.command("cv-list")
def cv_list(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """List a user's saved CVs, most recently updated first."""
    from career_pathfinder.db.repositories.cv_repo import CVRepository
    from career_pathfinder.reporting.formatters import format_cv_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    with _open_db(config, db_path) as conn:
        cvs = CVRepository(conn).list_for_user(user)
    typer.echo(format_cv_list(cvs, user))


@app.command("cv-show")
def cv_show(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    cv_id: Optional[int] = typer.Option(None, "--id", help="CV id (default: the user's default CV)."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print a CV as plain text."""
    from career_pathfinder.db.repositories.cv_repo import CVRepository
    from career_pathfinder.reporting.formatters import format_cv

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    with _open_db(config, db_path) as conn:
        cv = _load_cv_or_exit(CVRepository(conn), user, cv_id)
    typer.echo(format_cv(cv))


@app.command("cv-export")
def cv_export(
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    cv_id: Optional[int] = typer.Option(None, "--id", help="CV id (default: the user's default CV)."),
    fmt: str = typer.Option("pdf", "--format", help="pdf or json."),
    output_dir: Optional[str] = typer.Option(
        None, "--output-dir", help="Directory for the file. Defaults to <export_dir>/cvs."
    ),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Export a CV to PDF or JSON."""
    from career_pathfinder.config import resolve_path
    from career_pathfinder.db.repositories.cv_repo import CVRepository
    from career_pathfinder.reporting.cv_document import write_cv_json, write_cv_pdf

    writers = {"pdf": write_cv_pdf, "json": write_cv_json}
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    writer = writers.get(fmt.lower())
    if writer is None:
        typer.echo(f"[ERROR] --format must be one of {sorted(writers)}, got '{fmt}'.", err=True)
        raise typer.Exit(code=1)

    with _open_db(config, db_path) as conn:
        cv = _load_cv_or_exit(CVRepository(conn), user, cv_id)

    out_dir = Path(output_dir) if output_dir else resolve_path(config.output.export_dir) / "cvs"
    try:
        path = writer(cv, out_dir)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] CV #{cv.cv_id} exported to {path}")


@app.command("cv-set-default")
def cv_set_default(
    cv_id: int = typer.Argument(..., help="CV id (see `cv-list`)."),
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Make a CV the user's default."""
    from career_pathfinder.db.repositories.cv_repo import CVRepository
    from career_pathfinder.errors import CVNotFoundError

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    with _open_db(config, db_path) as conn:
        try:
            CVRepository(conn).set_default(cv_id, user)
        except CVNotFoundError as exc:
            typer.echo(f"[ERROR] {exc}", err=True)
            raise typer.Exit(code=1)
    typer.echo(f"[OK] CV #{cv_id} is now the default for user '{user}'.")


@app.command("cv-delete")
def cv_delete(
    cv_id: int = typer.Argument(..., help="CV id (see `cv-list`)."),
    user: str = typer.Option(..., "--user", "-u", help="User id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help="Override DB path from config."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Delete a saved CV. This cannot be undone."""
    from career_pathfinder.db.repositories.cv_repo import CVRepository

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    user = _require_user(user)

    if not yes:
        typer.confirm(f"Delete CV #{cv_id}? This cannot be undone.", abort=True)

    with _open_db(config, db_path) as conn:
        deleted = CVRepository(conn).delete(cv_id, user)

    if not deleted:
        typer.echo(f"[ERROR] CV #{cv_id} not found for user '{user}'.", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] Deleted CV #{cv_id}.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
