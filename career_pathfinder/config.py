"""
Application configuration for the career pathfinder.

Layers, lowest precedence first:
  1. ``config/default.toml``  — committed defaults (or the ``--config`` file)
  2. ``local.toml``           — optional, next to the file above (gitignored)
  3. ``.env``                 — loaded into the environment, never overriding it
  4. ``CAREER_PATHFINDER_*``  — environment variables, see ``_ENV_OVERRIDES``

``load_config()`` returns a frozen ``AppConfig``; commands receive that
object instead of reading TOML keys or environment variables themselves.
Relative paths inside the config are resolved against the project root with
``resolve_path()``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

ENV_PREFIX = "CAREER_PATHFINDER_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = ("1", "true", "yes", "on")


class DatabaseConfig(BaseModel):
    """Where quiz attempts are stored."""

    model_config = ConfigDict(frozen=True)

    db_path: str = "data/db/career_pathfinder.db"
    wal_mode: bool = True
    busy_timeout_ms: int = 5000


class QuizConfig(BaseModel):
    """Question bank / catalog locations and recommendation policy.

    ``require_complete`` is the policy of the interactive flows; the engine
    itself defaults to accepting partial answers.
    """

    model_config = ConfigDict(frozen=True)

    questions_file: str = "config/quiz/questions.json"
    catalog_file: str = "config/quiz/career_paths.json"
    require_complete: bool = True
    secondary_count: int = 2

    @field_validator("secondary_count")
    @classmethod
    def validate_secondary_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"secondary_count must be >= 1, got {v}.")
        return v


class OutputConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    export_dir: str = "data/outputs"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: Optional[str] = "data/logs/career_pathfinder.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(_LOG_LEVELS)}, got '{v}'.")
        return level


class AppConfig(BaseModel):
    """Complete, validated application configuration."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseConfig = DatabaseConfig()
    quiz: QuizConfig = QuizConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Paths ─────────────────────────────────────────────────────────────────────


def _find_project_root() -> Path:
    """Nearest ancestor of this package holding ``pyproject.toml``.

    Falls back to the package's parent directory.
    """
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents[:4]):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def resolve_path(path: str | Path) -> Path:
    """Resolve a config-relative path against the project root.

    Absolute paths are returned unchanged.
    """
    p = Path(path)
    return p if p.is_absolute() else _find_project_root() / p


# ── Loading ───────────────────────────────────────────────────────────────────

# Env var suffix → (section or None for top level, key, is_bool)
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, bool]] = {
    "DB_PATH":          ("database", "db_path", False),
    "QUESTIONS_FILE":   ("quiz", "questions_file", False),
    "CATALOG_FILE":     ("quiz", "catalog_file", False),
    "REQUIRE_COMPLETE": ("quiz", "require_complete", True),
    "EXPORT_DIR":       ("output", "export_dir", False),
    "LOG_LEVEL":        ("logging", "level", False),
    "DEBUG":            (None, "debug", True),
}


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load, merge and validate the configuration layers.

    Args:
        config_path: TOML file to use instead of ``config/default.toml``.

    Raises:
        FileNotFoundError: If the TOML file does not exist.
        pydantic.ValidationError: If a merged value fails validation.
    """
    root = _find_project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path else root / "config" / "default.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}. "
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(path)
    local = path.parent / "local.toml"
    if local.is_file():
        raw = _deep_merge(raw, _read_toml(local))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into sub-tables."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy every set ``CAREER_PATHFINDER_*`` variable into ``raw``."""
    for suffix, (section, key, is_bool) in _ENV_OVERRIDES.items():
        value = os.environ.get(ENV_PREFIX + suffix)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = value.strip().lower() in _TRUTHY if is_bool else value
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map the merged TOML dict onto ``AppConfig``.

    ``[project].debug`` is accepted as an alias for top-level ``debug``.
    """
    project = raw.get("project", {})
    return AppConfig(
        database=DatabaseConfig(**raw.get("database", {})),
        quiz=QuizConfig(**raw.get("quiz", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
