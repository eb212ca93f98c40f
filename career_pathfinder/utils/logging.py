"""
Logging setup for the career pathfinder.

``configure_logging(config.logging)`` is called once per CLI command, right
after the config is loaded. Library modules only ever do
``logger = logging.getLogger(__name__)``; the scoring engine logs at DEBUG,
so a normal run prints nothing but the command's own output.

Handlers write to stderr (and optionally a file) so that ``--json`` output on
stdout stays machine-readable. With ``json_format = true`` every record is a
single JSON object::

    {"ts": "2026-10-19T15:00:00Z", "level": "INFO", "logger": "...", "msg": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import TYPE_CHECKING

from career_pathfinder.config import resolve_path

if TYPE_CHECKING:
    from career_pathfinder.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Third-party loggers that are too chatty at INFO.
_QUIET_LOGGERS = ("streamlit", "watchdog")

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, msg, plus ``extra=`` keys."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, TIME_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(
            (k, v)
            for k, v in vars(record).items()
            if k not in _RECORD_ATTRS and not k.startswith("_")
        )
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_formatter(json_format: bool) -> logging.Formatter:
    """Return the JSON-lines formatter or the plain text one (UTC timestamps)."""
    if json_format:
        return _JsonFormatter()
    formatter = logging.Formatter(TEXT_FORMAT, datefmt=TIME_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def configure_logging(config: "LoggingConfig") -> None:
    """(Re)configure the root logger from ``config``.

    Replaces any handlers installed by an earlier call, so commands invoked
    repeatedly in one process (tests, the dashboard) do not stack handlers.
    A relative ``log_file`` is resolved against the project root, not the
    working directory.
    """
    level = logging.getLevelName(config.level)
    formatter = build_formatter(config.json_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = resolve_path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
