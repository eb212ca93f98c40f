"""
SQLite connection management for the quiz attempt store.

``get_connection()`` is a context manager that:
  - Enables foreign key enforcement (OFF by default in SQLite).
  - Enables WAL journal mode so the dashboard can read while the CLI writes.
  - Sets a busy timeout to handle lock contention gracefully.
  - Uses ``sqlite3.Row`` factory so rows behave like dicts.
  - Commits on clean exit, rolls back on exception.

``read_only=True`` opens an existing file through a ``mode=ro`` URI and
never creates directories or changes the journal mode; the dashboard uses
it so browsing history can never write to the store.

Usage::

    from career_pathfinder.db.connection import get_connection

    with get_connection("data/db/career_pathfinder.db") as conn:
        QuizAttemptRepository(conn).insert(attempt)
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def _open(db_path: str | Path, busy_timeout_ms: int, read_only: bool) -> sqlite3.Connection:
    timeout = busy_timeout_ms / 1000
    if read_only:
        uri = f"{Path(db_path).resolve().as_uri()}?mode=ro"
        return sqlite3.connect(uri, uri=True, timeout=timeout)
    if str(db_path) != MEMORY_DB:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_path, timeout=timeout)


@contextmanager
def get_connection(
    db_path: str | Path,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
    read_only: bool = False,
) -> Generator[sqlite3.Connection, None, None]:
    """Context manager yielding a configured SQLite connection.

    Args:
        db_path: Path to the SQLite database file, or ``":memory:"``.
        wal_mode: If ``True``, enable WAL journal mode (ignored when read-only).
        busy_timeout_ms: Milliseconds to wait when the database is locked
            before raising ``OperationalError``.
        read_only: Open an existing database without write access.

    Yields:
        An open, configured ``sqlite3.Connection``.

    Raises:
        sqlite3.OperationalError: If the database cannot be opened or is locked.
    """
    conn = _open(db_path, busy_timeout_ms, read_only)
    conn.row_factory = sqlite3.Row

    try:
        # These pragmas must be set before any DML/DDL
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms};")

        if wal_mode and not read_only:
            conn.execute("PRAGMA journal_mode = WAL;")

        yield conn
        if not read_only:
            conn.commit()

    except Exception:
        conn.rollback()
        raise

    finally:
        conn.close()
