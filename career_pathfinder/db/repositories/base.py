"""
Base repository providing shared SQLite execution helpers.

Repositories inherit from ``BaseRepository``, set ``table`` and receive a
``sqlite3.Connection`` at construction time. The connection is opened and
committed by the caller (typically via ``get_connection()``).

  - No ORM — all SQL is explicit and lives in repository methods.
  - Repositories speak Pydantic models (``QuizAttempt``), not raw dicts.
  - ``row_factory = sqlite3.Row`` (set by ``get_connection()``) gives
    dict-like row access throughout.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, ClassVar, Optional

logger = logging.getLogger(__name__)

Params = tuple[Any, ...] | dict[str, Any]


class BaseRepository:
    """Shared SQL execution helpers for all repository classes.

    Attributes:
        table: Name of the table the subclass owns.
        conn: The active ``sqlite3.Connection``.
    """

    table: ClassVar[str] = ""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def execute(self, sql: str, params: Params = ()) -> sqlite3.Cursor:
        """Execute a single SQL statement with ``?`` or ``:name`` placeholders."""
        logger.debug("SQL: %s | params: %s", sql.strip(), params)
        return self.conn.execute(sql, params)

    def fetchone(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        return self.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Params = ()) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    def insert_row(self, values: dict[str, Any]) -> int:
        """INSERT one row into ``table`` and return its rowid.

        Column names come from ``values`` keys; they are never user input.
        """
        cols = ", ".join(values)
        marks = ", ".join("?" for _ in values)
        cur = self.execute(
            f"INSERT INTO {self.table} ({cols}) VALUES ({marks});",
            tuple(values.values()),
        )
        return int(cur.lastrowid)

    def count_where(self, where: str = "1 = 1", params: Params = ()) -> int:
        """``SELECT COUNT(*)`` from ``table`` under a WHERE clause."""
        row = self.fetchone(
            f"SELECT COUNT(*) AS n FROM {self.table} WHERE {where};", params
        )
        return int(row["n"]) if row else 0

    def delete_where(self, where: str, params: Params) -> int:
        """DELETE rows from ``table`` under a WHERE clause; returns rows removed."""
        return self.execute(f"DELETE FROM {self.table} WHERE {where};", params).rowcount
