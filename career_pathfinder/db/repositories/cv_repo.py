"""
Repository for saved CVs.

Identity and bookkeeping columns (owner, title, template, default flag,
timestamps) are real columns; the header fields and section lists are
stored together in ``body_json``.

Default handling: a user's first CV becomes their default, and marking a
CV as default clears the flag on their other CVs in the same transaction.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from career_pathfinder.db.repositories.base import BaseRepository
from career_pathfinder.errors import CVNotFoundError
from career_pathfinder.models.cv import CurriculumVitae

logger = logging.getLogger(__name__)

# Columns of their own; everything else in the model goes to body_json.
_ROW_FIELDS = {"cv_id", "user_id", "title", "template", "is_default", "created_at", "updated_at"}


class CVRepository(BaseRepository):
    """Read/write access to the ``cvs`` table."""

    table = "cvs"

    def save(self, cv: CurriculumVitae) -> CurriculumVitae:
        """Insert a new CV (``cv_id is None``) or update an existing one.

        Returns:
            The stored CV with ``cv_id``, ``is_default`` and timestamps set.

        Raises:
            CVNotFoundError: If ``cv.cv_id`` is set but no such CV exists
                for ``cv.user_id``.
        """
        now = _iso(datetime.now(tz=timezone.utc))
        body = json.dumps(cv.model_dump(mode="json", exclude=_ROW_FIELDS))

        if cv.cv_id is None:
            make_default = cv.is_default or self.count_for_user(cv.user_id) == 0
            if make_default:
                self._clear_default(cv.user_id)
            cv_id = self.insert_row({
                "user_id":    cv.user_id,
                "title":      cv.title,
                "template":   cv.template,
                "is_default": int(make_default),
                "body_json":  body,
                "created_at": now,
                "updated_at": now,
            })
            logger.info("Saved new CV %d for user=%s", cv_id, cv.user_id)
        else:
            cv_id = cv.cv_id
            self._require(cv_id, cv.user_id)
            if cv.is_default:
                self._clear_default(cv.user_id)
            self.execute(
                """
                UPDATE cvs
                SET title = ?, template = ?, body_json = ?, updated_at = ?,
                    is_default = MAX(is_default, ?)
                WHERE cv_id = ? AND user_id = ?;
                """,
                (cv.title, cv.template, body, now, int(cv.is_default), cv_id, cv.user_id),
            )
            logger.info("Updated CV %d for user=%s", cv_id, cv.user_id)

        return self.get(cv_id, cv.user_id)

    def get(self, cv_id: int, user_id: str) -> CurriculumVitae:
        """Fetch one of ``user_id``'s CVs.

        Raises:
            CVNotFoundError: If the CV does not exist or is not theirs.
        """
        return _row_to_cv(self._require(cv_id, user_id))

    def get_default(self, user_id: str) -> Optional[CurriculumVitae]:
        row = self.fetchone(
            "SELECT * FROM cvs WHERE user_id = ? AND is_default = 1;", (user_id,)
        )
        return _row_to_cv(row) if row else None

    def list_for_user(self, user_id: str) -> list[CurriculumVitae]:
        """A user's CVs, most recently updated first."""
        rows = self.fetchall(
            "SELECT * FROM cvs WHERE user_id = ? ORDER BY updated_at DESC, cv_id DESC;",
            (user_id,),
        )
        return [_row_to_cv(r) for r in rows]

    def count_for_user(self, user_id: str) -> int:
        return self.count_where("user_id = ?", (user_id,))

    def set_default(self, cv_id: int, user_id: str) -> None:
        """Make ``cv_id`` the user's only default CV."""
        self._require(cv_id, user_id)
        self._clear_default(user_id)
        self.execute(
            "UPDATE cvs SET is_default = 1 WHERE cv_id = ? AND user_id = ?;",
            (cv_id, user_id),
        )
        logger.info("CV %d is now the default for user=%s", cv_id, user_id)

    def delete(self, cv_id: int, user_id: str) -> bool:
        """Delete one of the user's CVs. Returns True if a row was removed.

        Deleting the default CV promotes the most recently updated remaining
        CV, so a user with CVs always has a default.
        """
        row = self.fetchone(
            "SELECT is_default FROM cvs WHERE cv_id = ? AND user_id = ?;", (cv_id, user_id)
        )
        if row is None:
            return False
        self.delete_where("cv_id = ? AND user_id = ?", (cv_id, user_id))
        if row["is_default"]:
            self.execute(
                """
                UPDATE cvs SET is_default = 1
                WHERE cv_id = (
                    SELECT cv_id FROM cvs WHERE user_id = ?
                    ORDER BY updated_at DESC, cv_id DESC LIMIT 1
                );
                """,
                (user_id,),
            )
        logger.info("Deleted CV %d for user=%s", cv_id, user_id)
        return True

    def _require(self, cv_id: int, user_id: str) -> sqlite3.Row:
        row = self.fetchone(
            "SELECT * FROM cvs WHERE cv_id = ? AND user_id = ?;", (cv_id, user_id)
        )
        if row is None:
            raise CVNotFoundError(cv_id, user_id)
        return row

    def _clear_default(self, user_id: str) -> None:
        self.execute(
            "UPDATE cvs SET is_default = 0 WHERE user_id = ? AND is_default = 1;", (user_id,)
        )


def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _row_to_cv(row: sqlite3.Row) -> CurriculumVitae:
    return CurriculumVitae(
        cv_id=row["cv_id"],
        user_id=row["user_id"],
        title=row["title"],
        template=row["template"],
        is_default=bool(row["is_default"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
        **json.loads(row["body_json"]),
    )
