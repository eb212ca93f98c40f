"""
Repository for user profiles.

``get`` joins the user's saved quiz attempts so ``quiz_completion_count`` is
always current; it is never written to ``profiles``.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Optional

from career_pathfinder.db.repositories.base import BaseRepository
from career_pathfinder.models.profile import UserProfile

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    """Read/write access to the ``profiles`` table."""

    table = "profiles"

    def get(self, user_id: str) -> Optional[UserProfile]:
        """Fetch a profile, or ``None`` if the user never saved one."""
        row = self.fetchone(
            """
            SELECT p.*,
                   (SELECT COUNT(*) FROM quiz_attempts a WHERE a.user_id = p.user_id)
                       AS quiz_completion_count
            FROM profiles p
            WHERE p.user_id = ?;
            """,
            (user_id,),
        )
        return _row_to_profile(row) if row else None

    def get_or_blank(self, user_id: str) -> UserProfile:
        """Like ``get``, but a missing row yields an empty profile.

        The blank profile still carries the user's quiz completion count.
        """
        profile = self.get(user_id)
        if profile is not None:
            return profile
        completed = self.count_attempts(user_id)
        return UserProfile(user_id=user_id, quiz_completion_count=completed)

    def count_attempts(self, user_id: str) -> int:
        row = self.fetchone(
            "SELECT COUNT(*) AS n FROM quiz_attempts WHERE user_id = ?;", (user_id,)
        )
        return int(row["n"])

    def upsert(self, profile: UserProfile) -> None:
        """Insert or replace the profile row for ``profile.user_id``.

        ``created_at`` of an existing row is kept.
        """
        now = datetime.now(tz=timezone.utc)
        self.execute(
            """
            INSERT INTO profiles (
                user_id, full_name, email, phone_number, location, bio,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (user_id) DO UPDATE SET
                full_name    = excluded.full_name,
                email        = excluded.email,
                phone_number = excluded.phone_number,
                location     = excluded.location,
                bio          = excluded.bio,
                updated_at   = excluded.updated_at;
            """,
            (
                profile.user_id,
                profile.full_name,
                profile.email,
                profile.phone_number,
                profile.location,
                profile.bio,
                _iso(profile.created_at or now),
                _iso(profile.updated_at or now),
            ),
        )
        logger.info("Saved profile for user=%s", profile.user_id)

    def delete(self, user_id: str) -> bool:
        return self.delete_where("user_id = ?", (user_id,)) > 0


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _row_to_profile(row: sqlite3.Row) -> UserProfile:
    return UserProfile(
        user_id=row["user_id"],
        full_name=row["full_name"],
        email=row["email"],
        phone_number=row["phone_number"],
        location=row["location"],
        bio=row["bio"],
        quiz_completion_count=row["quiz_completion_count"],
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )
