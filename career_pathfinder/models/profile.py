"""
User profile: the contact details a user keeps alongside their quiz history.

Free-text fields are stripped and blank strings become ``None``.
``quiz_completion_count`` is not stored; the repository derives it from the
user's rows in ``quiz_attempts`` when the profile is read.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Fields a user may edit; everything else is managed by the repository.
EDITABLE_FIELDS: tuple[str, ...] = ("full_name", "email", "phone_number", "location", "bio")


class UserProfile(BaseModel):
    """Profile record keyed by ``user_id``.

    Attributes:
        user_id: Owner; same id the quiz attempts are stored under.
        full_name: Display name. Required once the profile has been edited.
        email: Contact address.
        phone_number: Contact phone number.
        location: Free text, e.g. ``"Lagos, Nigeria"``.
        bio: Short free-text biography.
        quiz_completion_count: Saved quiz attempts for ``user_id``.
        created_at: UTC time the profile row was first written.
        updated_at: UTC time of the last edit.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    quiz_completion_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("user_id must not be empty.")
        return v.strip()

    @field_validator(*EDITABLE_FIELDS)
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and "@" not in v:
            raise ValueError(f"email must contain '@', got '{v}'.")
        return v

    @field_validator("quiz_completion_count")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"quiz_completion_count must be >= 0, got {v}.")
        return v

    @property
    def is_blank(self) -> bool:
        """True if no editable field has been filled in."""
        return all(getattr(self, name) is None for name in EDITABLE_FIELDS)

    def updated(self, changes: dict[str, Any], now: Optional[datetime] = None) -> "UserProfile":
        """Return a copy with ``changes`` applied and ``updated_at`` stamped.

        Keys mapped to ``None`` are left unchanged; pass ``""`` to clear a
        field.

        Raises:
            ValueError: On an unknown field, or if the result has no
                ``full_name``.
        """
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit profile field(s): {sorted(unknown)}")
        now = now or datetime.now(tz=timezone.utc)
        merged = {
            **self.model_dump(),
            **{k: v for k, v in changes.items() if v is not None},
            "created_at": self.created_at or now,
            "updated_at": now,
        }
        profile = UserProfile(**merged)
        if profile.full_name is None:
            raise ValueError("Full name is required.")
        return profile
