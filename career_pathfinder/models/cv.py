"""
CV (curriculum vitae) models.

A ``CurriculumVitae`` is a named document owned by a user: contact header,
summary, and ordered lists of education, experience, skills, projects,
certifications, languages and free-form additional sections. Section
entries keep the order the user gave them; dates are free text
(``"2021-09"``, ``"Present"``) since they are only ever displayed.

Each user has at most one default CV (``is_default``); the repository
enforces that. ``CurriculumVitae.from_profile`` prefills the contact header
from a ``UserProfile`` for a user starting their first CV.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from career_pathfinder.models.profile import UserProfile

DEFAULT_TITLE = "My CV"
DEFAULT_TEMPLATE = "modern"
CV_TEMPLATES: tuple[str, ...] = ("modern", "classic", "minimal")


class _Entry(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


class Education(_Entry):
    degree: str
    institution: str
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    gpa: str = ""
    description: str = ""


class Experience(_Entry):
    title: str
    company: str
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    @model_validator(mode="after")
    def validate_current(self) -> "Experience":
        if self.current and self.end_date:
            raise ValueError(
                f"Experience '{self.title}' is current but has end_date '{self.end_date}'."
            )
        return self

    @property
    def date_range(self) -> str:
        end = "Present" if self.current else self.end_date
        return " - ".join(part for part in (self.start_date, end) if part)


class Skill(_Entry):
    name: str
    level: str = "Intermediate"
    category: str = ""


class Project(_Entry):
    name: str
    description: str = ""
    technologies: str = ""
    url: str = ""
    start_date: str = ""
    end_date: str = ""


class Certification(_Entry):
    name: str
    issuer: str = ""
    date: str = ""
    expiry_date: str = ""
    credential_id: str = ""


class Language(_Entry):
    name: str
    proficiency: str = "Intermediate"


class AdditionalSection(_Entry):
    title: str
    content: str = ""


class CurriculumVitae(BaseModel):
    """One saved CV.

    Attributes:
        cv_id: Auto-assigned DB PK; ``None`` before the first save.
        user_id: Owner.
        title: Name the user gave this CV, e.g. ``"Backend roles"``.
        template: Presentation style; one of ``CV_TEMPLATES``.
        is_default: The CV opened first for this user.
        created_at / updated_at: Set by the repository on save.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    cv_id: Optional[int] = None
    user_id: str
    title: str = DEFAULT_TITLE
    template: str = DEFAULT_TEMPLATE
    is_default: bool = False

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    portfolio_url: str = ""
    summary: str = ""

    education: list[Education] = []
    experience: list[Experience] = []
    skills: list[Skill] = []
    projects: list[Project] = []
    certifications: list[Certification] = []
    languages: list[Language] = []
    additional_sections: list[AdditionalSection] = []

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("user_id", "title")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty.")
        return v

    @field_validator("template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        v = v.lower()
        if v not in CV_TEMPLATES:
            raise ValueError(f"template must be one of {list(CV_TEMPLATES)}, got '{v}'.")
        return v

    @field_validator("linkedin_url", "github_url", "portfolio_url")
    @classmethod
    def validate_link(cls, v: str) -> str:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"Link must be http(s), got '{v}'.")
        return v

    @property
    def is_exportable(self) -> bool:
        """A CV needs at least a name before it can be exported."""
        return bool(self.full_name)

    @classmethod
    def from_profile(cls, profile: UserProfile, title: str = DEFAULT_TITLE) -> "CurriculumVitae":
        """Start a CV with the contact header copied from ``profile``."""
        return cls(
            user_id=profile.user_id,
            title=title,
            full_name=profile.full_name or "",
            email=profile.email or "",
            phone=profile.phone_number or "",
            location=profile.location or "",
        )
