"""
Career-path catalog and recommendation models.

``CareerPath`` is the static descriptive record for one ``CareerCategory``:
title, description, skill list, a three-tier roadmap and learning resources.
The catalog is loaded once from ``config/quiz/career_paths.json``.

``Recommendation`` pairs a category with its raw summed score and its
catalog record. ``RecommendationSet`` is the engine's output: one primary
recommendation, up to two secondary ones, and the complete ``ScoreVector``
they were ranked from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from career_pathfinder.models.quiz import ScoreVector
from career_pathfinder.taxonomy.career_taxonomy import CareerCategory, RoadmapTier


class LearningResource(BaseModel):
    """External link recommended for a career path."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    resource_type: str

    @field_validator("url")
    @classmethod
    def validate_url_scheme(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Resource url must be http(s), got '{v}'.")
        return v


class Roadmap(BaseModel):
    """Three-tier learning roadmap."""

    model_config = ConfigDict(frozen=True)

    beginner: list[str]
    intermediate: list[str]
    advanced: list[str]

    def steps_for(self, tier: RoadmapTier) -> list[str]:
        return getattr(self, tier.value)


class CareerPath(BaseModel):
    """Static descriptive record for a career category.

    Attributes:
        category: The ``CareerCategory`` this record describes.
        title: Display title, e.g. ``"Backend Development"``.
        description: One-paragraph summary.
        skills: Key skills, in display order.
        roadmap: Beginner / intermediate / advanced steps.
        resources: Learning resource links.
    """

    model_config = ConfigDict(frozen=True)

    category: CareerCategory
    title: str
    description: str
    skills: list[str] = []
    roadmap: Roadmap
    resources: list[LearningResource] = []

    @field_validator("title")
    @classmethod
    def validate_title_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title must not be empty.")
        return v.strip()


class Recommendation(BaseModel):
    """A ranked career category with its score and catalog record."""

    model_config = ConfigDict(frozen=True)

    rank: int
    category: CareerCategory
    score: int
    career_path: CareerPath


class RecommendationSet(BaseModel):
    """Engine output: primary + secondary recommendations and raw scores."""

    model_config = ConfigDict(frozen=True)

    primary: Recommendation
    secondary: tuple[Recommendation, ...] = ()
    scores: ScoreVector

    @property
    def all(self) -> list[Recommendation]:
        """Primary followed by secondaries, in rank order."""
        return [self.primary, *self.secondary]
