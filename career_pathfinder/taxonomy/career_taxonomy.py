"""
Career-path taxonomy: the closed set of categories a quiz attempt is scored on.

``CareerCategory`` declaration order is part of the contract. Ranking ties are
broken by the position a category holds here, so re-ordering members changes
which path is recommended when two categories score the same:

  frontend → backend → data → devops → security → design

``CATEGORY_ORDER`` and ``category_position()`` expose that order so callers
never have to rely on dict iteration order.

Run ``tests/test_taxonomy/test_career_taxonomy.py`` to verify this contract.

This module has NO imports from any other ``career_pathfinder`` package.
"""

from enum import StrEnum


class CareerCategory(StrEnum):
    """Career path a quiz answer can contribute weight to."""

    FRONTEND = "frontend"
    """User interfaces and interactive web applications."""

    BACKEND = "backend"
    """Server-side applications, APIs and services."""

    DATA = "data"
    """Data science, analytics and machine learning."""

    DEVOPS = "devops"
    """Infrastructure, delivery pipelines and cloud operations."""

    SECURITY = "security"
    """Protecting systems, networks and data."""

    DESIGN = "design"
    """UI/UX design and user research."""


class RoadmapTier(StrEnum):
    """Stage of a career-path learning roadmap."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# Fixed declaration order; index = tie-break rank.
CATEGORY_ORDER: tuple[CareerCategory, ...] = tuple(CareerCategory)

_POSITION: dict[CareerCategory, int] = {cat: i for i, cat in enumerate(CATEGORY_ORDER)}


def category_position(category: CareerCategory) -> int:
    """Return the 0-based declaration position of ``category``."""
    return _POSITION[category]


def parse_category(value: str) -> CareerCategory:
    """Convert a raw string (case-insensitive) into a ``CareerCategory``.

    Raises:
        ValueError: If ``value`` names no known category.
    """
    try:
        return CareerCategory(value.strip().lower())
    except ValueError:
        raise ValueError(
            f"Unknown career category '{value}'. "
            f"Valid values: {[c.value for c in CATEGORY_ORDER]}"
        ) from None
