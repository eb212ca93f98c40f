"""
Career-path catalog loader: JSON → ``CareerCatalog``.

The catalog is the integrity partner of ``CareerCategory``:
  - Every ``CareerCategory`` must have exactly one record.
  - No key outside ``CareerCategory`` is allowed.
  - A record's ``category`` field (if present) must match its key.

Any violation is a ``ConfigurationError`` raised at load time, never per call.

File format (``config/quiz/career_paths.json``)::

    {
      "frontend": {
        "title": "Frontend Development",
        "description": "...",
        "skills": ["HTML/CSS", ...],
        "roadmap": {"beginner": [...], "intermediate": [...], "advanced": [...]},
        "resources": [{"name": "...", "url": "https://...", "type": "course"}]
      },
      ...
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from career_pathfinder.errors import ConfigurationError
from career_pathfinder.models.career import CareerPath, LearningResource, Roadmap
from career_pathfinder.taxonomy.career_taxonomy import CATEGORY_ORDER, CareerCategory

log = logging.getLogger(__name__)


class CareerCatalog(Mapping[CareerCategory, CareerPath]):
    """Read-only mapping ``CareerCategory → CareerPath`` covering every category.

    Raises:
        ConfigurationError: If any category is missing or a record is keyed
            under the wrong category.
    """

    def __init__(self, paths: Mapping[CareerCategory, CareerPath]) -> None:
        missing = [c.value for c in CATEGORY_ORDER if c not in paths]
        if missing:
            raise ConfigurationError(
                f"Career catalog is missing categories: {missing}"
            )
        for cat, path in paths.items():
            if path.category != cat:
                raise ConfigurationError(
                    f"Catalog record keyed '{cat.value}' describes "
                    f"'{path.category.value}'."
                )
        self._paths: dict[CareerCategory, CareerPath] = {
            cat: paths[cat] for cat in CATEGORY_ORDER
        }

    def __getitem__(self, category: CareerCategory) -> CareerPath:
        return self._paths[category]

    def __iter__(self) -> Iterator[CareerCategory]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)


def _to_career_path(category: CareerCategory, rec: dict[str, Any]) -> CareerPath:
    roadmap = rec.get("roadmap") or {}
    return CareerPath(
        category=rec.get("category", category.value),
        title=rec.get("title", ""),
        description=rec.get("description", ""),
        skills=list(rec.get("skills", [])),
        roadmap=Roadmap(
            beginner=list(roadmap.get("beginner", [])),
            intermediate=list(roadmap.get("intermediate", [])),
            advanced=list(roadmap.get("advanced", [])),
        ),
        resources=[
            LearningResource(
                name=res["name"],
                url=res["url"],
                resource_type=res.get("type", "link"),
            )
            for res in rec.get("resources", [])
        ],
    )


def parse_career_catalog(records: Any) -> CareerCatalog:
    """Build a ``CareerCatalog`` from already-decoded JSON data.

    Raises:
        ConfigurationError: If the data violates any validation rule.
    """
    if not isinstance(records, dict):
        raise ConfigurationError("Career catalog JSON must contain an object.")

    valid = {c.value for c in CareerCategory}
    unknown = sorted(set(records) - valid)
    if unknown:
        raise ConfigurationError(
            f"Career catalog has unknown categories {unknown}. "
            f"Valid values: {sorted(valid)}"
        )

    paths: dict[CareerCategory, CareerPath] = {}
    for key, rec in records.items():
        category = CareerCategory(key)
        try:
            paths[category] = _to_career_path(category, rec)
        except (ValidationError, KeyError, TypeError, AttributeError) as exc:
            raise ConfigurationError(
                f"Career path '{key}' failed validation: {exc}"
            ) from exc
    return CareerCatalog(paths)


def load_career_catalog(path: Path | str) -> CareerCatalog:
    """Load and validate the career catalog JSON file at ``path``.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or malformed.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read career catalog {path}: {exc}") from exc

    catalog = parse_career_catalog(records)
    log.info("Loaded career catalog: %d paths from %s", len(catalog), path)
    return catalog
