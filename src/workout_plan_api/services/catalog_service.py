"""
Exercise Catalog Service

PURPOSE
-------
- Fetch canonical exercise records for an environment from the catalog API
  (`GET /api/exercise/list?environment=<env>`)
- Normalize them into CatalogExercise models
- Index them by lowercase name and lowercase muscle group for matching

USAGE
-----
    from workout_plan_api.services.catalog_service import fetch_catalog, CatalogIndex
    index = CatalogIndex(fetch_catalog("gym"))
    index.by_name("bench press")
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from workout_plan_api.config import settings
from workout_plan_api.models import CatalogExercise

logger = logging.getLogger(__name__)

CATALOG_LIST_PATH = "/api/exercise/list"


class CatalogServiceError(RuntimeError):
    """Raised when the exercise catalog cannot be fetched."""


# ------------------------
# PUBLIC ENTRYPOINT
# ------------------------

def fetch_catalog(environment: str) -> List[CatalogExercise]:
    """
    Fetch all catalog exercises for an environment.

    Raises:
        CatalogServiceError: transport failure, non-200 status or an
            unsuccessful payload
    """
    url = f"{settings.CATALOG_API_URL}{CATALOG_LIST_PATH}"
    try:
        response = requests.get(
            url,
            params={"environment": environment},
            headers={"Cache-Control": "no-store"},
            timeout=settings.CATALOG_TIMEOUT_SEC,
        )
    except requests.RequestException as e:
        raise CatalogServiceError(f"Failed to reach exercise catalog: {e}") from e

    if response.status_code != 200:
        raise CatalogServiceError(
            f"Failed to fetch exercises from catalog: {response.status_code} {response.reason}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise CatalogServiceError(f"Catalog returned invalid JSON: {e}") from e

    if not isinstance(data, dict) or not data.get("success"):
        raise CatalogServiceError("Catalog request was not successful")

    raw_exercises = data.get("exercises") or []
    exercises = [ex for ex in (_normalize_exercise(raw) for raw in raw_exercises) if ex]
    logger.info(f"Loaded {len(exercises)} exercises from catalog for {environment}")
    return exercises


# ------------------------
# NORMALIZATION
# ------------------------

def _as_list(value: Any) -> List[str]:
    """Catalog list fields may arrive as lists or comma separated strings."""
    if not value:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return [str(v).strip() for v in value if v and str(v).strip()]


def _first(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None


def _normalize_exercise(raw: Any) -> Optional[CatalogExercise]:
    """Map a catalog record (camelCase or snake_case) onto CatalogExercise."""
    if isinstance(raw, CatalogExercise):
        return raw
    if not isinstance(raw, dict):
        return None

    name = str(raw.get("name") or "").strip()
    if not name:
        return None

    return CatalogExercise(
        name=name,
        muscle_groups=_as_list(_first(raw, "muscleGroups", "muscle_groups")),
        description=str(raw.get("description") or ""),
        form_tips=_as_list(_first(raw, "formTips", "form_tips")),
        equipment=_as_list(raw.get("equipment")),
        image_url=_first(raw, "imageUrl", "image_url"),
        environment=raw.get("environment"),
        difficulty=raw.get("difficulty"),
    )


def normalize_catalog(records: Iterable[Any]) -> List[CatalogExercise]:
    return [ex for ex in (_normalize_exercise(r) for r in records or []) if ex]


# ------------------------
# LOOKUPS
# ------------------------

class CatalogIndex:
    """Case-insensitive lookups over a catalog snapshot."""

    def __init__(self, exercises: Iterable[CatalogExercise]):
        self._by_name: Dict[str, CatalogExercise] = {}
        self._by_muscle: Dict[str, List[CatalogExercise]] = {}
        self.size = 0

        for exercise in exercises:
            self.size += 1
            # Later records with the same name replace earlier ones
            self._by_name[exercise.name.lower()] = exercise
            for muscle in exercise.muscle_groups:
                self._by_muscle.setdefault(muscle.lower(), []).append(exercise)

    def __len__(self) -> int:
        return self.size

    def by_name(self, name: str) -> Optional[CatalogExercise]:
        return self._by_name.get(name.lower())

    def by_muscle(self, muscle: str) -> List[CatalogExercise]:
        return list(self._by_muscle.get(muscle.lower(), []))
