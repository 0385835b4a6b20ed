"""
Catalog Matcher

Replaces placeholder exercises in a parsed plan with canonical catalog
entries.

For every non-rest day:
  1. Exact (case-insensitive) name match: catalog details are copied onto the
     exercise, keeping its name, sets, reps and difficulty.
  2. Otherwise, candidates are all catalog exercises tagged with any of the
     day's focus muscles. One is picked by (character-code sum of the
     placeholder name) mod (number of candidates), so a given placeholder
     always resolves to the same catalog exercise for the same candidates.
  3. Otherwise the exercise is left as is.

Enrichment is best effort: if the catalog cannot be fetched or is empty the
plan is returned unchanged.
"""

import logging
from typing import Any, Callable, Iterable, List, Sequence

from workout_plan_api.models import CatalogExercise, DayPlan, Exercise
from workout_plan_api.services.catalog_service import CatalogIndex, normalize_catalog
from workout_plan_api.utils import name_hash, split_list

logger = logging.getLogger(__name__)

# Catalog query capability: environment -> catalog records
CatalogFetcher = Callable[[str], Iterable[Any]]


def target_muscles(day: DayPlan) -> List[str]:
    """Lowercased muscle names from a day's focus entries."""
    return [m.lower() for focus in day.focus for m in split_list(focus)]


def pick_candidate(name: str, candidates: Sequence[CatalogExercise]) -> CatalogExercise:
    return candidates[name_hash(name) % len(candidates)]


def _apply_exact_match(exercise: Exercise, match: CatalogExercise) -> Exercise:
    return exercise.model_copy(update={
        "muscle_groups": list(match.muscle_groups),
        "description": match.description or exercise.description,
        "form_tips": list(match.form_tips) if match.form_tips else list(exercise.form_tips),
        "equipment": list(match.equipment),
        "image_url": match.image_url,
    })


def _apply_substitute(exercise: Exercise, match: CatalogExercise) -> Exercise:
    return exercise.model_copy(update={
        "name": match.name,
        "muscle_groups": list(match.muscle_groups),
        "description": match.description,
        "form_tips": list(match.form_tips),
        "equipment": list(match.equipment),
        "image_url": match.image_url,
    })


def match_exercise(exercise: Exercise, muscles: List[str], index: CatalogIndex) -> Exercise:
    exact = index.by_name(exercise.name)
    if exact:
        return _apply_exact_match(exercise, exact)

    candidates: List[CatalogExercise] = []
    for muscle in muscles:
        candidates.extend(index.by_muscle(muscle))

    if candidates:
        return _apply_substitute(exercise, pick_candidate(exercise.name, candidates))
    return exercise


def enrich_with_index(day_plans: List[DayPlan], index: CatalogIndex) -> List[DayPlan]:
    enriched = []
    for day in day_plans:
        if day.is_rest_day:
            enriched.append(day)
            continue
        muscles = target_muscles(day)
        exercises = [match_exercise(ex, muscles, index) for ex in day.exercises]
        enriched.append(day.model_copy(update={"exercises": exercises}))
    return enriched


def enrich(day_plans: List[DayPlan], environment: str, catalog: CatalogFetcher) -> List[DayPlan]:
    """
    Enrich day plans against the catalog for an environment.

    Args:
        day_plans: Parsed plan
        environment: 'home' or 'gym'
        catalog: Callable returning catalog records for an environment;
            called once per invocation

    Returns:
        Enriched day plans, or the input list unchanged if the catalog is
        unavailable or empty
    """
    try:
        records = catalog(environment)
        index = CatalogIndex(normalize_catalog(records))
    except Exception as e:
        logger.warning(f"Error enriching {environment} plan with catalog exercises: {e}")
        return day_plans

    if not len(index):
        logger.info(f"No catalog exercises for {environment}; plan left unchanged")
        return day_plans

    return enrich_with_index(day_plans, index)
