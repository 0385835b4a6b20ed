"""
Test fixtures for workout-plan-api.

Provides sample plan text, an in-memory exercise catalog and a FastAPI client
wired to a temporary plan store, so tests run offline and deterministically.
"""

import sys
from pathlib import Path
from typing import List
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_plan_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from workout_plan_api.api import routes
from workout_plan_api.main import app
from workout_plan_api.models import CatalogExercise
from workout_plan_api.services.plan_service import PlanService
from workout_plan_api.services.plan_store import PlanStore


TEST_USER_ID = "test-user-123"


# ---------------------------------------------------------------------------
# Sample Data Fixtures
# ---------------------------------------------------------------------------


SAMPLE_PLAN = """# Weekly Gym Plan

## Day 1: Upper Body
Focus: Chest, Back
Warm-up: 5 minutes rowing and arm circles

**Bench Press** - Flat barbell bench press
Target muscles: Chest, Triceps
Sets: 4
Reps: 8-10
Equipment: Barbell, Bench
- Keep shoulder blades pinned
- Drive feet into the floor

**Seated Row** - Cable row to the waist
Muscles: Back, Biceps
Sets: 3
Reps: 10-12
Equipment: Cable machine

Cool-down: Chest and lat stretches
Notes: Rest 90 seconds between sets

## Day 2: Rest
Focus: Rest
Light walking only.

## Day 3: Legs
Focus: Quadriceps/Hamstrings
**Squat** - Back squat
Sets: 5
Reps: 5
Tips: Brace your core. Knees track over toes
"""


def make_catalog() -> List[CatalogExercise]:
    return [
        CatalogExercise(
            name="Barbell Bench Press",
            muscle_groups=["Chest", "Triceps"],
            description="Lower the bar to mid chest and press up.",
            form_tips=["Retract your shoulder blades"],
            equipment=["Barbell", "Bench"],
            image_url="https://images.example.com/bench.png",
        ),
        CatalogExercise(
            name="Goblet Squat",
            muscle_groups=["Quadriceps", "Glutes"],
            description="Hold a dumbbell at the chest and squat.",
            form_tips=["Elbows inside the knees"],
            equipment=["Dumbbell"],
            image_url="https://images.example.com/goblet.png",
        ),
        CatalogExercise(
            name="Hack Squat",
            muscle_groups=["Quadriceps"],
            description="Machine squat on an angled sled.",
            form_tips=["Full range of motion"],
            equipment=["Hack squat machine"],
            image_url="https://images.example.com/hack.png",
        ),
    ]


@pytest.fixture
def sample_plan() -> str:
    return SAMPLE_PLAN


@pytest.fixture
def catalog_exercises() -> List[CatalogExercise]:
    return make_catalog()


@pytest.fixture
def catalog_fetcher(catalog_exercises):
    """Catalog query capability returning the in-memory catalog."""
    fetcher = MagicMock(side_effect=lambda environment: list(catalog_exercises))
    return fetcher


@pytest.fixture
def plan_store(tmp_path) -> PlanStore:
    return PlanStore(base_dir=tmp_path / "plans")


@pytest.fixture
def mock_generator(sample_plan):
    generator = MagicMock()
    generator.generate.return_value = sample_plan
    return generator


@pytest.fixture
def plan_service(plan_store, catalog_fetcher, mock_generator) -> PlanService:
    return PlanService(
        store=plan_store,
        catalog=catalog_fetcher,
        generator=mock_generator,
        enrich_environments=["gym"],
    )


# ---------------------------------------------------------------------------
# Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(plan_service):
    """FastAPI TestClient backed by the temporary plan service."""
    routes._plan_service = plan_service
    try:
        yield TestClient(app)
    finally:
        routes._plan_service = None
