"""
Plan orchestration.

Ties together generation, parsing, catalog enrichment and the saved plan
store. All state lives in an explicit PlanState that is passed in and
returned; PlanService itself holds only its collaborators.
"""

import logging
from typing import List, Optional

from workout_plan_api.config import settings
from workout_plan_api.models import DayPlan, HealthMetrics, PlanState
from workout_plan_api.parsers import parse_plan
from workout_plan_api.services.catalog_matcher import CatalogFetcher, enrich
from workout_plan_api.services.catalog_service import fetch_catalog
from workout_plan_api.services.plan_generator import PlanGenerator
from workout_plan_api.services.plan_store import PlanStore, PlanStoreError

logger = logging.getLogger(__name__)


def _with_env(mapping: dict, environment: str, value) -> dict:
    updated = dict(mapping)
    updated[environment] = value
    return updated


def _selection_for(days: List[DayPlan], selected_day: Optional[str]) -> Optional[str]:
    """Keep the selected day if the plan has it, else fall back to the first day."""
    if not days:
        return None
    if selected_day and any(d.day == selected_day for d in days):
        return selected_day
    return days[0].day


class PlanService:
    """Plan workflows over an explicit PlanState."""

    def __init__(
        self,
        store: Optional[PlanStore] = None,
        catalog: Optional[CatalogFetcher] = None,
        generator: Optional[PlanGenerator] = None,
        enrich_environments: Optional[List[str]] = None,
    ):
        self.store = store or PlanStore()
        self.catalog = catalog or fetch_catalog
        self.generator = generator or PlanGenerator()
        self.enrich_environments = (
            enrich_environments if enrich_environments is not None else settings.ENRICH_ENVIRONMENTS
        )

    def build_days(self, plan_text: Optional[str], environment: str) -> List[DayPlan]:
        """Parse plan text and, for enrich environments, match against the catalog."""
        days = parse_plan(plan_text, environment)
        if days and environment in self.enrich_environments:
            days = enrich(days, environment, self.catalog)
        return days

    def load_plan(self, state: PlanState, environment: str, plan_text: str) -> PlanState:
        days = self.build_days(plan_text, environment)
        selected = state.selected_day
        if environment == state.active_environment:
            selected = _selection_for(days, state.selected_day)
        return state.model_copy(update={
            "generated_plan": _with_env(state.generated_plan, environment, plan_text),
            "parsed_plan": _with_env(state.parsed_plan, environment, days),
            "is_loading": _with_env(state.is_loading, environment, False),
            "selected_day": selected,
        })

    def set_active_environment(self, state: PlanState, environment: str) -> PlanState:
        """Switch environment tab, re-validating the selected day."""
        days = state.days_for(environment)
        return state.model_copy(update={
            "active_environment": environment,
            "selected_day": _selection_for(days, state.selected_day),
        })

    def select_day(self, state: PlanState, day: str) -> PlanState:
        days = state.days_for(state.active_environment)
        if not any(d.day == day for d in days):
            return state
        return state.model_copy(update={"selected_day": day})

    def load_saved(self, state: PlanState, user_id: str) -> PlanState:
        """Load every saved plan for a user into the state."""
        saved = {p.environment: p for p in self.store.list_plans(user_id)}
        logger.info(f"Found {len(saved)} saved plan(s) for {user_id}")
        for environment in list(state.is_loading):
            if environment in saved:
                state = self.load_plan(state, environment, saved[environment].plan)
                state = state.model_copy(update={
                    "is_saved": _with_env(state.is_saved, environment, True),
                })
            else:
                state = state.model_copy(update={
                    "is_loading": _with_env(state.is_loading, environment, False),
                })
        return state

    def begin_generation(self, state: PlanState, environment: str) -> PlanState:
        return state.model_copy(update={
            "is_generating": _with_env(state.is_generating, environment, True),
        })

    def generate(
        self,
        state: PlanState,
        environment: str,
        metrics: Optional[HealthMetrics],
        user_id: str,
        provider: Optional[str] = None,
    ) -> PlanState:
        """
        Generate, parse, enrich and save a new plan.

        A failed save is logged and reported through ``is_saved``; the
        generated plan is still returned.

        Raises:
            PlanGenerationError: If generation fails; the input state is untouched
        """
        state = self.begin_generation(state, environment)
        plan_text = self.generator.generate(metrics, environment, provider=provider, user_id=user_id)
        state = self.load_plan(state, environment, plan_text)
        try:
            self.store.save(user_id, environment, plan_text)
            saved = True
        except PlanStoreError as e:
            logger.error(f"Error saving generated {environment} plan for {user_id}: {e}")
            saved = False
        return state.model_copy(update={
            "is_generating": _with_env(state.is_generating, environment, False),
            "is_saved": _with_env(state.is_saved, environment, saved),
        })
