"""API routes for workout plans."""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Header, HTTPException
from pydantic import BaseModel, Field

from workout_plan_api.models import DayPlan, Environment, HealthMetrics, PlanState
from workout_plan_api.parsers import parse_plan
from workout_plan_api.services.catalog_matcher import enrich
from workout_plan_api.services.catalog_service import fetch_catalog
from workout_plan_api.services.plan_generator import PlanGenerationError, UnknownProviderError
from workout_plan_api.services.plan_service import PlanService
from workout_plan_api.services.plan_store import PlanStoreError

logger = logging.getLogger(__name__)

router = APIRouter()

_plan_service: Optional[PlanService] = None


def get_plan_service() -> PlanService:
    """Lazily build the shared PlanService (patched in tests)."""
    global _plan_service
    if _plan_service is None:
        _plan_service = PlanService()
    return _plan_service


# ---------------------------------------------------------------------------
# Request/Response Models
# ---------------------------------------------------------------------------

class ParsePlanRequest(BaseModel):
    """Request model for POST /plans/parse"""
    plan: str = Field(..., max_length=100000, description="Generated plan markdown")
    environment: Environment = "home"


class EnrichPlanRequest(BaseModel):
    """Request model for POST /plans/enrich"""
    days: List[DayPlan]
    environment: Environment = "gym"


class GeneratePlanRequest(BaseModel):
    """Request model for POST /plans/generate"""
    environment: Environment
    health_metrics: Optional[HealthMetrics] = None
    provider: Optional[str] = Field(default=None, description="'openai' or 'anthropic'")


class SavePlanRequest(BaseModel):
    """Request model for POST /plans"""
    plan: str = Field(..., min_length=1, max_length=100000)
    environment: Environment


class PlanResponse(BaseModel):
    success: bool
    environment: Environment
    days: List[DayPlan] = Field(default_factory=list)
    plan: Optional[str] = None
    updated_at: Optional[datetime] = None
    saved: Optional[bool] = None  # Set by /plans/generate


class SavedPlansResponse(BaseModel):
    success: bool
    plans: List[PlanResponse] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/health")
def health():
    return {"status": "ok"}


@router.post("/plans/parse", response_model=PlanResponse)
def parse_plan_endpoint(req: ParsePlanRequest):
    """Parse plan markdown into day plans. Unparseable text gives success=false."""
    days = parse_plan(req.plan, req.environment)
    return PlanResponse(success=bool(days), environment=req.environment, days=days)


@router.post("/plans/enrich", response_model=PlanResponse)
def enrich_plan_endpoint(req: EnrichPlanRequest):
    """Match placeholder exercises against the catalog (best effort)."""
    days = enrich(req.days, req.environment, fetch_catalog)
    return PlanResponse(success=True, environment=req.environment, days=days)


@router.post("/plans/generate", response_model=PlanResponse)
def generate_plan_endpoint(
    req: GeneratePlanRequest,
    user_id: str = Header("anonymous", alias="X-User-Id"),
):
    service = get_plan_service()
    try:
        state = service.generate(
            PlanState(active_environment=req.environment),
            req.environment,
            req.health_metrics,
            user_id=user_id,
            provider=req.provider,
        )
    except UnknownProviderError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PlanGenerationError as e:
        status = 400 if req.health_metrics is None else 500
        raise HTTPException(status_code=status, detail=str(e))

    days = state.days_for(req.environment)
    return PlanResponse(
        success=bool(days),
        environment=req.environment,
        days=days,
        plan=state.generated_plan.get(req.environment),
        saved=state.is_saved.get(req.environment),
    )


@router.get("/plans", response_model=SavedPlansResponse)
def list_saved_plans(user_id: str = Header("anonymous", alias="X-User-Id")):
    service = get_plan_service()
    plans = [
        PlanResponse(
            success=True,
            environment=saved.environment,
            plan=saved.plan,
            updated_at=saved.updated_at,
            days=service.build_days(saved.plan, saved.environment),
        )
        for saved in service.store.list_plans(user_id)
    ]
    return SavedPlansResponse(success=True, plans=plans)


@router.get("/plans/{environment}", response_model=PlanResponse)
def get_saved_plan(environment: Environment, user_id: str = Header("anonymous", alias="X-User-Id")):
    service = get_plan_service()
    saved = service.store.get(user_id, environment)
    if saved is None:
        raise HTTPException(status_code=404, detail=f"No saved {environment} plan")
    return PlanResponse(
        success=True,
        environment=environment,
        plan=saved.plan,
        updated_at=saved.updated_at,
        days=service.build_days(saved.plan, environment),
    )


@router.post("/plans", response_model=PlanResponse)
def save_plan(req: SavePlanRequest, user_id: str = Header("anonymous", alias="X-User-Id")):
    service = get_plan_service()
    try:
        saved = service.store.save(user_id, req.environment, req.plan)
    except PlanStoreError as e:
        logger.error(f"Error saving plan: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return PlanResponse(
        success=True,
        environment=saved.environment,
        plan=saved.plan,
        updated_at=saved.updated_at,
    )
