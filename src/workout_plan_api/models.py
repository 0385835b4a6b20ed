"""Data models for workout plans."""
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Environment = Literal['home', 'gym']
Difficulty = Literal['beginner', 'intermediate', 'advanced']

ENVIRONMENTS: List[str] = ['home', 'gym']


class Exercise(BaseModel):
    """A single exercise within a day plan."""
    name: str
    description: str = ""
    muscle_groups: List[str] = Field(default_factory=list)
    sets: int = Field(default=3, ge=1)
    reps: str = "10-12"
    form_tips: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    difficulty: Difficulty = "intermediate"
    image_url: Optional[str] = None  # Assigned after parsing (catalog enrichment)

    class Config:
        extra = "ignore"


class DayPlan(BaseModel):
    """One day of a weekly plan."""
    day: str  # e.g. "Day 3"
    title: str = "Workout Day"
    focus: List[str] = Field(default_factory=list)  # Contains "Rest" on rest days
    warmup: str = ""
    cooldown: str = ""
    exercises: List[Exercise] = Field(default_factory=list)
    notes: Optional[str] = None

    class Config:
        extra = "ignore"

    @property
    def is_rest_day(self) -> bool:
        return any('rest' in f.lower() for f in self.focus)


class CatalogExercise(BaseModel):
    """Canonical exercise record from the exercise catalog."""
    name: str
    muscle_groups: List[str] = Field(default_factory=list)
    description: str = ""
    form_tips: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    environment: Optional[str] = None
    difficulty: Optional[str] = None

    class Config:
        extra = "ignore"


class HealthMetrics(BaseModel):
    """Health profile used to personalise generated plans."""
    age: Optional[int] = Field(default=None, ge=0)
    gender: Optional[str] = None
    height_cm: Optional[float] = Field(default=None, gt=0)
    weight_kg: Optional[float] = Field(default=None, gt=0)
    activity_level: Optional[str] = None
    fitness_goal: Optional[str] = None
    medical_conditions: Optional[str] = None

    class Config:
        extra = "ignore"


class SavedPlan(BaseModel):
    """Latest saved plan text for one environment."""
    environment: Environment
    plan: str
    created_at: datetime
    updated_at: datetime


class PlanState(BaseModel):
    """
    Explicit state for the plan screens.

    Holds, per environment, the generated plan text, the parsed day plans and
    loading, generating and saved flags, plus the currently selected day. State
    transitions in PlanService return a new PlanState rather than mutating.
    """
    generated_plan: Dict[str, Optional[str]] = Field(
        default_factory=lambda: {env: None for env in ENVIRONMENTS}
    )
    parsed_plan: Dict[str, List[DayPlan]] = Field(default_factory=dict)
    is_loading: Dict[str, bool] = Field(
        default_factory=lambda: {env: True for env in ENVIRONMENTS}
    )
    is_generating: Dict[str, bool] = Field(
        default_factory=lambda: {env: False for env in ENVIRONMENTS}
    )
    is_saved: Dict[str, bool] = Field(
        default_factory=lambda: {env: False for env in ENVIRONMENTS}
    )
    active_environment: Environment = "home"
    selected_day: Optional[str] = None

    def days_for(self, environment: str) -> List[DayPlan]:
        return self.parsed_plan.get(environment, [])
