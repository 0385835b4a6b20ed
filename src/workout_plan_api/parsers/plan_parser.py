"""
Plan Assembler

Turns generated weekly plan markdown into an ordered list of DayPlans:

    ## Day 1: Upper Body
    Focus: Chest, Back
    Warm-up: 5 minutes rowing
    **Bench Press** - flat bench press
    Sets: 4
    Reps: 8-10
    - Keep shoulder blades pinned

Days come out in the order the headings appear in the text. Text with no day
headings yields an empty list, and so does any unexpected parsing failure:
callers treat both as "no plan available yet".
"""

import logging
from typing import List, Optional

from workout_plan_api.models import DayPlan
from workout_plan_api.parsers.day_fields import (
    extract_cooldown,
    extract_focus,
    extract_notes,
    extract_title,
    extract_warmup,
)
from workout_plan_api.parsers.exercise_blocks import extract_exercises
from workout_plan_api.parsers.segmenter import segment_days

logger = logging.getLogger(__name__)


def parse_day(day_number: str, segment: str) -> DayPlan:
    """Build one DayPlan from a raw day segment."""
    title = extract_title(segment)
    return DayPlan(
        day=f"Day {day_number}",
        title=title,
        focus=extract_focus(segment, title),
        warmup=extract_warmup(segment),
        cooldown=extract_cooldown(segment),
        exercises=extract_exercises(segment),
        notes=extract_notes(segment),
    )


def segment_and_parse(plan_text: str) -> List[DayPlan]:
    """Parse plan text into DayPlans. Never raises."""
    try:
        return [parse_day(number, segment) for number, segment in segment_days(plan_text)]
    except Exception as e:
        logger.exception(f"Error parsing plan text: {e}")
        return []


def parse_plan(plan_text: Optional[str], environment: str) -> List[DayPlan]:
    """Environment-tagged entry point used by the plan service."""
    if not plan_text:
        return []
    days = segment_and_parse(plan_text)
    if not days:
        logger.info("No day sections found in %s plan", environment)
    else:
        logger.debug(
            "Parsed %s plan: %d day(s), %d exercise(s)",
            environment,
            len(days),
            sum(len(d.exercises) for d in days),
        )
    return days
