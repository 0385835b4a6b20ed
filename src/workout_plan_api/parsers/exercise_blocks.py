"""
Exercise Block Extractor

Splits a day segment into exercise blocks and extracts exercise attributes.

A block starts at a bold span (**Bench Press**) and runs until the next bold
span or the end of the segment. Every attribute is read by its own extractor
with its own default, so loosely formatted generated text degrades to
defaults instead of failing.
"""

import logging
import re
from typing import List

from workout_plan_api.models import Difficulty, Exercise
from workout_plan_api.utils import label, split_list, to_int

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Exercise"
DEFAULT_SETS = 3
DEFAULT_REPS = "10-12"

BLOCK_PATTERN = re.compile(r"\*\*([^*]+)\*\*[\s\S]*?(?=\*\*|\Z)")
NAME_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
DESCRIPTION_PATTERN = re.compile(r"\*\*[^*]+\*\*[ \t]*[-–][ \t]*([^•\n]+)")

MUSCLE_PATTERNS = [
    re.compile(label(r"target(?:s|ed)?(?:[ \t]+muscles?)?") + r"([^•\n.]+)", re.IGNORECASE),
    re.compile(label(r"muscles?(?:[ \t]+(?:groups?|worked))?") + r"([^•\n.]+)", re.IGNORECASE),
]
SETS_PATTERN = re.compile(label(r"sets?") + r"(\d+)", re.IGNORECASE)
REPS_PATTERN = re.compile(
    label(r"reps?|repetitions")
    + r"(\d+(?:[-–]\d+)?(?:[ \t]*(?:per[ \t]*side|each|reps|repetitions))?)",
    re.IGNORECASE,
)
FORM_TIPS_PATTERN = re.compile(
    label(r"form[ \t]+tips?|tips?|cues?") + r"([^•\n.]+)", re.IGNORECASE
)
# '- tip', '* tip', '• tip'; a space is required after '-' and '*' so bold
# markers and rep ranges are not read as bullets
BULLET_PATTERN = re.compile(r"^[ \t]*(?:•[ \t]*|[-*][ \t]+)(\S[^\n]*)", re.MULTILINE)
EQUIPMENT_PATTERN = re.compile(label(r"equipment") + r"([^•\n.]+)", re.IGNORECASE)


def split_exercise_blocks(segment: str) -> List[str]:
    """Return the raw text of every exercise block, in order."""
    return [m.group(0) for m in BLOCK_PATTERN.finditer(segment)]


def extract_name(block: str) -> str:
    match = NAME_PATTERN.search(block)
    name = match.group(1).strip() if match else ""
    return name or PLACEHOLDER_NAME


def extract_description(block: str) -> str:
    match = DESCRIPTION_PATTERN.search(block)
    return match.group(1).strip() if match else ""


def extract_muscle_groups(block: str) -> List[str]:
    for pattern in MUSCLE_PATTERNS:
        match = pattern.search(block)
        if match:
            return split_list(match.group(1).strip())
    return []


def extract_sets(block: str) -> int:
    match = SETS_PATTERN.search(block)
    sets = to_int(match.group(1)) if match else None
    # Zero sets is not a usable prescription
    if not sets or sets < 1:
        return DEFAULT_SETS
    return sets


def extract_reps(block: str) -> str:
    match = REPS_PATTERN.search(block)
    return match.group(1).strip() if match else DEFAULT_REPS


def extract_form_tips(block: str) -> List[str]:
    """Labelled tips first, then every bullet line. Duplicates are kept."""
    tips = [m.group(1).strip() for m in FORM_TIPS_PATTERN.finditer(block)]
    tips.extend(m.group(1).strip() for m in BULLET_PATTERN.finditer(block))
    return tips


def extract_equipment(block: str) -> List[str]:
    match = EQUIPMENT_PATTERN.search(block)
    return split_list(match.group(1).strip()) if match else []


def infer_difficulty(block: str, sets: int, reps: str) -> Difficulty:
    """
    Classify an exercise. Rules are checked in order and the first hit wins:

    1. block mentions 'beginner'           -> beginner
    2. block mentions 'advanced'           -> advanced
    3. more than 4 sets or '15' in reps    -> advanced
    4. fewer than 3 sets or '8' in reps    -> beginner
    5. otherwise                           -> intermediate

    Note that rule 4 makes '8-10' reps beginner even at 4 sets.
    """
    lowered = block.lower()
    if 'beginner' in lowered:
        return 'beginner'
    if 'advanced' in lowered:
        return 'advanced'
    if sets > 4 or '15' in reps:
        return 'advanced'
    if sets < 3 or '8' in reps:
        return 'beginner'
    return 'intermediate'


def parse_exercise_block(block: str) -> Exercise:
    sets = extract_sets(block)
    reps = extract_reps(block)
    return Exercise(
        name=extract_name(block),
        description=extract_description(block),
        muscle_groups=extract_muscle_groups(block),
        sets=sets,
        reps=reps,
        form_tips=extract_form_tips(block),
        equipment=extract_equipment(block),
        difficulty=infer_difficulty(block, sets, reps),
    )


def is_named(exercise: Exercise) -> bool:
    return bool(exercise.name) and exercise.name != PLACEHOLDER_NAME


def extract_exercises(segment: str) -> List[Exercise]:
    """Parse every block in a day segment, dropping unnamed placeholders."""
    exercises = [parse_exercise_block(block) for block in split_exercise_blocks(segment)]
    valid = [ex for ex in exercises if is_named(ex)]
    if len(valid) < len(exercises):
        logger.debug(f"Dropped {len(exercises) - len(valid)} unnamed exercise block(s)")
    return valid
