"""
Day Field Extractor

Pulls the day-level fields (title, focus, warm-up, cool-down, notes) out of
one raw day segment. Each field has its own function and its own default, so
a missing or oddly formatted field never affects the others.
"""

import re
from typing import List, Optional

from workout_plan_api.utils import label, split_list

DEFAULT_TITLE = "Workout Day"
DEFAULT_FOCUS = ["Full Body"]
REST_FOCUS = ["Rest", "Recovery"]
DEFAULT_WARMUP = "5-10 minutes of light cardio and dynamic stretching"
DEFAULT_COOLDOWN = "Static stretching for muscles worked, 5-10 minutes"

# Heading remainder on the same line: "## Day 1: Upper Body" -> "Upper Body"
TITLE_PATTERN = re.compile(r"##?\s*Day \d+:?[ \t]*([^\n]*)", re.IGNORECASE)
FOCUS_PATTERN = re.compile(label(r"focus") + r"([^.\n]+)", re.IGNORECASE)
WARMUP_PATTERN = re.compile(label(r"warm[ -]?up") + r"([^\n]+)", re.IGNORECASE)
COOLDOWN_PATTERN = re.compile(label(r"cool[ -]?down") + r"([^\n]+)", re.IGNORECASE)
NOTES_PATTERN = re.compile(label(r"notes?") + r"([^\n]+)", re.IGNORECASE)


def extract_title(segment: str) -> str:
    """Title text after 'Day N'; after the first colon when one is present."""
    match = TITLE_PATTERN.search(segment)
    if not match:
        return DEFAULT_TITLE
    title = match.group(1).strip()
    if ':' in title:
        title = title.split(':')[1].strip()
    return title or DEFAULT_TITLE


def extract_focus(segment: str, title: str = "") -> List[str]:
    match = FOCUS_PATTERN.search(segment)
    if match:
        return split_list(match.group(1).strip())
    if 'rest' in title.lower():
        return list(REST_FOCUS)
    return list(DEFAULT_FOCUS)


def extract_warmup(segment: str) -> str:
    match = WARMUP_PATTERN.search(segment)
    return match.group(1).strip() if match else DEFAULT_WARMUP


def extract_cooldown(segment: str) -> str:
    match = COOLDOWN_PATTERN.search(segment)
    return match.group(1).strip() if match else DEFAULT_COOLDOWN


def extract_notes(segment: str) -> Optional[str]:
    """Notes have no default: absent notes stay None."""
    match = NOTES_PATTERN.search(segment)
    return match.group(1).strip() if match else None
