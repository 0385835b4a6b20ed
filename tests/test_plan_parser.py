"""Tests for assembling plan text into day plans."""
import time
from unittest.mock import patch

from workout_plan_api.parsers import parse_plan, segment_and_parse


TWO_DAY_PLAN = (
    "## Day 1: Upper Body\n"
    "Focus: Chest, Back\n"
    "**Bench Press** - flat bench press\n"
    "Sets: 4\n"
    "Reps: 8-10\n"
    "## Day 2: Rest\n"
    "Focus: Rest"
)


class TestSegmentAndParse:
    """Test cases for segment_and_parse."""

    def test_text_without_day_headings_is_empty(self):
        assert segment_and_parse("**Squat**\nSets: 3\nReps: 10") == []
        assert segment_and_parse("") == []

    def test_two_day_plan(self):
        days = segment_and_parse(TWO_DAY_PLAN)

        assert len(days) == 2

        day1 = days[0]
        assert day1.day == "Day 1"
        assert day1.title == "Upper Body"
        assert day1.focus == ["Chest", "Back"]
        assert len(day1.exercises) == 1
        bench = day1.exercises[0]
        assert bench.name == "Bench Press"
        assert bench.description == "flat bench press"
        assert bench.sets == 4
        assert bench.reps == "8-10"
        assert bench.difficulty == "beginner"

        day2 = days[1]
        assert day2.day == "Day 2"
        assert "Rest" in day2.focus
        assert day2.is_rest_day
        assert day2.exercises == []

    def test_full_sample_plan(self, sample_plan):
        days = segment_and_parse(sample_plan)

        assert [d.day for d in days] == ["Day 1", "Day 2", "Day 3"]

        day1 = days[0]
        assert day1.warmup == "5 minutes rowing and arm circles"
        assert day1.cooldown == "Chest and lat stretches"
        assert day1.notes == "Rest 90 seconds between sets"
        assert [ex.name for ex in day1.exercises] == ["Bench Press", "Seated Row"]
        assert day1.exercises[0].muscle_groups == ["Chest", "Triceps"]
        assert day1.exercises[0].form_tips == [
            "Keep shoulder blades pinned",
            "Drive feet into the floor",
        ]
        row = day1.exercises[1]
        assert row.muscle_groups == ["Back", "Biceps"]
        assert row.equipment == ["Cable machine"]
        assert row.difficulty == "intermediate"

        day3 = days[2]
        assert day3.focus == ["Quadriceps", "Hamstrings"]
        assert day3.warmup == "5-10 minutes of light cardio and dynamic stretching"
        assert day3.cooldown == "Static stretching for muscles worked, 5-10 minutes"
        assert day3.notes is None
        squat = day3.exercises[0]
        assert squat.sets == 5
        assert squat.reps == "5"
        assert squat.form_tips == ["Brace your core"]
        assert squat.difficulty == "advanced"

    def test_days_keep_source_order(self):
        text = "## Day 3: C\n**Dip**\n## Day 1: A\n**Curl**\n"
        days = segment_and_parse(text)

        assert [d.day for d in days] == ["Day 3", "Day 1"]

    def test_is_idempotent(self, sample_plan):
        first = [d.model_dump() for d in segment_and_parse(sample_plan)]
        second = [d.model_dump() for d in segment_and_parse(sample_plan)]
        assert first == second

    def test_unexpected_error_returns_empty(self, sample_plan):
        with patch(
            "workout_plan_api.parsers.plan_parser.extract_exercises",
            side_effect=RuntimeError("boom"),
        ):
            assert segment_and_parse(sample_plan) == []


class TestParsePlan:

    def test_none_text(self):
        assert parse_plan(None, "home") == []

    def test_delegates_to_segment_and_parse(self):
        days = parse_plan(TWO_DAY_PLAN, "gym")
        assert [d.day for d in days] == ["Day 1", "Day 2"]


class TestLargeInput:

    def test_long_whitespace_run_in_bullet_parses_quickly(self):
        plan = "## Day 1: Legs\n**Squat** - Back squat\n- a" + " " * 50000 + "b\n"

        start = time.perf_counter()
        days = segment_and_parse(plan)
        elapsed = time.perf_counter() - start

        assert days[0].exercises[0].form_tips == ["a" + " " * 50000 + "b"]
        # Backtracking on this line grows with the square of its length
        assert elapsed < 1.0
