"""Tests for XP accumulation and level resolution."""

import pytest

from forge.metrics.levels import (
    LEVEL_TIERS,
    calculate_level,
    get_level,
    get_next_level,
    level_progress,
)
from forge.metrics.xp import calculate_xp, course_xp, habit_xp, todo_xp, workout_xp


# ============================================================================
# XP
# ============================================================================

class TestCalculateXP:
    """Tests for the XP formula."""

    def test_no_activity_is_zero(self):
        assert calculate_xp() == 0
        assert calculate_xp([], [], [], []) == 0

    def test_workout_scenario(self):
        """Three workouts: sum of duration x 2 + exercises x 10."""
        workouts = [
            {"date": "2026-02-14", "duration": 45, "exercises": [{"name": "Squat"}, {"name": "Bench"}]},
            {"date": "2026-02-15", "duration": 30, "exercises": []},
            {"date": "2026-02-16", "duration": 60, "exercises": [{"name": "Deadlift"}]},
        ]
        expected = (45 * 2 + 2 * 10) + (30 * 2) + (60 * 2 + 1 * 10)
        assert calculate_xp(workouts=workouts) == expected

    def test_flat_exercise_list_overrides_nested(self):
        workouts = [{"duration": 10, "exercises": [{"name": "a"}]}]
        exercises = [{"name": "a"}, {"name": "b"}, {"name": "c"}]
        assert workout_xp(workouts, exercises) == 10 * 2 + 3 * 10

    def test_habit_logs_only_completed(self):
        logs = [{"completed": True}, {"completed": False}, {"completed": 1}]
        assert habit_xp(logs) == 20

    def test_todos_only_completed(self):
        todos = [{"completed": True}, {"completed": False}]
        assert todo_xp(todos) == 15

    def test_courses_only_at_100(self):
        courses = [{"progress": 100}, {"progress": 99}, {"progress": None}]
        assert course_xp(courses) == 100

    def test_all_categories(self):
        total = calculate_xp(
            workouts=[{"duration": 10}],
            habit_logs=[{"completed": True}],
            todos=[{"completed": True}],
            courses=[{"progress": 100}],
        )
        assert total == 20 + 10 + 15 + 100

    def test_malformed_fields_default_to_zero(self):
        workouts = [{"duration": "abc"}, {"duration": None}, {}, {"duration": float("nan")}]
        assert workout_xp(workouts) == 0

    def test_non_finite_duration_strings_default_to_zero(self):
        workouts = [{"duration": "nan"}, {"duration": "inf"}, {"duration": "-Infinity"}]
        assert calculate_xp(workouts=workouts) == 0

    def test_non_list_exercises_count_as_zero(self):
        workouts = [{"duration": 30, "exercises": 5}, {"duration": 10, "exercises": "abc"}]
        assert calculate_xp(workouts=workouts) == 30 * 2 + 10 * 2

    def test_negative_duration_does_not_reduce_xp(self):
        assert workout_xp([{"duration": -30}, {"duration": 10}]) == 20

    def test_monotonic_as_items_are_added(self):
        workouts, logs, todos = [], [], []
        previous = calculate_xp(workouts, logs, todos)
        for i in range(5):
            workouts.append({"duration": i})
            logs.append({"completed": i % 2 == 0})
            todos.append({"completed": True})
            current = calculate_xp(workouts, logs, todos)
            assert current >= previous
            previous = current


# ============================================================================
# Levels
# ============================================================================

class TestLevels:
    """Tests for level tiers."""

    def test_zero_is_beginner(self):
        assert get_level(0).name == "Beginner"
        assert get_level(0).level == 1

    def test_top_tier(self):
        assert get_level(5000).name == "Legend"
        assert get_next_level(5000) is None

    @pytest.mark.parametrize(
        "xp,name",
        [(499, "Beginner"), (500, "Apprentice"), (1499, "Apprentice"),
         (1500, "Achiever"), (3000, "Master"), (4999, "Master"), (100000, "Legend")],
    )
    def test_thresholds(self, xp, name):
        assert get_level(xp).name == name

    def test_level_min_never_exceeds_xp(self):
        for xp in range(0, 6000, 137):
            assert get_level(xp).min_xp <= xp

    def test_level_non_decreasing(self):
        levels = [get_level(xp).level for xp in range(0, 6000, 50)]
        assert levels == sorted(levels)

    def test_next_level(self):
        assert get_next_level(0).name == "Apprentice"
        assert get_next_level(500).name == "Achiever"

    def test_progress_interpolates(self):
        assert level_progress(0) == 0.0
        assert level_progress(250) == 50.0
        assert level_progress(1000) == 50.0

    def test_progress_is_100_at_top(self):
        assert level_progress(5000) == 100.0
        assert level_progress(9999) == 100.0

    def test_calculate_level(self):
        info = calculate_level(750)

        assert info.level == 2
        assert info.name == "Apprentice"
        assert info.xp == 750
        assert info.next_level.name == "Achiever"
        assert info.xp_to_next == 750
        assert info.progress_percent == 25.0

    def test_calculate_level_top(self):
        info = calculate_level(6000)

        assert info.next_level is None
        assert info.xp_to_next is None
        assert info.progress_percent == 100.0

    @pytest.mark.parametrize("xp", ["nan", "inf", None, "abc", float("nan")])
    def test_calculate_level_malformed_xp(self, xp):
        info = calculate_level(xp)

        assert info.name == "Beginner"
        assert info.xp == 0

    def test_tiers_ascending(self):
        thresholds = [t.min_xp for t in LEVEL_TIERS]
        assert thresholds == [0, 500, 1500, 3000, 5000]
