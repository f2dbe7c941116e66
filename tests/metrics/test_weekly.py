"""Tests for Monday-to-Sunday weekly buckets."""

from datetime import date

from forge.metrics.weekly import week_start, weekly_buckets


# Monday 2026-02-16
MONDAY = date(2026, 2, 16)


class TestWeekStart:
    def test_monday_is_its_own_start(self):
        assert week_start(MONDAY) == MONDAY

    def test_sunday_belongs_to_previous_monday(self):
        assert week_start(date(2026, 2, 22)) == MONDAY

    def test_midweek(self):
        assert week_start(date(2026, 2, 19)) == MONDAY


class TestWeeklyBuckets:
    """Tests for per-day completion counts."""

    def test_seven_days_monday_first(self):
        buckets = weekly_buckets(today=date(2026, 2, 18))

        assert [b.day for b in buckets] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert buckets[0].date == "2026-02-16"
        assert buckets[6].date == "2026-02-22"
        assert all(b.habits == b.todos == b.workouts == 0 for b in buckets)

    def test_counts_by_category(self):
        habit_logs = [
            {"date": "2026-02-16", "completed": True},
            {"date": "2026-02-16", "completed": True},
            {"date": "2026-02-17", "completed": False},
        ]
        todos = [
            {"due_date": "2026-02-18", "completed": True},
            {"due_date": "2026-02-18", "completed": False},
            {"due_date": None, "completed": True},
        ]
        workouts = [{"date": "2026-02-20"}, {"date": "2026-02-22"}]

        buckets = weekly_buckets(habit_logs, todos, workouts, today=date(2026, 2, 18))
        by_date = {b.date: b for b in buckets}

        assert by_date["2026-02-16"].habits == 2
        assert by_date["2026-02-17"].habits == 0
        assert by_date["2026-02-18"].todos == 1
        assert by_date["2026-02-20"].workouts == 1
        assert by_date["2026-02-22"].workouts == 1

    def test_bucket_sums_match_same_week_events(self):
        habit_logs = [
            {"date": "2026-02-15", "completed": True},  # previous week
            {"date": "2026-02-16", "completed": True},
            {"date": "2026-02-21", "completed": True},
            {"date": "2026-02-23", "completed": True},  # next week
        ]
        workouts = [{"date": "2026-02-16"}, {"date": "2026-02-10"}]

        buckets = weekly_buckets(habit_logs, [], workouts, today=date(2026, 2, 19))

        assert sum(b.habits for b in buckets) == 2
        assert sum(b.workouts for b in buckets) == 1
        assert sum(b.todos for b in buckets) == 0

    def test_malformed_records_are_skipped(self):
        buckets = weekly_buckets(
            [{"date": "garbage", "completed": True}, {}],
            [{"completed": True}],
            [None, {"date": 12}],
            today=MONDAY,
        )
        assert sum(b.habits + b.todos + b.workouts for b in buckets) == 0
