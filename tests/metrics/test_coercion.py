"""Tests for lenient field coercion."""

from datetime import date, datetime

import pytest

from forge.metrics.coercion import get_field, to_bool, to_count, to_date, to_int, to_number
from forge.models import Workout


class TestGetField:
    def test_dict_and_model(self):
        workout = Workout(id="w", user_id="u", date="2026-02-16", duration=30)

        assert get_field({"duration": 5}, "duration") == 5
        assert get_field(workout, "duration") == 30
        assert get_field(None, "duration", 0) == 0
        assert get_field({}, "duration", 0) == 0


class TestNumbers:
    @pytest.mark.parametrize("value,expected", [
        (5, 5.0), (2.5, 2.5), ("12", 12.0), (" 7 ", 7.0), (True, 1.0),
        (None, 0.0), ("abc", 0.0), (float("nan"), 0.0), ([], 0.0),
        ("nan", 0.0), (" NaN ", 0.0), ("inf", 0.0), ("-infinity", 0.0),
        (float("inf"), 0.0), ("1e999", 0.0), (10 ** 400, 0.0),
    ])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_to_int_truncates(self):
        assert to_int("45.9") == 45
        assert to_int(None) == 0

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan"), 10 ** 400])
    def test_to_int_non_finite_is_zero(self, value):
        assert to_int(value) == 0


class TestCounts:
    @pytest.mark.parametrize("value,expected", [
        ([1, 2], 2), ((1,), 1), ([], 0), (None, 0), (5, 0), ("abc", 0), ({"a": 1}, 0),
    ])
    def test_to_count(self, value, expected):
        assert to_count(value) == expected


class TestBoolsAndDates:
    @pytest.mark.parametrize("value,expected", [
        (True, True), (False, False), (1, True), (0, False),
        ("true", True), ("1", True), ("no", False), (None, False),
    ])
    def test_to_bool(self, value, expected):
        assert to_bool(value) is expected

    def test_to_date(self):
        assert to_date("2026-02-16") == date(2026, 2, 16)
        assert to_date("2026-02-16T08:00:00+00:00") == date(2026, 2, 16)
        assert to_date(datetime(2026, 2, 16, 8, 0)) == date(2026, 2, 16)
        assert to_date(date(2026, 2, 16)) == date(2026, 2, 16)
        assert to_date("16/02/2026") is None
        assert to_date(20260216) is None
