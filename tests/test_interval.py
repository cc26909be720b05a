"""Tests for watering interval parsing."""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from app.watering.interval import DAY_MS, interval_delta, next_due, parse_interval


class TestParseInterval:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2 days", 172_800_000),
            ("1 day", 86_400_000),
            ("1 week", 604_800_000),
            ("3 weeks", 3 * 604_800_000),
            ("3 HOURS", 10_800_000),
            ("1 hour", 3_600_000),
            ("1 month", 2_592_000_000),
            ("2 Months", 2 * 2_592_000_000),
            ("5days", 5 * DAY_MS),
            ("4   days", 4 * DAY_MS),
            ("0 days", 0),
        ],
    )
    def test_recognised_units(self, text, expected):
        assert parse_interval(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "banana",
            "",
            "days",
            "two days",
            "2 fortnights",
            "2 dayz",
            "-1 days",
            "1.5 days",
            " 2 days",
            "2 days ",
            "2 days\n",
            "every 2 days",
        ],
    )
    def test_unrecognised_strings(self, text):
        assert parse_interval(text) is None

    def test_non_string_input(self):
        assert parse_interval(None) is None
        assert parse_interval(172800000) is None


class TestIntervalDelta:

    def test_returns_timedelta(self):
        assert interval_delta("2 days") == timedelta(days=2)
        assert interval_delta("1 month") == timedelta(days=30)

    def test_zero_and_invalid_are_unusable(self):
        assert interval_delta("0 hours") is None
        assert interval_delta("soon") is None


class TestNextDue:

    def test_adds_interval(self):
        start = datetime(2026, 5, 1, tzinfo=dt_timezone.utc)
        assert next_due(start, "3 hours") == start + timedelta(hours=3)

    def test_past_year_9999_is_unusable(self):
        start = datetime(2026, 5, 1, tzinfo=dt_timezone.utc)
        assert parse_interval("99999 months") is not None
        assert next_due(start, "99999 months") is None

    def test_beyond_timedelta_range_is_unusable(self):
        assert interval_delta("999999999999 weeks") is None
