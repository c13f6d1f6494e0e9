"""Tests for date helpers."""

from datetime import date, datetime

from utils.dates import (
    clock_to_seconds,
    day_gap,
    is_today_or_yesterday,
    local_day,
    seconds_to_clock,
)


class TestClockParsing:
    def test_minutes_and_seconds(self):
        assert clock_to_seconds("1:10") == 70
        assert clock_to_seconds("0:05") == 5
        assert clock_to_seconds("12:00") == 720

    def test_unreadable(self):
        assert clock_to_seconds("") == 0
        assert clock_to_seconds("abc") == 0
        assert clock_to_seconds("1:2:3") == 0

    def test_format(self):
        assert seconds_to_clock(70) == "1:10"
        assert seconds_to_clock(5) == "0:05"
        assert seconds_to_clock(0) == "0:00"


class TestDayArithmetic:
    def test_gap_is_calendar_days(self):
        # Less than 24 hours apart but on different days
        assert day_gap(datetime(2024, 6, 1, 23, 0), datetime(2024, 6, 2, 1, 0)) == 1
        # More than 24 hours apart on consecutive days
        assert day_gap(datetime(2024, 6, 1, 0, 30), datetime(2024, 6, 2, 23, 30)) == 1
        assert day_gap(datetime(2024, 6, 1, 8, 0), datetime(2024, 6, 1, 22, 0)) == 0
        assert day_gap(datetime(2024, 6, 1), datetime(2024, 6, 4)) == 3

    def test_local_day(self):
        assert local_day(datetime(2024, 6, 1, 23, 59)) == date(2024, 6, 1)

    def test_today_or_yesterday(self):
        today = date(2024, 6, 10)
        assert is_today_or_yesterday(date(2024, 6, 10), today)
        assert is_today_or_yesterday(date(2024, 6, 9), today)
        assert not is_today_or_yesterday(date(2024, 6, 8), today)
