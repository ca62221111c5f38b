"""Tests for the day, time, guest, phone, and name parsers."""

from datetime import datetime

import pytest

from src.conversation.slot_parsers import (
    DAYS,
    DaySlot,
    parse_day,
    parse_guests,
    parse_name,
    parse_phone,
    parse_time,
)
from tests.conftest import FIXED_NOW


class TestParseDay:
    @pytest.mark.parametrize("day", DAYS)
    def test_weekday_in_any_case(self, day):
        expected = day.capitalize()
        assert parse_day(f"How about {day.upper()}?") == DaySlot(expected, expected)
        assert parse_day(day) == DaySlot(expected, expected)

    def test_substring_match(self):
        assert parse_day("fridays are best").day == "Friday"

    def test_first_in_list_order_wins(self):
        # Sunday precedes Monday in the scan order even though Monday comes first in text
        assert parse_day("not monday, maybe sunday").day == "Sunday"

    def test_today_resolves_to_current_weekday(self):
        slot = parse_day("today please", now=FIXED_NOW)
        assert slot == DaySlot(day="Monday", date_label="Today")

    def test_tomorrow_resolves_to_next_weekday(self):
        slot = parse_day("Tomorrow", now=FIXED_NOW)
        assert slot == DaySlot(day="Tuesday", date_label="Tomorrow")

    def test_tomorrow_wraps_from_saturday_to_sunday(self):
        saturday = datetime(2026, 10, 24)
        assert parse_day("tomorrow", now=saturday).day == "Sunday"

    def test_weekday_beats_today(self):
        assert parse_day("today or thursday", now=FIXED_NOW).date_label == "Thursday"

    def test_no_day_found(self):
        assert parse_day("next week sometime") is None
        assert parse_day("") is None


class TestParseTime:
    def test_pm(self):
        assert parse_time("7pm") == "7:00 PM"

    def test_am(self):
        assert parse_time("11am") == "11:00 AM"

    def test_small_hour_without_meridiem_is_pm(self):
        assert parse_time("3") == "3:00 PM"

    def test_larger_hour_without_meridiem_is_am(self):
        assert parse_time("7") == "7:00 AM"

    def test_minutes_and_space_before_meridiem(self):
        assert parse_time("around 8:30 pm") == "8:30 PM"

    def test_uppercase_meridiem(self):
        assert parse_time("7PM") == "7:00 PM"

    def test_noon_and_midnight(self):
        assert parse_time("12pm") == "12:00 PM"
        assert parse_time("12am") == "12:00 AM"

    def test_24_hour_clock(self):
        assert parse_time("19:45") == "7:45 PM"

    def test_no_digits(self):
        assert parse_time("evening") is None

    def test_impossible_values_rejected(self):
        assert parse_time("25") is None
        assert parse_time("7:75") is None
        assert parse_time("13pm") is None

    def test_skips_impossible_token_before_valid_one(self):
        assert parse_time("the 25th at 7pm") == "7:00 PM"
        assert parse_time("table 9:75 or 8pm") == "8:00 PM"


class TestParseGuests:
    @pytest.mark.parametrize("text", ["0", "21", "two", "", "a big group"])
    def test_rejected(self, text):
        assert parse_guests(text) is None

    @pytest.mark.parametrize("text,expected", [("1", 1), ("20", 20), ("table for 4", 4)])
    def test_accepted(self, text, expected):
        assert parse_guests(text) == expected

    def test_first_number_wins(self):
        assert parse_guests("4 or maybe 6") == 4


class TestParsePhone:
    def test_plain_digits(self):
        assert parse_phone("9876543210") == "9876543210"

    def test_keeps_separators(self):
        assert parse_phone("+61 (412) 345-678") == "+61 (412) 345-678"

    def test_trims_surrounding_whitespace(self):
        assert parse_phone("my number is  0412 345 678  ") == "0412 345 678"

    def test_too_short(self):
        assert parse_phone("call 123") is None

    def test_no_digits(self):
        assert parse_phone("call me maybe") is None


class TestParseName:
    def test_valid(self):
        assert parse_name("  Jo ") == "Jo"

    def test_too_short(self):
        assert parse_name("A") is None
        assert parse_name("   ") is None
