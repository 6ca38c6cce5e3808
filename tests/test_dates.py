"""Tests for calendar helpers."""

from datetime import date, datetime, timedelta

import pytest

from daily_track.dates import (
    WEEKDAYS,
    current_week_dates,
    format_date,
    is_valid_date_string,
    normalize_frequency,
    parse_date,
    today,
    weekday_of,
)
from daily_track.errors import InvalidDate, ValidationError


def test_today_uses_reference_date():
    assert today(date(2024, 3, 7)) == "2024-03-07"
    assert today(datetime(2024, 12, 31, 23, 59)) == "2024-12-31"


def test_today_defaults_to_system_clock():
    assert today() == date.today().strftime("%Y-%m-%d")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-01-01", "mon"),
        ("2024-02-29", "thu"),
        ("2024-06-15", "sat"),
        ("2024-06-16", "sun"),
        ("1999-12-31", "fri"),
    ],
)
def test_weekday_of(value, expected):
    assert weekday_of(value) == expected


def test_weekday_of_rejects_invalid_date():
    with pytest.raises(InvalidDate):
        weekday_of("2024-13-01")


class TestCurrentWeekDates:
    def test_midweek(self):
        assert current_week_dates(date(2024, 6, 12)) == [
            "2024-06-10",
            "2024-06-11",
            "2024-06-12",
            "2024-06-13",
            "2024-06-14",
            "2024-06-15",
            "2024-06-16",
        ]

    def test_sunday_belongs_to_week_started_six_days_earlier(self):
        week = current_week_dates(date(2024, 6, 16))
        assert week[0] == "2024-06-10"
        assert week[-1] == "2024-06-16"

    def test_monday_starts_its_own_week(self):
        assert current_week_dates("2024-06-17")[0] == "2024-06-17"

    def test_spans_month_and_year_boundaries(self):
        week = current_week_dates(date(2025, 1, 1))
        assert week[0] == "2024-12-30"
        assert week[-1] == "2025-01-05"

    @pytest.mark.parametrize("offset", range(14))
    def test_seven_consecutive_days_from_monday_containing_reference(self, offset):
        reference = date(2024, 2, 26) + timedelta(days=offset)
        week = current_week_dates(reference)
        days = [parse_date(value) for value in week]
        assert len(days) == 7
        assert days[0].weekday() == 0
        assert all(later - earlier == timedelta(days=1) for earlier, later in zip(days, days[1:]))
        assert format_date(reference) in week

    def test_defaults_to_today(self):
        assert today() in current_week_dates()


class TestIsValidDateString:
    @pytest.mark.parametrize("value", ["2024-02-29", "2023-12-31", "2000-02-29", "0001-01-01"])
    def test_accepts_real_dates(self, value):
        assert is_valid_date_string(value)

    @pytest.mark.parametrize(
        "value",
        [
            "2024-02-30",
            "2023-02-29",
            "1900-02-29",
            "2024-2-5",
            "2024-02-5",
            "24-02-05",
            "2024/02/05",
            "2024-13-01",
            "2024-00-10",
            "0000-01-01",
            "2024-02-05\n",
            " 2024-02-05",
            "2024-02-05T00:00",
            "",
            None,
            20240205,
        ],
    )
    def test_rejects_malformed_or_impossible_dates(self, value):
        assert not is_valid_date_string(value)


def test_parse_date():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    with pytest.raises(InvalidDate):
        parse_date("2024-02-30")


class TestNormalizeFrequency:
    def test_orders_and_deduplicates(self):
        assert normalize_frequency(["fri", "mon", "fri", "wed"]) == ["mon", "wed", "fri"]

    def test_full_week(self):
        assert normalize_frequency(list(reversed(WEEKDAYS))) == list(WEEKDAYS)

    @pytest.mark.parametrize("value", [[], None, "mon", ["mon", "funday"], ["Mon"]])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            normalize_frequency(value)
