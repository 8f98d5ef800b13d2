"""
Unit tests for calendar arithmetic.
"""

from datetime import date

import pytest

from polydate.core.error_handler import InvalidDateError
from polydate.processors.core.calendar_math import (
    build_datetime,
    date_to_iso_week,
    day_of_year_to_date,
    days_in_month,
    expand_two_digit_year,
    expand_year,
    half_start,
    is_leap_year,
    iso_week_to_date,
    iso_weeks_in_year,
    period_bounds,
    quarter_end,
    quarter_of,
    quarter_start,
    validate_date,
    validate_time,
)


class TestCalendarValidity:
    """Test suite for date and time validation"""

    @pytest.mark.unit
    @pytest.mark.parametrize("year, leap", [
        (2024, True), (2023, False), (2000, True), (1900, False), (2100, False),
    ])
    def test_is_leap_year(self, year, leap):
        assert is_leap_year(year) is leap

    @pytest.mark.unit
    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2024, 4) == 30
        assert days_in_month(2024, 12) == 31
        with pytest.raises(InvalidDateError):
            days_in_month(2024, 13)

    @pytest.mark.unit
    def test_validate_date(self):
        assert validate_date(2024, 2, 29) == date(2024, 2, 29)

    @pytest.mark.unit
    @pytest.mark.parametrize("year, month, day", [
        (2023, 2, 29), (2024, 4, 31), (2024, 0, 1), (2024, 13, 1), (2024, 1, 0), (0, 1, 1),
    ])
    def test_invalid_dates_are_never_clamped(self, year, month, day):
        with pytest.raises(InvalidDateError):
            validate_date(year, month, day)

    @pytest.mark.unit
    def test_validate_time(self):
        validate_time(23, 59, 59, 999999)
        for components in [(24, 0, 0), (12, 60, 0), (12, 0, 60)]:
            with pytest.raises(InvalidDateError):
                validate_time(*components)

    @pytest.mark.unit
    def test_leap_second_rejected(self):
        with pytest.raises(InvalidDateError):
            build_datetime(2016, 12, 31, 23, 59, 60)

    @pytest.mark.unit
    def test_build_datetime(self):
        value = build_datetime(2024, 3, 15, 14, 30)
        assert (value.year, value.month, value.day, value.hour, value.minute) == (2024, 3, 15, 14, 30)
        assert value.tzinfo is None


class TestIsoWeeks:
    """Test suite for ISO week dates"""

    @pytest.mark.unit
    @pytest.mark.parametrize("year, weeks", [(2020, 53), (2021, 52), (2024, 52), (2026, 53)])
    def test_iso_weeks_in_year(self, year, weeks):
        assert iso_weeks_in_year(year) == weeks

    @pytest.mark.unit
    @pytest.mark.parametrize("year, week, weekday, expected", [
        (2024, 1, 1, date(2024, 1, 1)),
        (2024, 15, 3, date(2024, 4, 10)),
        (2021, 1, 1, date(2021, 1, 4)),
        (2020, 53, 5, date(2021, 1, 1)),
        (2025, 1, 1, date(2024, 12, 30)),
    ])
    def test_iso_week_to_date(self, year, week, weekday, expected):
        assert iso_week_to_date(year, week, weekday) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("year, week, weekday", [
        (2021, 53, 1), (2024, 0, 1), (2024, 54, 1), (2024, 10, 0), (2024, 10, 8),
    ])
    def test_invalid_week_dates(self, year, week, weekday):
        with pytest.raises(InvalidDateError):
            iso_week_to_date(year, week, weekday)

    @pytest.mark.unit
    def test_date_to_iso_week_round_trip(self):
        assert date_to_iso_week(date(2021, 1, 1)) == (2020, 53, 5)
        assert iso_week_to_date(*date_to_iso_week(date(2024, 12, 30))) == date(2024, 12, 30)

    @pytest.mark.unit
    @pytest.mark.parametrize("year", range(1990, 2040))
    def test_every_week_date_round_trips(self, year):
        for week in range(1, iso_weeks_in_year(year) + 1):
            for weekday in range(1, 8):
                value = iso_week_to_date(year, week, weekday)
                assert value.isocalendar()[:3] == (year, week, weekday)
                assert date_to_iso_week(value) == (year, week, weekday)


class TestPeriods:
    """Test suite for quarter and period boundaries"""

    @pytest.mark.unit
    @pytest.mark.parametrize("quarter, expected", [
        (1, date(2024, 1, 1)), (2, date(2024, 4, 1)), (3, date(2024, 7, 1)), (4, date(2024, 10, 1)),
    ])
    def test_quarter_start(self, quarter, expected):
        assert quarter_start(2024, quarter) == expected

    @pytest.mark.unit
    def test_quarter_end_and_of(self):
        assert quarter_end(2024, 1) == date(2024, 3, 31)
        assert quarter_end(2024, 4) == date(2024, 12, 31)
        assert quarter_of(8) == 3
        with pytest.raises(InvalidDateError):
            quarter_start(2024, 5)

    @pytest.mark.unit
    def test_half_start(self):
        assert half_start(2024, 2) == date(2024, 7, 1)
        with pytest.raises(InvalidDateError):
            half_start(2024, 3)

    @pytest.mark.unit
    def test_day_of_year(self):
        assert day_of_year_to_date(2024, 60) == date(2024, 2, 29)
        assert day_of_year_to_date(2024, 366) == date(2024, 12, 31)
        with pytest.raises(InvalidDateError):
            day_of_year_to_date(2023, 366)

    @pytest.mark.unit
    @pytest.mark.parametrize("unit, expected", [
        ("day", (date(2024, 2, 14), date(2024, 2, 14))),
        ("week", (date(2024, 2, 12), date(2024, 2, 18))),
        ("month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("quarter", (date(2024, 1, 1), date(2024, 3, 31))),
        ("year", (date(2024, 1, 1), date(2024, 12, 31))),
    ])
    def test_period_bounds(self, unit, expected):
        assert period_bounds(date(2024, 2, 14), unit) == expected

    @pytest.mark.unit
    def test_period_bounds_unknown_unit(self):
        with pytest.raises(InvalidDateError):
            period_bounds(date(2024, 2, 14), "hour")


class TestYearExpansion:
    """Test suite for two-digit year expansion"""

    @pytest.mark.unit
    @pytest.mark.parametrize("year, expected", [
        (0, 2000), (5, 2005), (30, 2030), (69, 2069), (70, 1970), (99, 1999), (2024, 2024),
    ])
    def test_expand_two_digit_year(self, year, expected):
        assert expand_two_digit_year(year) == expected

    @pytest.mark.unit
    def test_expand_year_token(self):
        assert expand_year("24") == 2024
        assert expand_year("1987") == 1987
        with pytest.raises(InvalidDateError):
            expand_year("2k")
