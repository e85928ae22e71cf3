"""Test calendar and interval helpers."""
from datetime import date, datetime

from occupancy_forecast.services.dates import (
    add_months, days_in_month, month_end, trailing_months, overlap_days,
    stay_days, round_half_up, parse_date, parse_datetime, first_match, month_label,
)


def test_days_in_month_leap_years():
    assert days_in_month(date(2024, 2, 10)) == 29
    assert days_in_month(date(2023, 2, 10)) == 28
    assert days_in_month(date(2100, 2, 1)) == 28
    assert month_end(date(2024, 4, 3)) == date(2024, 4, 30)


def test_add_months_crosses_year_boundaries():
    assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 1)
    assert add_months(date(2024, 1, 31), -1) == date(2023, 12, 1)
    assert add_months(date(2024, 5, 15), 0) == date(2024, 5, 1)


def test_trailing_months_oldest_first_ending_at_anchor():
    months = trailing_months(date(2024, 2, 29), 3)
    assert months == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]
    assert len(trailing_months(date(2024, 2, 29), 12)) == 12


def test_overlap_days_inclusive():
    jan_start, jan_end = date(2024, 1, 1), date(2024, 1, 31)
    assert overlap_days(date(2024, 1, 10), date(2024, 1, 20), jan_start, jan_end) == 11
    assert overlap_days(date(2024, 1, 25), date(2024, 2, 5), jan_start, jan_end) == 7
    assert overlap_days(date(2023, 12, 1), date(2024, 3, 1), jan_start, jan_end) == 31
    assert overlap_days(date(2024, 2, 1), date(2024, 2, 5), jan_start, jan_end) == 0


def test_stay_days_counts_both_ends():
    assert stay_days(date(2024, 1, 10), date(2024, 1, 20)) == 11
    assert stay_days(date(2024, 1, 10), date(2024, 1, 10)) == 1


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(55.1) == 55
    assert round_half_up(35.48) == 35
    assert round_half_up(0.5) == 1


def test_parse_date_formats():
    assert parse_date("2024-01-10") == date(2024, 1, 10)
    assert parse_date("2024-01-10T08:30:00Z") == date(2024, 1, 10)
    assert parse_date("01/10/2024") == date(2024, 1, 10)
    assert parse_date(datetime(2024, 1, 10, 5)) == date(2024, 1, 10)
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_parse_datetime_formats():
    assert parse_datetime("2024-01-15 10:30:00") == datetime(2024, 1, 15, 10, 30)
    assert parse_datetime("2024-01-15") == datetime(2024, 1, 15)
    assert parse_datetime(date(2024, 1, 15)) == datetime(2024, 1, 15)
    assert parse_datetime("2024-01-15T10:30:00Z").tzinfo is not None
    assert parse_datetime("garbage") is None


def test_first_match_returns_first_hit():
    tiers = [(70, "high"), (40, "mid"), (0, "low")]
    assert first_match(tiers, lambda t: 85 >= t[0]) == (70, "high")
    assert first_match(tiers, lambda t: 40 >= t[0]) == (40, "mid")
    assert first_match(tiers, lambda t: -1 >= t[0]) is None
    assert first_match([], lambda t: True) is None


def test_month_label():
    assert month_label(date(2024, 1, 1)) == "Jan 24"
