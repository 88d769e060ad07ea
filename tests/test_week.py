from datetime import date, datetime, timedelta

import pytest

from fitweek.core.week import week_dates, week_id


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 1, 1), "2024-W01"),
        (date(2023, 12, 31), "2023-W52"),
        (date(2020, 12, 31), "2020-W53"),
        (date(2021, 1, 3), "2020-W53"),
        (date(2024, 12, 30), "2025-W01"),
        (date(2026, 10, 19), "2026-W43"),
    ],
)
def test_week_id_uses_iso_year(day, expected):
    assert week_id(day) == expected


def test_week_id_accepts_datetime():
    assert week_id(datetime(2024, 1, 1, 23, 59)) == "2024-W01"


def test_week_dates_monday_to_sunday():
    dates = week_dates(date(2024, 1, 3))
    assert dates[0] == date(2024, 1, 1)
    assert dates[-1] == date(2024, 1, 7)
    assert [d.weekday() for d in dates] == list(range(7))
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))


def test_week_dates_from_sunday_goes_back_to_monday():
    dates = week_dates(date(2023, 12, 31))
    assert dates[0] == date(2023, 12, 25)
    assert dates[-1] == date(2023, 12, 31)


def test_week_dates_defaults_to_today():
    assert date.today() in week_dates()


def test_week_id_and_week_dates_agree_across_year_boundaries():
    day = date(2019, 12, 1)
    while day <= date(2027, 1, 31):
        wid = week_id(day)
        assert all(week_id(d) == wid for d in week_dates(day)), day
        day += timedelta(days=1)
