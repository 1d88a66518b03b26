from datetime import date, datetime

import pytest

from todovibe.domain.dates import (
    add_days,
    day_key,
    is_same_day,
    is_within_next_days,
    month_grid,
    parse_day_key,
    parse_local_date,
    shift_month,
    start_of_day,
    to_local,
    week_days,
)


def test_is_same_day_ignores_time():
    assert is_same_day(datetime(2024, 1, 1, 0, 1), datetime(2024, 1, 1, 23, 59))
    assert not is_same_day(datetime(2024, 1, 1, 23, 59), datetime(2024, 1, 2, 0, 0))


def test_start_of_day_is_local_midnight():
    start = start_of_day(datetime(2024, 3, 10, 15, 45))
    assert start.date() == date(2024, 3, 10)
    assert (start.hour, start.minute, start.second) == (0, 0, 0)
    assert start.tzinfo is not None


def test_add_days_keeps_wall_time():
    moved = add_days(datetime(2024, 1, 30, 8, 15), 3)
    assert moved.date() == date(2024, 2, 2)
    assert (moved.hour, moved.minute) == (8, 15)


def test_within_next_days_is_exclusive_at_both_ends():
    start = datetime(2024, 1, 1)
    assert not is_within_next_days(datetime(2024, 1, 1), start, 7)
    assert is_within_next_days(datetime(2024, 1, 1, 0, 1), start, 7)
    assert is_within_next_days(datetime(2024, 1, 5), start, 7)
    assert is_within_next_days(datetime(2024, 1, 7, 23, 59), start, 7)
    assert not is_within_next_days(datetime(2024, 1, 8), start, 7)
    assert not is_within_next_days(datetime(2023, 12, 31, 12), start, 7)


def test_aware_and_naive_compare_in_local_time():
    naive = datetime(2024, 6, 1, 12, 0)
    assert is_same_day(naive, to_local(naive))


def test_day_key_round_trip():
    key = day_key(datetime(2024, 2, 29, 18, 0))
    assert key == "2024-02-29"
    assert parse_day_key(key) == date(2024, 2, 29)


def test_parse_local_date_accepts_dates_and_datetimes():
    midnight = parse_local_date("2024-01-05")
    assert midnight.date() == date(2024, 1, 5)
    assert midnight.hour == 0
    assert midnight.tzinfo is not None

    stamped = parse_local_date("2024-01-05T14:30")
    assert (stamped.hour, stamped.minute) == (14, 30)

    with pytest.raises(ValueError):
        parse_local_date("next tuesday")


def test_month_grid_leading_blanks():
    # 2024-02-01 is a Thursday
    grid = month_grid(2024, 2)
    assert grid.first_weekday == 4
    assert grid.days_in_month == 29
    cells = grid.cells
    assert cells[:4] == [None, None, None, None]
    assert cells[4] == date(2024, 2, 1)
    assert cells[-1] == date(2024, 2, 29)
    assert len(cells) == 4 + 29


def test_month_grid_starting_on_sunday():
    # 2023-10-01 is a Sunday
    grid = month_grid(2023, 10)
    assert grid.first_weekday == 0
    assert grid.cells[0] == date(2023, 10, 1)


def test_month_grid_weeks_are_padded_rows_of_seven():
    weeks = month_grid(2024, 2).weeks()
    assert all(len(week) == 7 for week in weeks)
    assert len(weeks) == 5
    assert weeks[-1][-1] is None


def test_month_grid_rejects_bad_month():
    with pytest.raises(ValueError):
        month_grid(2024, 13)


def test_week_days_start_on_sunday():
    days = week_days(date(2024, 1, 3))  # Wednesday
    assert days[0] == date(2023, 12, 31)
    assert days[-1] == date(2024, 1, 6)
    assert len(days) == 7


def test_week_days_from_sunday_itself():
    assert week_days(datetime(2024, 1, 7, 22, 0))[0] == date(2024, 1, 7)


@pytest.mark.parametrize(
    "year, month, delta, expected",
    [
        (2024, 1, 1, (2024, 2)),
        (2024, 12, 1, (2025, 1)),
        (2024, 1, -1, (2023, 12)),
        (2024, 5, -17, (2022, 12)),
    ],
)
def test_shift_month(year, month, delta, expected):
    assert shift_month(year, month, delta) == expected
