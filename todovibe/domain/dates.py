"""Local-calendar date utilities.

Every due-date comparison and grouping goes through this module so that
"today" and "upcoming" mean the same thing in the list views and in the
calendar. All arithmetic is done on the local calendar, not in UTC:
timestamps are converted with ``datetime.astimezone()`` first, and naive
datetimes are read as local wall time.

Weeks start on Sunday; weekday numbers are 0 (Sunday) to 6 (Saturday).
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

DAYS_PER_WEEK = 7


def to_local(dt: datetime) -> datetime:
    """Return ``dt`` as an aware datetime in the local timezone."""
    return dt.astimezone()


def start_of_day(dt: datetime) -> datetime:
    """Return local midnight of the day ``dt`` falls on."""
    local = to_local(dt)
    return datetime.combine(local.date(), time.min).astimezone()


def add_days(dt: datetime, days: int) -> datetime:
    """Move ``dt`` by whole calendar days, keeping the local wall time."""
    local = to_local(dt)
    return datetime.combine(local.date() + timedelta(days=days), local.time()).astimezone()


def is_same_day(a: datetime, b: datetime) -> bool:
    """Check whether two timestamps fall on the same local calendar day."""
    return to_local(a).date() == to_local(b).date()


def is_within_next_days(dt: datetime, start: datetime, days: int) -> bool:
    """Check whether ``dt`` lies inside the next ``days`` days from ``start``.

    The window is open at both ends: ``dt`` must be strictly after local
    midnight of ``start`` and strictly before local midnight of
    ``start + days``. A timestamp at exactly midnight of either boundary
    day is outside the window.
    """
    lower = start_of_day(start)
    upper = start_of_day(add_days(start, days))
    return lower < to_local(dt) < upper


def day_key(dt: datetime) -> str:
    """Return the local calendar day of ``dt`` as ``YYYY-MM-DD``."""
    return to_local(dt).date().isoformat()


def parse_day_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key back into a date."""
    return date.fromisoformat(key)


def parse_local_date(text: str) -> datetime:
    """Parse user input into an aware local datetime.

    A bare ``YYYY-MM-DD`` becomes local midnight of that day. Full ISO
    timestamps are accepted too; naive ones are read as local time.

    Raises:
        ValueError: If ``text`` is not an ISO date or datetime.
    """
    text = text.strip()
    try:
        day = date.fromisoformat(text)
    except ValueError:
        return datetime.fromisoformat(text).astimezone()
    return datetime.combine(day, time.min).astimezone()


def sunday_weekday(d: date) -> int:
    """Weekday number with Sunday as 0."""
    return (d.weekday() + 1) % DAYS_PER_WEEK


def week_start(d: date) -> date:
    """Return the Sunday that starts the week containing ``d``."""
    return d - timedelta(days=sunday_weekday(d))


def week_days(d: date | datetime) -> list[date]:
    """Return the seven days, Sunday first, of the week containing ``d``."""
    if isinstance(d, datetime):
        d = to_local(d).date()
    first = week_start(d)
    return [first + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return the (year, month) that is ``delta`` months away."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


@dataclass(frozen=True)
class MonthGrid:
    """Cells of a month view.

    The grid starts with ``first_weekday`` blank cells (``None``) so that
    day 1 lands in its weekday column, followed by one cell per day.

    Example:
        grid = month_grid(2024, 2)
        grid.first_weekday  # 4 (Thursday)
        grid.days_in_month  # 29
    """

    year: int
    month: int
    first_weekday: int
    days_in_month: int

    @property
    def cells(self) -> list[date | None]:
        """Leading blanks followed by every day of the month."""
        blanks: list[date | None] = [None] * self.first_weekday
        days = [date(self.year, self.month, day) for day in range(1, self.days_in_month + 1)]
        return blanks + days

    def weeks(self) -> list[list[date | None]]:
        """Split the cells into rows of seven, padding the last row."""
        cells = self.cells
        rows = [cells[i : i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]
        if rows and len(rows[-1]) < DAYS_PER_WEEK:
            rows[-1] = rows[-1] + [None] * (DAYS_PER_WEEK - len(rows[-1]))
        return rows


def month_grid(year: int, month: int) -> MonthGrid:
    """Build the month-view grid for ``year``/``month``.

    Raises:
        ValueError: If ``month`` is not in 1..12.
    """
    monday_based, days_in_month = calendar.monthrange(year, month)
    return MonthGrid(
        year=year,
        month=month,
        first_weekday=(monday_based + 1) % DAYS_PER_WEEK,
        days_in_month=days_in_month,
    )
