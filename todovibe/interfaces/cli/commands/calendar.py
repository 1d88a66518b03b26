"""Calendar CLI commands.

Month and week views of the task store. Only leaf tasks are placed on
days; a task with subtasks appears through its subtasks' dates.
"""

import calendar as stdlib_calendar
from datetime import datetime
from typing import Optional

import typer

from todovibe.domain.dates import month_grid, sunday_weekday, to_local, week_days
from todovibe.domain.task import bucket_by_day
from todovibe.domain.task.mutators import utc_now
from todovibe.interfaces.cli.common import (
    StoreOption,
    format_task_line,
    get_repository,
    parse_date_option,
    print_error,
    print_info,
)

app = typer.Typer(help="Calendar views")

WEEKDAY_HEADER = "Su Mo Tu We Th Fr Sa"
WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@app.command("month")
def month(
    month_ref: Optional[str] = typer.Option(
        None, "--month", "-m", help="Month to show (YYYY-MM, default: current)"
    ),
    store: StoreOption = None,
) -> None:
    """Show a month grid; days with tasks are marked with '*'."""
    if month_ref:
        try:
            anchor = datetime.strptime(month_ref, "%Y-%m")
        except ValueError:
            print_error(f"Invalid month '{month_ref}'. Use YYYY-MM.")
            raise typer.Exit(1)
    else:
        anchor = to_local(utc_now())

    grid = month_grid(anchor.year, anchor.month)
    buckets = bucket_by_day(get_repository(store).load())

    title = f"{stdlib_calendar.month_name[grid.month]} {grid.year}"
    typer.echo(title.center(len(WEEKDAY_HEADER)))
    typer.echo(WEEKDAY_HEADER)
    for week in grid.weeks():
        cells = []
        for day in week:
            if day is None:
                cells.append("   ")
            else:
                marker = "*" if day.isoformat() in buckets else " "
                cells.append(f"{day.day:2d}{marker}")
        typer.echo("".join(cells).rstrip())

    month_prefix = f"{grid.year:04d}-{grid.month:02d}-"
    days = sorted(key for key in buckets if key.startswith(month_prefix))
    if not days:
        print_info("No tasks due this month.")
        return
    for key in days:
        typer.echo("")
        typer.echo(key)
        for task in buckets[key]:
            typer.echo(format_task_line(task, 1))


@app.command("week")
def week(
    date: Optional[str] = typer.Option(
        None, "--date", "-d", help="Any day of the week to show (YYYY-MM-DD)"
    ),
    store: StoreOption = None,
) -> None:
    """Show the Sunday-to-Saturday week with each day's tasks."""
    anchor = parse_date_option(date) or utc_now()
    buckets = bucket_by_day(get_repository(store).load())

    for day in week_days(anchor):
        tasks = buckets.get(day.isoformat(), [])
        weekday = WEEKDAY_NAMES[sunday_weekday(day)]
        typer.echo(f"{weekday} {day.isoformat()}")
        for task in tasks:
            typer.echo(format_task_line(task, 1))
