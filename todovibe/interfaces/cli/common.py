"""Shared utilities for todovibe CLI commands.

This module provides common utilities used across CLI commands:
- Task store resolution
- Task lookup by id or id prefix
- Formatted output helpers (error, success, info)
- Task formatting for display
"""

from datetime import datetime, time
from pathlib import Path
from typing import Annotated, Optional

import typer

from todovibe.config import get_config, get_store_path
from todovibe.domain.dates import parse_local_date, to_local
from todovibe.domain.task import Task, TaskView
from todovibe.infrastructure.storage import TaskRepository

SHORT_ID_LENGTH = 8

# Reusable store option for CLI commands
# Usage: def my_command(store: StoreOption = None) -> None:
StoreOption = Annotated[
    Optional[str],
    typer.Option(
        "--store",
        "-s",
        help="Path to the task store (or set TODOVIBE_STORE env var)",
        envvar="TODOVIBE_STORE",
    ),
]

EMPTY_VIEW_MESSAGES: dict[TaskView, str] = {
    TaskView.INBOX: "Nothing here yet. Add a task with: todovibe add \"Title #tag\"",
    TaskView.TODAY: "Nothing due today. Tasks with a due date show up here.",
    TaskView.UPCOMING: "The next 7 days are free.",
    TaskView.COMPLETED: "No completed tasks yet.",
    TaskView.CALENDAR: "Use 'todovibe calendar month' to see the calendar.",
}


def get_repository(store: str | None = None) -> TaskRepository:
    """Return the repository for an explicit store path or the configured one."""
    if store:
        return TaskRepository(Path(store).expanduser())
    return TaskRepository(get_store_path(get_config()))


def resolve_task_id(tasks: list[Task], ref: str) -> str:
    """Find a live task by full id or unique id prefix.

    Args:
        tasks: The loaded collection.
        ref: Full id or a prefix of one.

    Returns:
        The matching task id.

    Raises:
        typer.Exit: If no live task matches, or the prefix is ambiguous.
    """
    live = [task for task in tasks if not task.is_deleted]
    for task in live:
        if task.id == ref:
            return task.id

    matches = [task for task in live if task.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0].id

    if not matches:
        print_error(f"No task matches '{ref}'.")
    else:
        print_error(f"'{ref}' matches {len(matches)} tasks; use a longer prefix.")
    raise typer.Exit(1)


def parse_date_option(value: str | None) -> datetime | None:
    """Parse a --due/--date value, exiting with an error when invalid."""
    if value is None:
        return None
    try:
        return parse_local_date(value)
    except ValueError:
        print_error(f"Invalid date '{value}'. Use YYYY-MM-DD.")
        raise typer.Exit(1)


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    """Print a separator line."""
    typer.echo(char * width)


def short_id(task: Task) -> str:
    return task.id[:SHORT_ID_LENGTH]


def format_due(due: datetime) -> str:
    """Local date, plus the time when it is not midnight."""
    local = to_local(due)
    if local.time() == time.min:
        return local.date().isoformat()
    return local.strftime("%Y-%m-%d %H:%M")


def format_task_line(task: Task, depth: int = 0, due: datetime | None = None) -> str:
    """One-line task summary: checkbox, short id, title, tags and due date.

    Args:
        task: Task to format.
        depth: Tree depth, used for indentation.
        due: Effective due date to show, if any.
    """
    box = "[x]" if task.completed else "[ ]"
    parts = [f"{'  ' * depth}{box} {short_id(task)}  {task.title}"]
    if task.tags:
        parts.append(" ".join(f"#{tag}" for tag in task.tags))
    if due is not None:
        inherited = "" if task.due_at is not None else " (inherited)"
        parts.append(f"due {format_due(due)}{inherited}")
    return "  ".join(parts)
