"""CLI interface for todovibe using Typer.

Usage:
    todovibe add "Buy milk #errand" --due 2024-01-05
    todovibe list --view today
    todovibe done 3f2a
    todovibe calendar month --month 2024-01

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (task, calendar)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from typing import Optional

import typer

from todovibe import __version__
from todovibe.domain.task import TaskView
from todovibe.interfaces.cli.commands import calendar, task
from todovibe.interfaces.cli.common import StoreOption

app = typer.Typer(
    name="todovibe",
    help="Personal tasks with subtasks, tags, due dates and views",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"todovibe version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output"),
) -> None:
    """todovibe - a personal task list.

    Tasks live in a local JSON store. Subtasks inherit due dates from
    their parents, and completing every subtask completes the parent.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(calendar.app, name="calendar")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title; #words become tags"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
    parent: Optional[str] = typer.Option(
        None, "--parent", "-p", help="Parent task id or id prefix"
    ),
    store: StoreOption = None,
) -> None:
    """Add a task (shortcut for 'task add')."""
    task.add(title=title, due=due, parent=parent, store=store)


@app.command("list")
def list_tasks(
    view: TaskView = typer.Option(
        TaskView.INBOX, "--view", help="View to show", case_sensitive=False
    ),
    search: str = typer.Option("", "--search", "-q", help="Filter by title or tag"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every live task"),
    store: StoreOption = None,
) -> None:
    """List tasks (shortcut for 'task list')."""
    task.list_tasks(view=view, search=search, show_all=show_all, store=store)


@app.command("done")
def done(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    store: StoreOption = None,
) -> None:
    """Toggle completion (shortcut for 'task done')."""
    task.done(task_ref=task_ref, store=store)


__all__ = ["app"]
