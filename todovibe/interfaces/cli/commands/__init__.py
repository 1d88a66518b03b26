"""CLI command groups for todovibe.

Each module provides a Typer app that gets registered with the main
app using app.add_typer().

Command groups:
- task: Task lifecycle (add, list, done, rename, due, delete, show, stats)
- calendar: Month and week views
"""

from todovibe.interfaces.cli.commands import calendar, task

__all__ = ["task", "calendar"]
