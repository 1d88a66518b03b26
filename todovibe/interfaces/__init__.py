"""Interfaces layer for todovibe.

Adapters for external interaction. Currently the command line (Typer).
The interfaces layer accepts user input, calls application services
and formats output; it holds no task logic of its own.
"""

from todovibe.interfaces.cli import app

__all__ = ["app"]
