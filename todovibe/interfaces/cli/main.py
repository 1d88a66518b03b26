"""Entry point for the todovibe CLI.

Usage:
    python -m todovibe.interfaces.cli.main

Or via installed entry point:
    todovibe <command>
"""

from todovibe.interfaces.cli import app


def main() -> None:
    """Run the todovibe CLI application."""
    app()


if __name__ == "__main__":
    main()
