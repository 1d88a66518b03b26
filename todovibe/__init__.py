"""todovibe - personal task management with nested tasks, tags and views."""

__version__ = "0.1.0"
