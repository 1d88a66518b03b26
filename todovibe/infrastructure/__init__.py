"""Infrastructure layer for todovibe.

Wraps I/O behind small interfaces so the domain and application layers
stay pure.

Exports:
    Storage:
        - TaskRepository: Task collection persistence
"""

from todovibe.infrastructure.storage import TaskRepository

__all__ = [
    "TaskRepository",
]
