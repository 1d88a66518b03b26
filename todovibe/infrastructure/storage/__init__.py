"""Storage infrastructure for todovibe.

Persists the flat task collection as a versioned JSON snapshot.
"""

from todovibe.infrastructure.storage.repositories import TaskRepository

__all__ = [
    "TaskRepository",
]
