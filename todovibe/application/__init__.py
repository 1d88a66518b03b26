"""Application service layer for todovibe.

Services combine domain functions into user actions over the flat task
collection. They perform no I/O: the caller loads the collection,
applies an action and saves the collection it gets back.

Example usage:
    >>> from todovibe.application import add_task, toggle_task
    >>> from todovibe.domain.shared import is_ok
    >>>
    >>> result = add_task(tasks, "Write report #work")
    >>> if is_ok(result):
    ...     tasks, event = result.value
"""

from todovibe.application.task_service import (
    TaskStats,
    add_task,
    cascade_completion,
    complete_task,
    delete_task,
    get_task_stats,
    rename_task,
    schedule_task,
    toggle_task,
)

__all__ = [
    "add_task",
    "toggle_task",
    "complete_task",
    "cascade_completion",
    "delete_task",
    "rename_task",
    "schedule_task",
    "get_task_stats",
    "TaskStats",
]
