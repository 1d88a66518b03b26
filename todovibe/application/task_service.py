"""Task application service.

Turns user actions into a new flat task collection. Each action takes
the current collection and returns ``Ok((new_collection, event))`` or
``Err(message)``; the input collection is never modified, and the
returned one is what the caller persists.

All functions are pure - no I/O, no side effects.
"""

from collections.abc import Callable
from datetime import datetime

from pydantic import BaseModel

from todovibe.domain.shared import Err, Ok, Result
from todovibe.domain.task import (
    UPCOMING_DAYS,
    EmptyTitleError,
    Task,
    TaskAdded,
    TaskCompleted,
    TaskDeleted,
    TaskRenamed,
    TaskReopened,
    TaskRescheduled,
    TaskView,
    ancestor_ids,
    count_visible,
    create_task,
    descendant_ids,
    find_task,
    live_index,
    set_completed,
    set_due_date,
    soft_delete,
    toggle_complete,
    update_title,
)
from todovibe.domain.task.mutators import utc_now


class TaskStats(BaseModel):
    """Counts over the live tasks for summary display."""

    total: int
    active: int
    completed: int
    inbox: int
    today: int
    upcoming: int

    @property
    def progress_percent(self) -> float:
        """Calculate completion percentage."""
        if self.total == 0:
            return 0.0
        return round(self.completed / self.total * 100, 1)


def _replace(tasks: list[Task], updated: dict[str, Task]) -> list[Task]:
    return [updated.get(task.id, task) for task in tasks]


def _not_found(task_id: str) -> Err[str]:
    return Err(f"Task not found: {task_id}")


# =============================================================================
# Cascading Policies
# =============================================================================


def cascade_completion(
    tasks: list[Task],
    task_id: str,
    now: datetime | None = None,
) -> tuple[list[Task], list[str]]:
    """Complete ancestors whose whole subtree is now complete.

    Ancestors are checked nearest first against the collection as
    updated so far, so completing a parent can in turn complete the
    grandparent. An ancestor that is already completed is left alone.

    Returns:
        The new collection and the ids of auto-completed ancestors.
    """
    current = list(tasks)
    cascaded: list[str] = []
    for ancestor_id in ancestor_ids(task_id, current):
        live = live_index(current)
        ancestor = live[ancestor_id]
        if ancestor.completed:
            continue
        descendants = descendant_ids(ancestor_id, current)
        if descendants and all(live[d].completed for d in descendants):
            current = _replace(current, {ancestor_id: set_completed(ancestor, True, now)})
            cascaded.append(ancestor_id)
    return current, cascaded


def toggle_task(
    tasks: list[Task],
    task_id: str,
    now: datetime | None = None,
) -> Result[tuple[list[Task], TaskCompleted | TaskReopened], str]:
    """Flip a task's completion, cascading completion upward.

    Reopening a task does not touch its ancestors.

    Args:
        tasks: Current collection.
        task_id: Id of the live task to toggle.
        now: Time of the change.

    Returns:
        Ok((new_tasks, TaskCompleted | TaskReopened)), or Err(str) if
        the task does not exist or was deleted.
    """
    task = find_task(task_id, tasks)
    if task is None:
        return _not_found(task_id)

    timestamp = now or utc_now()
    toggled = toggle_complete(task, timestamp)
    updated = _replace(tasks, {task.id: toggled})
    if not toggled.completed:
        return Ok((updated, TaskReopened(task_id=task.id)))

    updated, cascaded = cascade_completion(updated, task.id, timestamp)
    return Ok((updated, TaskCompleted(task_id=task.id, cascaded_ids=cascaded)))


def complete_task(
    tasks: list[Task],
    task_id: str,
    now: datetime | None = None,
) -> Result[tuple[list[Task], TaskCompleted], str]:
    """Mark a task completed (idempotent), cascading completion upward."""
    task = find_task(task_id, tasks)
    if task is None:
        return _not_found(task_id)

    timestamp = now or utc_now()
    updated = _replace(tasks, {task.id: set_completed(task, True, timestamp)})
    updated, cascaded = cascade_completion(updated, task.id, timestamp)
    return Ok((updated, TaskCompleted(task_id=task.id, cascaded_ids=cascaded)))


def delete_task(
    tasks: list[Task],
    task_id: str,
    now: datetime | None = None,
) -> Result[tuple[list[Task], TaskDeleted], str]:
    """Soft-delete a task together with its entire subtree.

    The whole subtree is tombstoned in a single new collection; there is
    no partially deleted state.
    """
    task = find_task(task_id, tasks)
    if task is None:
        return _not_found(task_id)

    timestamp = now or utc_now()
    descendants = descendant_ids(task.id, tasks)
    targets = {task.id} | descendants
    updated = [soft_delete(t, timestamp) if t.id in targets else t for t in tasks]

    deleted_ids = [task.id] + [t.id for t in tasks if t.id in descendants]
    return Ok((updated, TaskDeleted(task_ids=deleted_ids)))


# =============================================================================
# Other User Actions
# =============================================================================


def add_task(
    tasks: list[Task],
    title: str,
    *,
    due_at: datetime | None = None,
    parent_id: str | None = None,
    now: datetime | None = None,
    new_id: Callable[[], str] | None = None,
) -> Result[tuple[list[Task], TaskAdded], str]:
    """Create a task (or a subtask of ``parent_id``) and append it.

    Returns:
        Ok((new_tasks, TaskAdded)), or Err(str) for a blank title, an
        unknown parent or an id that is already taken.
    """
    if parent_id is not None and find_task(parent_id, tasks) is None:
        return Err(f"Parent task not found: {parent_id}")

    try:
        task = create_task(title, due_at=due_at, parent_id=parent_id, now=now, new_id=new_id)
    except EmptyTitleError as e:
        return Err(str(e))

    if any(existing.id == task.id for existing in tasks):
        return Err(f"Task id already in use: {task.id}")

    event = TaskAdded(task_id=task.id, title=task.title, parent_id=task.parent_id)
    return Ok(([*tasks, task], event))


def rename_task(
    tasks: list[Task],
    task_id: str,
    title: str,
    now: datetime | None = None,
) -> Result[tuple[list[Task], TaskRenamed | None], str]:
    """Retitle a task.

    A blank title keeps the task as it was; the result is then
    ``Ok((tasks, None))``.
    """
    task = find_task(task_id, tasks)
    if task is None:
        return _not_found(task_id)

    renamed = update_title(task, title, now)
    if renamed is task:
        return Ok((list(tasks), None))

    event = TaskRenamed(task_id=task.id, title=renamed.title, tags=renamed.tags)
    return Ok((_replace(tasks, {task.id: renamed}), event))


def schedule_task(
    tasks: list[Task],
    task_id: str,
    due_at: datetime | None,
    now: datetime | None = None,
) -> Result[tuple[list[Task], TaskRescheduled], str]:
    """Set or clear (``due_at=None``) a task's own due date."""
    task = find_task(task_id, tasks)
    if task is None:
        return _not_found(task_id)

    event = TaskRescheduled(task_id=task.id, due_at=due_at)
    return Ok((_replace(tasks, {task.id: set_due_date(task, due_at, now)}), event))


# =============================================================================
# Summaries
# =============================================================================


def get_task_stats(
    tasks: list[Task],
    now: datetime | None = None,
    *,
    upcoming_days: int = UPCOMING_DAYS,
) -> TaskStats:
    """Count live tasks overall and per list view."""
    timestamp = now or utc_now()
    live = list(live_index(tasks).values())

    def count(view: TaskView) -> int:
        return count_visible(live, view, timestamp, upcoming_days=upcoming_days)

    completed = sum(1 for task in live if task.completed)
    return TaskStats(
        total=len(live),
        active=len(live) - completed,
        completed=completed,
        inbox=count(TaskView.INBOX),
        today=count(TaskView.TODAY),
        upcoming=count(TaskView.UPCOMING),
    )
