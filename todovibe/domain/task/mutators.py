"""Task constructors and mutators.

Every function here takes a Task and returns a new Task; the input is
never modified. The current time is passed in as ``now`` (defaulting to
the real clock) so callers can make results deterministic.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from uuid import uuid4

from .models import CURRENT_VERSION, EmptyTitleError, Task
from .tags import extract_tags


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


def new_task_id() -> str:
    """Default id generator."""
    return str(uuid4())


def normalize_title(raw: str) -> tuple[str, tuple[str, ...]]:
    """Split a raw title into its display title and tags.

    When the title consists only of tags, the trimmed raw text is kept
    as the title so it never ends up blank. Returns ``("", ())`` for a
    blank input.
    """
    trimmed = raw.strip()
    if not trimmed:
        return "", ()
    clean_title, tags = extract_tags(trimmed)
    return clean_title or trimmed, tags


def create_task(
    title: str,
    *,
    due_at: datetime | None = None,
    parent_id: str | None = None,
    now: datetime | None = None,
    new_id: Callable[[], str] | None = None,
) -> Task:
    """Create a new, incomplete task.

    Args:
        title: Raw title; ``#tag`` tokens are moved into ``tags``.
        due_at: Optional deadline.
        parent_id: Id of the parent task for a subtask.
        now: Creation time, defaults to the current time.
        new_id: Id generator, defaults to a random UUID string.

    Returns:
        The new Task.

    Raises:
        EmptyTitleError: If the title is blank.
    """
    clean_title, tags = normalize_title(title)
    if not clean_title:
        raise EmptyTitleError("Task title cannot be empty")

    timestamp = now or utc_now()
    return Task(
        id=(new_id or new_task_id)(),
        title=clean_title,
        completed=False,
        due_at=due_at,
        parent_id=parent_id,
        tags=tags,
        created_at=timestamp,
        updated_at=timestamp,
        deleted_at=None,
        version=CURRENT_VERSION,
    )


def toggle_complete(task: Task, now: datetime | None = None) -> Task:
    """Flip the completion flag."""
    return task.model_copy(
        update={"completed": not task.completed, "updated_at": now or utc_now()}
    )


def set_completed(task: Task, completed: bool, now: datetime | None = None) -> Task:
    """Set the completion flag to an explicit value."""
    return task.model_copy(update={"completed": completed, "updated_at": now or utc_now()})


def update_title(task: Task, title: str, now: datetime | None = None) -> Task:
    """Rename a task, re-extracting its tags.

    A blank new title returns the same task object; no error is raised.
    """
    clean_title, tags = normalize_title(title)
    if not clean_title:
        return task
    return task.model_copy(
        update={"title": clean_title, "tags": tags, "updated_at": now or utc_now()}
    )


def set_due_date(task: Task, due_at: datetime | None, now: datetime | None = None) -> Task:
    """Set or clear (``None``) the task's own due date."""
    return task.model_copy(update={"due_at": due_at, "updated_at": now or utc_now()})


def soft_delete(task: Task, now: datetime | None = None) -> Task:
    """Mark the task deleted; it stays in the collection as a tombstone."""
    timestamp = now or utc_now()
    return task.model_copy(update={"deleted_at": timestamp, "updated_at": timestamp})
