"""Task domain events.

Immutable records of what a user action changed in the collection.
The application layer returns one alongside every new collection so
callers can report what happened (including cascaded changes) without
diffing snapshots.

All events are pure data structures - no I/O, no side effects.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and timestamp.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}


class TaskAdded(DomainEvent):
    """A new task (or subtask) was created."""

    task_id: str
    title: str
    parent_id: str | None = None


class TaskCompleted(DomainEvent):
    """A task was marked completed.

    ``cascaded_ids`` lists ancestors that were completed automatically
    because all of their descendants became complete, nearest first.
    """

    task_id: str
    cascaded_ids: list[str] = Field(default_factory=list)


class TaskReopened(DomainEvent):
    """A completed task was marked incomplete again."""

    task_id: str


class TaskRenamed(DomainEvent):
    """A task's title (and tags) changed."""

    task_id: str
    title: str
    tags: tuple[str, ...] = ()


class TaskRescheduled(DomainEvent):
    """A task's own due date was set or cleared."""

    task_id: str
    due_at: datetime | None = None


class TaskDeleted(DomainEvent):
    """A task and its whole subtree were soft-deleted.

    ``task_ids`` holds the deleted task first, then its descendants.
    """

    task_ids: list[str]
