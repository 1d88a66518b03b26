"""Task domain models.

Pure domain models for the task collection. Uses Pydantic so the same
models validate stored snapshots and serialize back to them. Stored
JSON uses camelCase keys (``dueAt``, ``parentId``); Python code uses the
snake_case field names.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Schema version written into every new task and every saved snapshot
CURRENT_VERSION = 1


class EmptyTitleError(ValueError):
    """Raised when a new task would end up with a blank title."""


class TaskView(str, Enum):
    """Named filters over the task collection."""

    INBOX = "inbox"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    CALENDAR = "calendar"


class Task(BaseModel):
    """A unit of work with an optional deadline, parent and tags.

    Tasks are immutable values: every change goes through a mutator in
    ``todovibe.domain.task.mutators`` that returns a new instance. A task
    with ``deleted_at`` set is a tombstone. It stays in the collection
    but is excluded from every tree, view and traversal.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    title: str = Field(min_length=1)
    completed: bool = False
    due_at: datetime | None = None
    parent_id: str | None = None
    tags: tuple[str, ...] = ()
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    version: int = CURRENT_VERSION

    @property
    def is_deleted(self) -> bool:
        """True once the task has been soft-deleted."""
        return self.deleted_at is not None


class TaskTreeNode(BaseModel):
    """A live task placed in the derived tree.

    Nodes are rebuilt from the flat collection on every query and are
    never persisted. Roots have ``depth`` 0.
    """

    task: Task
    children: list["TaskTreeNode"] = Field(default_factory=list)
    depth: int = 0

    def is_leaf(self) -> bool:
        """Check if this node has no live subtasks."""
        return len(self.children) == 0
