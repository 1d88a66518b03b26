"""Task domain - the task collection and everything derived from it.

All exports are pure (no I/O, no side effects).

Key Types:
    Task - The persisted task record
    TaskTreeNode - A live task placed in the derived tree
    TaskView - Named view filters
    EmptyTitleError - Raised for a blank new task title

Mutators:
    create_task, toggle_complete, set_completed, update_title,
    set_due_date, soft_delete

Tree Functions:
    build_tree - Forest of live tasks ordered by creation
    flatten - Depth-first pre-order listing
    descendant_ids / ancestor_ids / ancestor_titles
    effective_due_date / inherited_due_date - Own or inherited deadline
    resolve_parents - Cycle-free parent links shared by every walk

View Functions:
    is_visible - Per-view predicate
    count_visible - Per-view task count
    matches_search - Title/tag search
    bucket_by_day - Calendar grouping of leaf tasks
    tasks_for_view / view_nodes - Filtered listings

Domain Events:
    TaskAdded, TaskCompleted, TaskReopened, TaskRenamed,
    TaskRescheduled, TaskDeleted
"""

from .events import (
    DomainEvent,
    TaskAdded,
    TaskCompleted,
    TaskDeleted,
    TaskRenamed,
    TaskReopened,
    TaskRescheduled,
)
from .models import CURRENT_VERSION, EmptyTitleError, Task, TaskTreeNode, TaskView
from .mutators import (
    create_task,
    normalize_title,
    set_completed,
    set_due_date,
    soft_delete,
    toggle_complete,
    update_title,
)
from .tags import ExtractedTags, extract_tags
from .tree import (
    ParentLinks,
    ancestor_ids,
    ancestor_titles,
    build_tree,
    descendant_ids,
    effective_due_date,
    find_task,
    flatten,
    has_live_children,
    inherited_due_date,
    live_index,
    resolve_parents,
    walk_ancestors,
)
from .views import (
    UPCOMING_DAYS,
    bucket_by_day,
    count_visible,
    is_visible,
    matches_search,
    tasks_for_view,
    tasks_on_day,
    view_nodes,
)

__all__ = [
    # Models
    "CURRENT_VERSION",
    "Task",
    "TaskTreeNode",
    "TaskView",
    "EmptyTitleError",
    # Mutators
    "create_task",
    "toggle_complete",
    "set_completed",
    "update_title",
    "set_due_date",
    "soft_delete",
    "normalize_title",
    # Tags
    "ExtractedTags",
    "extract_tags",
    # Tree
    "build_tree",
    "flatten",
    "descendant_ids",
    "ancestor_ids",
    "ancestor_titles",
    "effective_due_date",
    "inherited_due_date",
    "find_task",
    "has_live_children",
    "live_index",
    "resolve_parents",
    "walk_ancestors",
    "ParentLinks",
    # Views
    "UPCOMING_DAYS",
    "is_visible",
    "count_visible",
    "matches_search",
    "bucket_by_day",
    "tasks_on_day",
    "tasks_for_view",
    "view_nodes",
    # Events
    "DomainEvent",
    "TaskAdded",
    "TaskCompleted",
    "TaskReopened",
    "TaskRenamed",
    "TaskRescheduled",
    "TaskDeleted",
]
