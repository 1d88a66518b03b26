"""Tree construction and traversal over the flat task collection.

All functions in this module are pure - no I/O, no side effects.
They take the flat collection in and return derived data out; the
collection itself is never modified.

Soft-deleted tasks are invisible to everything here. A ``parent_id``
that does not resolve to a live task makes the task a root. Parent
cycles are not expected in stored data; ``resolve_parents`` breaks them
once, and the tree, the ancestor walks and the descendant walks all
follow the same resolved links.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from todovibe.domain.dates import to_local

from .models import Task, TaskTreeNode

logger = logging.getLogger(__name__)

# Resolved task id -> parent id (None for roots), over live tasks only
ParentLinks = dict[str, str | None]


# =============================================================================
# Lookups
# =============================================================================


def live_index(tasks: Iterable[Task]) -> dict[str, Task]:
    """Map id -> task for every live task, preserving input order."""
    return {task.id: task for task in tasks if not task.is_deleted}


def find_task(task_id: str, tasks: Iterable[Task]) -> Task | None:
    """Return the live task with ``task_id``, or None."""
    for task in tasks:
        if task.id == task_id and not task.is_deleted:
            return task
    return None


def _link_parents(live: dict[str, Task]) -> tuple[ParentLinks, list[str]]:
    """Resolve parent links and report which tasks were cut out of a cycle."""
    order = {task_id: position for position, task_id in enumerate(live)}
    parents: ParentLinks = {
        task_id: task.parent_id if task.parent_id in live else None
        for task_id, task in live.items()
    }

    broken: list[str] = []
    for task_id in live:
        chain: list[str] = []
        seen: set[str] = set()
        current: str | None = task_id
        while current is not None and current not in seen:
            chain.append(current)
            seen.add(current)
            current = parents[current]
        if current is None:
            continue

        cycle = chain[chain.index(current) :]
        head = min(cycle, key=order.__getitem__)
        parents[head] = None
        broken.append(head)

    return parents, broken


def resolve_parents(live: dict[str, Task]) -> ParentLinks:
    """Resolve each live task's parent, breaking cycles.

    A parent that is missing or deleted resolves to None. When following
    parents leads back into a chain already walked, the cycle member
    listed first in the input becomes a root. The result has no cycles.

    Args:
        live: A ``live_index`` of the collection.
    """
    parents, _ = _link_parents(live)
    return parents


def children_index(tasks: Iterable[Task]) -> dict[str, list[str]]:
    """Map parent id -> ids of its live children, in input order."""
    index: dict[str, list[str]] = {}
    for task_id, parent_id in resolve_parents(live_index(tasks)).items():
        if parent_id is not None:
            index.setdefault(parent_id, []).append(task_id)
    return index


def has_live_children(task_id: str, tasks: Iterable[Task]) -> bool:
    """Check if any live task sits below ``task_id`` in the tree."""
    return task_id in children_index(tasks)


# =============================================================================
# Tree Building
# =============================================================================


def build_tree(tasks: list[Task]) -> list[TaskTreeNode]:
    """Build the forest of live tasks.

    Nodes are created for all live tasks before any linking, so a child
    listed before its parent still links correctly. Depth is assigned
    top-down from the roots. Every sibling list, roots included, is
    ordered by ``created_at`` ascending; ties keep input order.

    Args:
        tasks: The flat collection, in any order.

    Returns:
        Root nodes with their subtrees.
    """
    live = live_index(tasks)
    parents, broken = _link_parents(live)
    for head in broken:
        logger.warning(f"Parent cycle detected at {head}; treating it as a root")

    roots: list[str] = []
    children: dict[str, list[str]] = {task_id: [] for task_id in live}
    for task_id, parent_id in parents.items():
        if parent_id is None:
            roots.append(task_id)
        else:
            children[parent_id].append(task_id)

    def by_creation(ids: list[str]) -> list[str]:
        return sorted(ids, key=lambda task_id: to_local(live[task_id].created_at))

    def make_node(task_id: str, depth: int) -> TaskTreeNode:
        return TaskTreeNode(
            task=live[task_id],
            children=[make_node(child, depth + 1) for child in by_creation(children[task_id])],
            depth=depth,
        )

    return [make_node(task_id, 0) for task_id in by_creation(roots)]


def flatten(nodes: list[TaskTreeNode]) -> list[TaskTreeNode]:
    """Flatten a tree depth-first, parents before their children."""
    result: list[TaskTreeNode] = []

    def visit(node: TaskTreeNode) -> None:
        result.append(node)
        for child in node.children:
            visit(child)

    for node in nodes:
        visit(node)
    return result


# =============================================================================
# Ancestors and Descendants
# =============================================================================


def descendant_ids(task_id: str, tasks: Iterable[Task]) -> set[str]:
    """Collect ids of all live tasks below ``task_id``.

    Follows the resolved parent links downward through every level. The
    task itself is never included.
    """
    index = children_index(tasks)
    result: set[str] = set()
    stack = list(index.get(task_id, []))
    while stack:
        current = stack.pop()
        result.add(current)
        stack.extend(index.get(current, []))
    return result


def walk_ancestors(
    task: Task,
    live: dict[str, Task],
    parents: ParentLinks | None = None,
) -> list[Task]:
    """Live ancestors of ``task``, nearest parent first.

    Pass ``parents`` from ``resolve_parents`` when walking many tasks of
    the same collection.
    """
    if parents is None:
        parents = resolve_parents(live)
    ancestors: list[Task] = []
    parent_id = parents.get(task.id)
    while parent_id is not None:
        ancestors.append(live[parent_id])
        parent_id = parents[parent_id]
    return ancestors


def ancestor_ids(task_id: str, tasks: Iterable[Task]) -> list[str]:
    """Ids of the task's ancestors, nearest parent first.

    The walk stops at a root: a task without a parent, with a missing or
    deleted parent, or cut out of a parent cycle. Returns an empty list
    for an unknown or deleted ``task_id``.
    """
    live = live_index(tasks)
    task = live.get(task_id)
    if task is None:
        return []
    return [ancestor.id for ancestor in walk_ancestors(task, live)]


def ancestor_titles(task_id: str, tasks: Iterable[Task]) -> list[str]:
    """Titles of the task's ancestors, nearest parent first (breadcrumbs)."""
    live = live_index(tasks)
    task = live.get(task_id)
    if task is None:
        return []
    return [ancestor.title for ancestor in walk_ancestors(task, live)]


def inherited_due_date(
    task: Task,
    live: dict[str, Task],
    parents: ParentLinks | None = None,
) -> datetime | None:
    """Effective due date against a prebuilt ``live_index``."""
    if task.due_at is not None:
        return task.due_at
    for ancestor in walk_ancestors(task, live, parents):
        if ancestor.due_at is not None:
            return ancestor.due_at
    return None


def effective_due_date(task: Task, tasks: Iterable[Task]) -> datetime | None:
    """Return the task's due date, inherited from ancestors if unset.

    The task's own ``due_at`` wins. Otherwise the nearest ancestor with a
    due date supplies it. Returns None when no task in the chain has one.
    """
    return inherited_due_date(task, live_index(tasks))
