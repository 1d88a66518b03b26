"""View filtering and calendar bucketing.

Decides which live tasks each named view shows. Due-date rules use the
effective due date (own or inherited from the nearest ancestor), and
all day comparisons go through ``todovibe.domain.dates``.
"""

from collections.abc import Iterable
from datetime import date, datetime

from todovibe.domain.dates import day_key, is_same_day, is_within_next_days

from .models import Task, TaskTreeNode, TaskView
from .tree import (
    ParentLinks,
    build_tree,
    flatten,
    inherited_due_date,
    live_index,
    resolve_parents,
)

# Length of the "upcoming" window in days, today included
UPCOMING_DAYS = 7


def _visible(
    task: Task,
    view: TaskView,
    now: datetime,
    live: dict[str, Task],
    parents: ParentLinks,
    upcoming_days: int,
) -> bool:
    if task.is_deleted:
        return False
    if view is TaskView.COMPLETED:
        return task.completed
    if view is TaskView.CALENDAR:
        # calendar cells come from bucket_by_day
        return False

    due = inherited_due_date(task, live, parents)
    if view is TaskView.INBOX:
        return due is None
    if due is None:
        return False
    if view is TaskView.TODAY:
        return is_same_day(due, now)
    return is_within_next_days(due, now, upcoming_days) and not is_same_day(due, now)


def is_visible(
    task: Task,
    view: TaskView | str,
    now: datetime,
    all_tasks: Iterable[Task],
    *,
    upcoming_days: int = UPCOMING_DAYS,
) -> bool:
    """Check whether ``task`` belongs in ``view`` at time ``now``.

    ``all_tasks`` is the whole collection; it is needed to inherit due
    dates from ancestors.

    Rules:
        inbox: no effective due date
        today: effective due date on the same local day as ``now``
        upcoming: effective due date within the next ``upcoming_days``
            days, excluding today
        completed: the task is completed
        calendar: never; use ``bucket_by_day``

    Raises:
        ValueError: If ``view`` is not a known view name.
    """
    selected = TaskView(view)
    live = live_index(all_tasks)
    return _visible(task, selected, now, live, resolve_parents(live), upcoming_days)


def count_visible(
    tasks: Iterable[Task],
    view: TaskView | str,
    now: datetime,
    *,
    upcoming_days: int = UPCOMING_DAYS,
) -> int:
    """Number of live tasks ``view`` shows at time ``now``."""
    selected = TaskView(view)
    live = live_index(tasks)
    parents = resolve_parents(live)
    return sum(
        1
        for task in live.values()
        if _visible(task, selected, now, live, parents, upcoming_days)
    )


def matches_search(task: Task, query: str) -> bool:
    """Case-insensitive substring match against the title or any tag.

    A blank query matches every task.
    """
    needle = query.strip().lower()
    if not needle:
        return True
    if needle in task.title.lower():
        return True
    return any(needle in tag.lower() for tag in task.tags)


def view_nodes(
    tasks: list[Task],
    view: TaskView | str,
    now: datetime,
    query: str = "",
    *,
    upcoming_days: int = UPCOMING_DAYS,
) -> list[TaskTreeNode]:
    """Tree nodes shown by ``view`` for ``query``, in tree order.

    Nodes keep their tree depth so callers can indent subtasks.
    """
    selected = TaskView(view)
    live = live_index(tasks)
    parents = resolve_parents(live)
    return [
        node
        for node in flatten(build_tree(tasks))
        if _visible(node.task, selected, now, live, parents, upcoming_days)
        and matches_search(node.task, query)
    ]


def tasks_for_view(
    tasks: list[Task],
    view: TaskView | str,
    now: datetime,
    query: str = "",
    *,
    upcoming_days: int = UPCOMING_DAYS,
) -> list[Task]:
    """Tasks shown by ``view`` for ``query``, in tree order."""
    return [
        node.task
        for node in view_nodes(tasks, view, now, query, upcoming_days=upcoming_days)
    ]


def bucket_by_day(tasks: list[Task]) -> dict[str, list[Task]]:
    """Group live leaf tasks by the local day of their effective due date.

    Keys are ``YYYY-MM-DD``. Tasks with live subtasks are left out; they
    show up through their children's dates instead. Tasks without an
    effective due date are left out too.
    """
    live = live_index(tasks)
    parents = resolve_parents(live)
    has_children = {parent_id for parent_id in parents.values() if parent_id is not None}
    buckets: dict[str, list[Task]] = {}
    for task in live.values():
        if task.id in has_children:
            continue
        due = inherited_due_date(task, live, parents)
        if due is None:
            continue
        buckets.setdefault(day_key(due), []).append(task)
    return buckets


def tasks_on_day(tasks: list[Task], day: date) -> list[Task]:
    """Calendar cell contents for a single day."""
    return bucket_by_day(tasks).get(day.isoformat(), [])
