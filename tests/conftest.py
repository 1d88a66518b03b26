import itertools
from datetime import datetime, timedelta

import pytest

from todovibe.domain.task import Task, create_task

# Naive datetimes are read as local wall time, so tests stay
# independent of the machine's timezone.
BASE_TIME = datetime(2024, 1, 1, 9, 0)


@pytest.fixture
def new_id():
    counter = itertools.count(1)
    return lambda: f"task-{next(counter)}"


@pytest.fixture
def make_task(new_id):
    """Build tasks with increasing creation times and predictable ids."""
    minutes = itertools.count()

    def factory(
        title: str = "Task",
        *,
        parent: Task | str | None = None,
        due: datetime | None = None,
        completed: bool = False,
        deleted: bool = False,
        created: datetime | None = None,
        task_id: str | None = None,
    ) -> Task:
        created_at = created or BASE_TIME + timedelta(minutes=next(minutes))
        parent_id = parent.id if isinstance(parent, Task) else parent
        task = create_task(
            title,
            due_at=due,
            parent_id=parent_id,
            now=created_at,
            new_id=(lambda: task_id) if task_id else new_id,
        )
        updates: dict = {}
        if completed:
            updates["completed"] = True
        if deleted:
            updates["deleted_at"] = created_at
        return task.model_copy(update=updates) if updates else task

    return factory
