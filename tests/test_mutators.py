from datetime import datetime

import pytest
from pydantic import ValidationError

from todovibe.domain.task import (
    CURRENT_VERSION,
    EmptyTitleError,
    Task,
    create_task,
    set_completed,
    set_due_date,
    soft_delete,
    toggle_complete,
    update_title,
)

NOW = datetime(2024, 1, 1, 9, 0)
LATER = datetime(2024, 1, 2, 10, 30)


def test_create_task_extracts_tags():
    task = create_task("Buy milk #errand #home", now=NOW, new_id=lambda: "t1")
    assert task.id == "t1"
    assert task.title == "Buy milk"
    assert task.tags == ("errand", "home")
    assert task.completed is False
    assert task.created_at == task.updated_at == NOW
    assert task.deleted_at is None
    assert task.parent_id is None
    assert task.version == CURRENT_VERSION


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_create_task_rejects_blank_title(title):
    with pytest.raises(EmptyTitleError):
        create_task(title, now=NOW)


def test_create_task_with_only_tags_keeps_raw_title():
    task = create_task("  #inbox #later ", now=NOW)
    assert task.title == "#inbox #later"
    assert task.tags == ("inbox", "later")


def test_create_task_generates_unique_ids():
    first = create_task("a", now=NOW)
    second = create_task("b", now=NOW)
    assert first.id != second.id


def test_create_task_with_due_and_parent():
    due = datetime(2024, 1, 5)
    task = create_task("Sub", due_at=due, parent_id="p1", now=NOW)
    assert task.due_at == due
    assert task.parent_id == "p1"


def test_toggle_complete_returns_new_task():
    task = create_task("Write", now=NOW)
    toggled = toggle_complete(task, LATER)
    assert toggled.completed is True
    assert toggled.updated_at == LATER
    assert task.completed is False
    assert task.updated_at == NOW
    assert toggle_complete(toggled, LATER).completed is False


def test_set_completed_is_idempotent():
    task = create_task("Write", now=NOW)
    once = set_completed(task, True, LATER)
    twice = set_completed(once, True, LATER)
    assert once == twice
    assert set_completed(once, False, LATER).completed is False


def test_update_title_replaces_title_and_tags():
    task = create_task("Old #a", now=NOW)
    renamed = update_title(task, "New name #b #c", LATER)
    assert renamed.title == "New name"
    assert renamed.tags == ("b", "c")
    assert renamed.updated_at == LATER
    assert task.title == "Old"


def test_update_title_blank_is_noop():
    task = create_task("Keep me", now=NOW)
    assert update_title(task, "   ", LATER) is task


def test_set_due_date_sets_and_clears():
    task = create_task("Pay rent", now=NOW)
    due = datetime(2024, 2, 1)
    scheduled = set_due_date(task, due, LATER)
    assert scheduled.due_at == due
    assert scheduled.updated_at == LATER
    assert set_due_date(scheduled, None, LATER).due_at is None


def test_soft_delete_marks_tombstone():
    task = create_task("Old", now=NOW)
    deleted = soft_delete(task, LATER)
    assert deleted.is_deleted
    assert deleted.deleted_at == deleted.updated_at == LATER
    assert not task.is_deleted

    again = soft_delete(deleted, datetime(2024, 1, 3))
    assert again.is_deleted
    assert again.title == deleted.title


def test_tasks_are_frozen():
    task = create_task("Frozen", now=NOW)
    with pytest.raises(ValidationError):
        task.title = "Changed"


def test_copies_do_not_share_tag_storage():
    original = create_task("Buy milk #errand", now=NOW)
    changed = set_completed(original, True, LATER)

    with pytest.raises(AttributeError):
        changed.tags.append("leak")
    assert original.tags == ("errand",)
    assert changed.tags == ("errand",)


def test_tags_loaded_from_a_list_become_a_tuple():
    task = create_task("Plain", now=NOW)
    data = task.model_dump(by_alias=True) | {"tags": ["a", "b"]}

    loaded = Task.model_validate(data)

    assert loaded.tags == ("a", "b")
    assert task.model_dump(mode="json")["tags"] == []
