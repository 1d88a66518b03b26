import json
from datetime import UTC, datetime

from todovibe.application import add_task
from todovibe.domain.shared import Err, Ok
from todovibe.infrastructure.storage import TaskRepository

LEGACY_TASK = {
    "id": "legacy-1",
    "title": "Water plants",
    "completed": False,
    "dueAt": None,
    "tags": ["home"],
    "createdAt": "2023-05-01T08:30:00.000Z",
    "updatedAt": "2023-05-01T08:30:00.000Z",
    "deletedAt": None,
    "version": 1,
}


def test_legacy_list_without_parent_loads_as_root(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps([LEGACY_TASK]), encoding="utf-8")

    tasks = TaskRepository(path).load()

    assert len(tasks) == 1
    task = tasks[0]
    assert task.id == "legacy-1"
    assert task.parent_id is None
    assert task.tags == ("home",)
    assert task.created_at == datetime(2023, 5, 1, 8, 30, tzinfo=UTC)


def test_envelope_layout_loads(tmp_path):
    path = tmp_path / "tasks.json"
    child = {**LEGACY_TASK, "id": "child", "parentId": "legacy-1"}
    path.write_text(json.dumps({"version": 1, "tasks": [LEGACY_TASK, child]}), encoding="utf-8")

    tasks = TaskRepository(path).load()

    assert [t.id for t in tasks] == ["legacy-1", "child"]
    assert tasks[1].parent_id == "legacy-1"


def test_missing_store_loads_empty(tmp_path):
    repo = TaskRepository(tmp_path / "nope.json")
    assert not repo.exists()
    assert repo.load() == []


def test_corrupt_store_loads_empty(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text("{not json", encoding="utf-8")
    assert TaskRepository(path).load() == []


def test_unrecognized_layout_loads_empty(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"items": []}), encoding="utf-8")
    assert TaskRepository(path).load() == []


def test_invalid_task_loads_empty(tmp_path):
    path = tmp_path / "tasks.json"
    broken = {key: value for key, value in LEGACY_TASK.items() if key != "title"}
    path.write_text(json.dumps([broken]), encoding="utf-8")
    assert TaskRepository(path).load() == []


def test_save_writes_versioned_camel_case_snapshot(tmp_path, make_task):
    path = tmp_path / "nested" / "tasks.json"
    parent = make_task("Plan trip #travel")
    child = make_task("Book flights", parent=parent, due=datetime(2024, 3, 1, tzinfo=UTC))

    repo = TaskRepository(path)
    repo.save([parent, child])

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == 1
    stored_child = data["tasks"][1]
    assert stored_child["parentId"] == parent.id
    assert stored_child["dueAt"].startswith("2024-03-01T00:00:00")
    assert "createdAt" in stored_child
    assert "deletedAt" in stored_child
    assert data["tasks"][0]["tags"] == ["travel"]


def test_save_then_load_keeps_tombstones(tmp_path, make_task):
    path = tmp_path / "tasks.json"
    tasks = [make_task("kept"), make_task("gone", deleted=True)]

    repo = TaskRepository(path)
    repo.save(tasks)

    assert repo.load() == tasks


def test_save_failure_does_not_raise(tmp_path, make_task):
    repo = TaskRepository(tmp_path)
    repo.save([make_task("anything")])


def test_invalid_record_is_skipped_and_the_rest_kept(tmp_path, new_id):
    path = tmp_path / "tasks.json"
    good = {**LEGACY_TASK, "id": "good"}
    blank_title = {**LEGACY_TASK, "id": "bad", "title": ""}
    later = {**LEGACY_TASK, "id": "later"}
    path.write_text(json.dumps([good, blank_title, later]), encoding="utf-8")

    repo = TaskRepository(path)
    tasks = repo.load()
    assert [t.id for t in tasks] == ["good", "later"]

    tasks, _ = add_task(tasks, "New one", new_id=new_id).value
    repo.save(tasks)

    assert [t.id for t in repo.load()] == ["good", "later", "task-1"]


def test_read_snapshot_reports_errors(tmp_path):
    missing = TaskRepository(tmp_path / "missing.json").read_snapshot()
    assert isinstance(missing, Err)

    bad = tmp_path / "bad.json"
    bad.write_text("[1,", encoding="utf-8")
    result = TaskRepository(bad).read_snapshot()
    assert isinstance(result, Err)
    assert "Invalid JSON" in result.error


def test_write_snapshot_reports_errors(tmp_path, make_task):
    result = TaskRepository(tmp_path).write_snapshot([make_task("anything")])
    assert isinstance(result, Err)


def test_snapshot_keeps_unicode(tmp_path, make_task):
    path = tmp_path / "unicode.json"
    repo = TaskRepository(path)

    assert isinstance(repo.write_snapshot([make_task("Café")]), Ok)
    assert "Café" in path.read_text(encoding="utf-8")
    assert repo.read_snapshot().value["tasks"][0]["title"] == "Café"
