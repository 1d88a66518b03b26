"""Task collection persistence.

The store holds one snapshot of the flat task collection:

    {"version": 1, "tasks": [{"id": ..., "title": ..., "parentId": ...}, ...]}

Older stores may hold a bare list of tasks, and tasks written before
subtasks existed have no ``parentId``; both still load.

Storage problems never reach the caller. A missing, unreadable or
unrecognized store loads as an empty collection, records that fail
validation are skipped one by one, and a failed save is logged and
dropped.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from todovibe.domain.shared.result import Err, Ok, Result
from todovibe.domain.task.models import CURRENT_VERSION, Task

logger = logging.getLogger(__name__)


def _extract_task_list(data: Any) -> list[Any] | None:
    """Return the raw task list from either stored shape, or None."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("tasks"), list):
        return data["tasks"]
    return None


class TaskRepository:
    """Repository for the task collection snapshot.

    Wraps a single JSON file. ``load`` and ``save`` never raise.

    Example:
        repo = TaskRepository(Path("~/.todovibe/tasks.json").expanduser())
        tasks = repo.load()
        repo.save(tasks)
    """

    def __init__(self, path: Path, indent: int = 2) -> None:
        """Initialize the repository.

        Args:
            path: Location of the JSON store.
            indent: JSON indentation used when saving.
        """
        self.path = path
        self.indent = indent

    # -------------------------------------------------------------------------
    # File I/O
    # -------------------------------------------------------------------------

    def read_snapshot(self) -> Result[Any, str]:
        """Read and decode the store file.

        Returns:
            Ok(document) with the decoded JSON, Err(str) if the file is
            missing or cannot be read or decoded.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
            return Ok(json.loads(content))
        except FileNotFoundError:
            return Err(f"No task store at {self.path}")
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {self.path}: {e}")
        except UnicodeDecodeError as e:
            return Err(f"Invalid text encoding in {self.path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {self.path}")
        except OSError as e:
            return Err(f"Error reading {self.path}: {e}")

    def write_snapshot(self, tasks: list[Task]) -> Result[None, str]:
        """Encode ``tasks`` as a versioned snapshot and write it.

        Returns:
            Ok(None) if successful, Err(str) with the reason otherwise.
        """
        payload = {
            "version": CURRENT_VERSION,
            "tasks": [task.model_dump(mode="json", by_alias=True) for task in tasks],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(payload, indent=self.indent, ensure_ascii=False)
            self.path.write_text(content, encoding="utf-8")
            return Ok(None)
        except PermissionError:
            return Err(f"Permission denied writing {self.path}")
        except OSError as e:
            return Err(f"Error writing {self.path}: {e}")

    # -------------------------------------------------------------------------
    # Collection
    # -------------------------------------------------------------------------

    def load(self) -> list[Task]:
        """Load the task collection.

        Each stored record is validated on its own; invalid records are
        logged and skipped, the rest are returned in stored order.

        Returns:
            The stored tasks, or an empty list if there is no usable data.
        """
        if not self.path.exists():
            logger.debug(f"No task store at {self.path}")
            return []

        result = self.read_snapshot()
        if isinstance(result, Err):
            logger.warning(f"Could not read task store: {result.error}")
            return []

        raw_tasks = _extract_task_list(result.value)
        if raw_tasks is None:
            logger.warning(f"Unrecognized task store layout in {self.path}")
            return []

        tasks: list[Task] = []
        for position, raw in enumerate(raw_tasks):
            try:
                tasks.append(Task.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid task #{position} in {self.path}: {e}")
        return tasks

    def save(self, tasks: list[Task]) -> None:
        """Save the task collection, best-effort.

        Args:
            tasks: The full collection, tombstones included.
        """
        result = self.write_snapshot(tasks)
        if isinstance(result, Err):
            logger.warning(f"Could not save task store: {result.error}")

    def exists(self) -> bool:
        """Check if the store file exists."""
        return self.path.exists()
