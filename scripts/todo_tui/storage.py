"""
JSON file persistence for the task store.

The file holds a single array of task objects:

    [{"id": 1, "name": "Buy milk", "is_done": false,
      "created_at": "2024-05-01T09:30:00+02:00"}, ...]

save() writes pending tasks first, then done tasks. load() does not rely
on that order; it rebuilds both lists from is_done alone.

There is no temp-file swap: a crash in the middle of save() can leave a
truncated file behind.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from jsonschema import ValidationError, validate

from todo_tui.models import Task, TaskStore

logger = logging.getLogger(__name__)

TODO_FILE = Path.home() / ".todo-cli"

TASKS_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "name", "is_done", "created_at"],
        "properties": {
            "id": {"type": "integer"},
            "name": {"type": "string"},
            "is_done": {"type": "boolean"},
            "created_at": {"type": "string"},
        },
    },
}

# Fractions are padded or cut to exactly six digits (microseconds)
_FRACTION_RE = re.compile(r"\.(\d+)")


class StorageError(Exception):
    """Reading or writing the tasks file failed."""


def _microseconds(match: re.Match[str]) -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp (Z suffix and long fractions allowed)."""
    text = _FRACTION_RE.sub(_microseconds, value.strip(), count=1)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def serialize_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.isoformat()


def task_from_dict(data: dict[str, Any]) -> Task:
    # draft-07 "integer" also accepts 1.0
    if not isinstance(data["id"], int):
        raise ValueError(f"Task id must be an integer, got {data['id']!r}")
    return Task(
        id=data["id"],
        name=data["name"],
        is_done=data["is_done"],
        created_at=parse_timestamp(data["created_at"]),
    )


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "is_done": task.is_done,
        "created_at": serialize_timestamp(task.created_at),
    }


def load(path: Path | None = None) -> TaskStore:
    """Load the task store from disk.

    A missing file is an empty store. Anything else that goes wrong
    raises StorageError.
    """
    path = path or TODO_FILE
    if not path.exists():
        logger.info("No tasks file at %s, starting empty", path)
        return TaskStore()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise StorageError(f"invalid JSON in {path}: {exc}") from exc

    try:
        validate(instance=data, schema=TASKS_SCHEMA)
    except ValidationError as exc:
        raise StorageError(f"invalid tasks file {path}: {exc.message}") from exc

    try:
        store = TaskStore.from_tasks(task_from_dict(item) for item in data)
    except ValueError as exc:
        raise StorageError(f"invalid tasks file {path}: {exc}") from exc

    logger.info(
        "Loaded %d pending and %d done tasks from %s (latest id %d)",
        len(store.pending),
        len(store.done),
        path,
        store.latest_task_id,
    )
    return store


def save(store: TaskStore, path: Path | None = None) -> None:
    """Overwrite the tasks file with pending tasks followed by done tasks."""
    path = path or TODO_FILE
    records = [task_to_dict(task) for task in store.all_tasks()]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"cannot write {path}: {exc}") from exc
    logger.info("Saved %d tasks to %s", len(records), path)


class FileTaskRepository:
    """TaskRepository implementation backed by the JSON tasks file."""

    def __init__(self, path: Path | None = None):
        self.path = path or TODO_FILE

    def load(self) -> TaskStore:
        return load(self.path)

    def save(self, store: TaskStore) -> None:
        save(store, self.path)
