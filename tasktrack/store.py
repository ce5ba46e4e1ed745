from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from . import collection
from .collection import TaskList
from .models import Priority, Task
from .result import Err, Ok, Result, StorageError

logger = logging.getLogger(__name__)


def _parse_created_at(text: str) -> datetime:
    dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def task_to_dict(t: Task) -> dict:
    return {
        "id": t.id,
        "description": t.description,
        "completed": t.completed,
        "created_at": t.created_at.isoformat(),
        "priority": t.priority.value,
        "tags": list(t.tags),
    }


def task_from_dict(d: dict) -> Task:
    priority = Priority.parse(d.get("priority", Priority.MEDIUM.value))
    if priority is None:
        raise ValueError(f"Invalid priority {d.get('priority')!r} for task {d.get('id')}")
    completed = d.get("completed", False)
    if not isinstance(completed, bool):
        raise ValueError(f"Invalid completed flag {completed!r} for task {d.get('id')}")
    tags = d.get("tags", [])
    if not isinstance(tags, list):
        raise ValueError(f"Invalid tags {tags!r} for task {d.get('id')}")
    return Task(
        id=int(d["id"]),
        description=str(d["description"]),
        completed=completed,
        created_at=_parse_created_at(str(d["created_at"])),
        priority=priority,
        tags=tuple(str(tag) for tag in tags),
    )


def to_dict(task_list: TaskList) -> dict:
    return {
        "next_id": task_list.next_id,
        "tasks": [task_to_dict(t) for t in collection.all_tasks(task_list)],
    }


def from_dict(data: dict) -> TaskList:
    """
    Inverse of to_dict(). Tasks are stored oldest first on disk and
    most recent first in memory.
    """
    tasks = [task_from_dict(t) for t in data.get("tasks", [])]
    ids = [t.id for t in tasks]
    if len(set(ids)) != len(ids):
        raise ValueError("Duplicate task ids in task file")
    max_id = max(ids, default=0)
    next_id = data.get("next_id")
    if next_id is None:
        next_id = max_id + 1
    next_id = int(next_id)
    if next_id <= max_id:
        raise ValueError(f"next_id {next_id} must be greater than the highest task id {max_id}")
    return TaskList(tasks=tuple(reversed(tasks)), next_id=next_id)


def load(path: Path) -> Result[TaskList, StorageError]:
    if not path.exists():
        logger.info("No task file at %s, starting empty", path)
        return Ok(collection.new())
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        task_list = from_dict(data)
    except (OSError, json.JSONDecodeError, KeyError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Failed to load tasks from %s: %s", path, e)
        return Err(StorageError(path, f"Could not read task file: {e}"))
    logger.debug("Loaded %s tasks from %s", collection.count(task_list), path)
    return Ok(task_list)


def save(path: Path, task_list: TaskList) -> Result[None, StorageError]:
    text = json.dumps(to_dict(task_list), indent=2)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        # mkstemp creates 0600 files; keep an existing file's mode.
        try:
            mode = stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            mode = 0o644
        fd, tmp_name = tempfile.mkstemp(prefix=".tasks-", suffix=".json", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save tasks to %s: %s", path, e)
        return Err(StorageError(path, f"Could not write task file: {e}"))
    logger.debug("Saved %s tasks to %s", collection.count(task_list), path)
    return Ok(None)
