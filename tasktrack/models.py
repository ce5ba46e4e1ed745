from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple, Union

from .result import Err, Ok, Result, ValidationError


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Union[str, "Priority", None]) -> Optional["Priority"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Task:
    id: int
    description: str
    created_at: datetime
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    tags: Tuple[str, ...] = ()  # most recent first


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def new_task(task_id: int, description: str) -> Task:
    return Task(id=task_id, description=description, created_at=_utc_now())


def complete(task: Task) -> Task:
    return replace(task, completed=True)


def uncomplete(task: Task) -> Task:
    return replace(task, completed=False)


def set_priority(task: Task, value: Union[str, Priority]) -> Result[Task, ValidationError]:
    """
    Returns Ok(copy with the new priority) or Err(ValidationError).
    The given task is never modified.
    """
    priority = Priority.parse(value)
    if priority is None:
        return Err(ValidationError("Priority must be low, medium, or high"))
    return Ok(replace(task, priority=priority))


def add_tag(task: Task, tag: str) -> Task:
    return replace(task, tags=(tag,) + task.tags)
