from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Tuple, Union

from . import models
from .models import Priority, Task
from .result import Err, NotFoundError, Ok, Result, ValidationError

logger = logging.getLogger(__name__)


class Status(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"


@dataclass(frozen=True)
class TaskList:
    """
    Immutable collection of tasks plus the next id to hand out.

    tasks are stored most recent first; use all_tasks() for oldest first.
    """

    tasks: Tuple[Task, ...] = ()
    next_id: int = 1


def new() -> TaskList:
    return TaskList()


def add(task_list: TaskList, description: str) -> TaskList:
    task = models.new_task(task_list.next_id, description)
    logger.debug("add task id=%s", task.id)
    return TaskList(tasks=(task,) + task_list.tasks, next_id=task_list.next_id + 1)


def all_tasks(task_list: TaskList) -> List[Task]:
    return list(reversed(task_list.tasks))


def find(task_list: TaskList, task_id: int) -> Result[Task, NotFoundError]:
    for task in task_list.tasks:
        if task.id == task_id:
            return Ok(task)
    return Err(NotFoundError(task_id))


def _update_task(
    task_list: TaskList, task_id: int, update_fn: Callable[[Task], Task]
) -> TaskList:
    # Missing ids are a silent no-op: the same value comes back.
    if not any(t.id == task_id for t in task_list.tasks):
        return task_list
    tasks = tuple(update_fn(t) if t.id == task_id else t for t in task_list.tasks)
    return replace(task_list, tasks=tasks)


def complete(task_list: TaskList, task_id: int) -> TaskList:
    return _update_task(task_list, task_id, models.complete)


def uncomplete(task_list: TaskList, task_id: int) -> TaskList:
    return _update_task(task_list, task_id, models.uncomplete)


def add_tag(task_list: TaskList, task_id: int, tag: str) -> TaskList:
    return _update_task(task_list, task_id, lambda t: models.add_tag(t, tag))


def set_priority(
    task_list: TaskList, task_id: int, value: Union[str, Priority]
) -> Result[TaskList, Union[NotFoundError, ValidationError]]:
    found = find(task_list, task_id)
    if not found.is_ok():
        return found
    updated = models.set_priority(found.value, value)
    if not updated.is_ok():
        return updated
    return Ok(_update_task(task_list, task_id, lambda _: updated.value))


def delete(task_list: TaskList, task_id: int) -> TaskList:
    if not any(t.id == task_id for t in task_list.tasks):
        return task_list
    tasks = tuple(t for t in task_list.tasks if t.id != task_id)
    logger.debug("delete task id=%s", task_id)
    return replace(task_list, tasks=tasks)


def filter_by_status(task_list: TaskList, status: Union[str, Status]) -> List[Task]:
    """
    Tasks whose completed flag matches status, most recent first.

    Unlike all_tasks() the internal order is kept as is.
    """
    wanted = Status(status) is Status.COMPLETED
    return [t for t in task_list.tasks if bool(t.completed) == wanted]


def count(task_list: TaskList) -> int:
    return len(task_list.tasks)


def count_completed(task_list: TaskList) -> int:
    return len(filter_by_status(task_list, Status.COMPLETED))
