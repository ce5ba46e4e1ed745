from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from . import collection, store
from .collection import Status, TaskList
from .config import default_log_level, default_store_path
from .logging_setup import setup_logging
from .models import Priority, Task
from .result import NotFoundError

logger = logging.getLogger(__name__)


def _store_path_from_args(ns: argparse.Namespace) -> Path:
    if getattr(ns, "file", None):
        return Path(ns.file).expanduser().resolve()
    return default_store_path()


def _load(path: Path) -> Optional[TaskList]:
    loaded = store.load(path)
    if not loaded.is_ok():
        print(f"Error: {loaded.error.message}", file=sys.stderr)
        return None
    return loaded.value


def _save(path: Path, task_list: TaskList) -> bool:
    saved = store.save(path, task_list)
    if not saved.is_ok():
        print(f"Error: {saved.error.message}", file=sys.stderr)
        return False
    return True


def _print_tasks(tasks: list[Task]) -> None:
    if not tasks:
        print("No tasks found.")
        return
    print(f"{'ID':>3}  {'ST':<4} {'PRI':<6}  {'CREATED':<10}  DESCRIPTION")
    print("-" * 60)
    for t in tasks:
        st = "DONE" if t.completed else "TODO"
        created = t.created_at.date().isoformat()
        tags = f"  [{', '.join(t.tags)}]" if t.tags else ""
        print(f"{t.id:>3}  {st:<4} {t.priority.value:<6}  {created:<10}  {t.description}{tags}")


def cmd_add(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    task_list = _load(path)
    if task_list is None:
        return 1
    description = " ".join(ns.text)
    task_id = task_list.next_id
    task_list = collection.add(task_list, description)
    if not _save(path, task_list):
        return 1
    print(f"Added task #{task_id}: {description}")
    return 0


def cmd_list(ns: argparse.Namespace) -> int:
    task_list = _load(_store_path_from_args(ns))
    if task_list is None:
        return 1
    if ns.status:
        tasks = collection.filter_by_status(task_list, Status(ns.status))
    else:
        tasks = collection.all_tasks(task_list)
    _print_tasks(tasks)
    return 0


def cmd_show(ns: argparse.Namespace) -> int:
    task_list = _load(_store_path_from_args(ns))
    if task_list is None:
        return 1
    found = collection.find(task_list, ns.task_id)
    if not found.is_ok():
        print(f"Task #{ns.task_id} not found.", file=sys.stderr)
        return 1
    _print_tasks([found.value])
    return 0


def _update_existing(
    ns: argparse.Namespace,
    update_fn: Callable[[TaskList, int], TaskList],
    message: str,
) -> int:
    path = _store_path_from_args(ns)
    task_list = _load(path)
    if task_list is None:
        return 1
    # The collection ignores unknown ids; the CLI reports them.
    if not collection.find(task_list, ns.task_id).is_ok():
        print(f"Task #{ns.task_id} not found.", file=sys.stderr)
        return 1
    if not _save(path, update_fn(task_list, ns.task_id)):
        return 1
    print(message)
    return 0


def cmd_complete(ns: argparse.Namespace) -> int:
    return _update_existing(ns, collection.complete, f"Marked task #{ns.task_id} as completed.")


def cmd_uncomplete(ns: argparse.Namespace) -> int:
    return _update_existing(ns, collection.uncomplete, f"Marked task #{ns.task_id} as pending.")


def cmd_delete(ns: argparse.Namespace) -> int:
    return _update_existing(ns, collection.delete, f"Deleted task #{ns.task_id}.")


def cmd_tag(ns: argparse.Namespace) -> int:
    return _update_existing(
        ns,
        lambda tl, task_id: collection.add_tag(tl, task_id, ns.tag),
        f"Tagged task #{ns.task_id} with '{ns.tag}'.",
    )


def cmd_priority(ns: argparse.Namespace) -> int:
    path = _store_path_from_args(ns)
    task_list = _load(path)
    if task_list is None:
        return 1
    updated = collection.set_priority(task_list, ns.task_id, ns.level)
    if not updated.is_ok():
        err = updated.error
        if isinstance(err, NotFoundError):
            print(f"Task #{ns.task_id} not found.", file=sys.stderr)
        else:
            print(f"Error: {err.message}", file=sys.stderr)
        return 1
    if not _save(path, updated.value):
        return 1
    print(f"Set priority of task #{ns.task_id} to {ns.level}.")
    return 0


def cmd_stats(ns: argparse.Namespace) -> int:
    task_list = _load(_store_path_from_args(ns))
    if task_list is None:
        return 1
    total = collection.count(task_list)
    done = collection.count_completed(task_list)
    print(f"Total: {total}  Completed: {done}  Pending: {total - done}")
    return 0


def cmd_help(ns: argparse.Namespace) -> int:
    ns.parser.print_help()
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tasktrack",
        description="tasktrack: a small task manager backed by a JSON file.",
    )
    p.add_argument(
        "--file",
        help="Path to the task file (default: ~/.tasktrack/tasks.json or TASKTRACK_FILE env var)",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("add", help="Add a new task.")
    s.add_argument("text", nargs="+", help="Task description.")
    s.set_defaults(func=cmd_add)

    s = sub.add_parser("list", help="List tasks.")
    s.add_argument(
        "status",
        nargs="?",
        choices=[st.value for st in Status],
        help="Only completed or only pending tasks.",
    )
    s.set_defaults(func=cmd_list)

    s = sub.add_parser("show", help="Show one task.")
    s.add_argument("task_id", type=int, help="Task ID.")
    s.set_defaults(func=cmd_show)

    s = sub.add_parser("complete", help="Mark a task as completed.")
    s.add_argument("task_id", type=int, help="Task ID.")
    s.set_defaults(func=cmd_complete)

    s = sub.add_parser("uncomplete", help="Mark a task as pending again.")
    s.add_argument("task_id", type=int, help="Task ID.")
    s.set_defaults(func=cmd_uncomplete)

    s = sub.add_parser("delete", help="Delete a task.")
    s.add_argument("task_id", type=int, help="Task ID.")
    s.set_defaults(func=cmd_delete)

    s = sub.add_parser("priority", help="Set a task's priority.")
    s.add_argument("task_id", type=int, help="Task ID.")
    # Validation happens in the core so bad values get its error message.
    s.add_argument("level", help=f"One of: {', '.join(pr.value for pr in Priority)}.")
    s.set_defaults(func=cmd_priority)

    s = sub.add_parser("tag", help="Add a tag to a task.")
    s.add_argument("task_id", type=int, help="Task ID.")
    s.add_argument("tag", help="Tag text.")
    s.set_defaults(func=cmd_tag)

    s = sub.add_parser("stats", help="Show task counts.")
    s.set_defaults(func=cmd_stats)

    s = sub.add_parser("help", help="Show this help message.")
    s.set_defaults(func=cmd_help, parser=p)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    # Leave logging alone when embedded in a host that already configured it.
    if not logging.getLogger().handlers:
        setup_logging(logging.DEBUG if ns.verbose else default_log_level())
    logger.debug("command=%s", ns.cmd)
    return int(ns.func(ns))


if __name__ == "__main__":
    raise SystemExit(main())
