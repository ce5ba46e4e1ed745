from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


class UnwrapError(RuntimeError):
    pass


@dataclass(frozen=True)
class ValidationError:
    message: str


@dataclass(frozen=True)
class NotFoundError:
    task_id: int
    message: str = "Task not found"


@dataclass(frozen=True)
class StorageError:
    path: Path
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """
    An expected failure returned to the caller instead of being raised.
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise UnwrapError(f"unwrap() called on Err: {self.error}")


Result = Union[Ok[T], Err[E]]
