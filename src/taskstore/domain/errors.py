# src/taskstore/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class TaskStoreError(Exception):
    """
    Base error for the task store.

    Callers decide recovery policy; nothing here is retried.
    """
    message: str
    code: str = "TASKSTORE_ERROR"
    details: Optional[dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message


@dataclass
class ConnectionError(TaskStoreError):  # noqa: A001
    """Store unreachable at construction time."""
    code: str = "CONNECTION_ERROR"


@dataclass
class StoreError(TaskStoreError):
    """Query execution or row-scan failure."""
    code: str = "STORE_ERROR"


@dataclass
class NotFoundError(TaskStoreError):
    """Update targeted an id with no row."""
    code: str = "NOT_FOUND"
