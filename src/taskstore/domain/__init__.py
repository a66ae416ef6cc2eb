"""
Domain layer for taskstore.

- models: Pydantic models for task rows and creation input
- errors: store-level exceptions
"""

from .models import Task, TaskCreate
from .errors import (
    TaskStoreError,
    ConnectionError,
    StoreError,
    NotFoundError,
)

__all__ = [
    "Task",
    "TaskCreate",
    "TaskStoreError",
    "ConnectionError",
    "StoreError",
    "NotFoundError",
]
