"""
Storage layer for taskstore.

- db: pool factory (SQLAlchemy engine) + SQLite pragmas
- repo: task data access operations
"""

from .db import create_pool
from .repo import TaskStore

__all__ = ["create_pool", "TaskStore"]
