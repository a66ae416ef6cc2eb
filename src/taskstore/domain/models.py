from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TaskCreate(BaseModel):
    """
    Input model for creating a task.

    Everything else (id, opened, closed, author/assignee) is generated or
    defaulted by the store.
    """
    model_config = ConfigDict(extra="forbid")

    title: str = ""
    content: str = ""


class Task(BaseModel):
    """
    A task row as stored in the `tasks` table.
    """
    model_config = ConfigDict(extra="forbid")

    id: int = 0
    # seconds since epoch; closed == 0 means open
    opened: int = 0
    closed: int = 0
    author_id: int = 0
    assigned_id: int = 0
    title: str = ""
    content: str = ""

    @property
    def is_open(self) -> bool:
        return self.closed == 0
