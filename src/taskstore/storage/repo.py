# src/taskstore/storage/repo.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import pydantic
from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from taskstore.config import Settings
from taskstore.domain.errors import ConnectionError, NotFoundError, StoreError
from taskstore.domain.models import Task, TaskCreate
from taskstore.logging import get_logger

from .db import create_pool

_LOG = get_logger(__name__)

_TASK_COLUMNS = "id, opened, closed, author_id, assigned_id, title, content"

_SELECT_TASKS = f"""
    SELECT {_TASK_COLUMNS}
    FROM tasks
    WHERE (:task_id = 0 OR id = :task_id)
      AND (:author_id = 0 OR author_id = :author_id)
    ORDER BY id;
"""

_SELECT_BY_AUTHOR = f"""
    SELECT {_TASK_COLUMNS}
    FROM tasks
    WHERE author_id = :author_id
    ORDER BY id;
"""

_SELECT_BY_LABEL = f"""
    SELECT {_TASK_COLUMNS}
    FROM tasks
    WHERE id IN (
        SELECT task_id
        FROM tasks_labels
        WHERE label_id IN (SELECT id FROM labels WHERE name = :label_name)
    )
    ORDER BY id;
"""

_INSERT_TASK = """
    INSERT INTO tasks (title, content)
    VALUES (:title, :content)
    RETURNING id;
"""

_UPDATE_TASK = f"""
    UPDATE tasks
    SET assigned_id = :assigned_id,
        closed = :closed,
        content = :content,
        title = :title
    WHERE id = :id
    RETURNING {_TASK_COLUMNS};
"""

_DELETE_TASK = "DELETE FROM tasks WHERE id = :id;"


@dataclass
class TaskStore:
    """
    Repository encapsulating all SQL access to the `tasks` table.

    Important invariants:
    - The engine (pool) is the only state; every operation checks out a
      connection, runs one auto-committed statement, and returns it.
    - author_id and opened are never written after insert.
    - Driver failures surface as StoreError; nothing is retried.
    """
    engine: Engine

    @classmethod
    def connect(
        cls,
        url: str,
        *,
        pool_size: int = 5,
        pool_timeout_s: float = 30.0,
        echo: bool = False,
    ) -> "TaskStore":
        """
        Builds a pool for `url` and checks that the store is reachable.

        Raises ConnectionError if the URL is unusable or no connection can be
        established.
        """
        try:
            engine = create_pool(url, pool_size=pool_size, pool_timeout_s=pool_timeout_s, echo=echo)
        except ArgumentError as exc:
            raise ConnectionError(f"Invalid database URL: {exc}", details={"url": _safe_url(url)}) from exc

        try:
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            engine.dispose()
            raise ConnectionError(
                f"Cannot connect to task store: {exc}",
                details={"url": _safe_url(url)},
            ) from exc

        return cls(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskStore":
        return cls.connect(
            settings.database_url,
            pool_size=settings.pool_size,
            pool_timeout_s=settings.pool_timeout_s,
            echo=settings.echo_sql,
        )

    def close(self) -> None:
        self.engine.dispose()
        _LOG.debug("Disposed task store pool.")

    def __enter__(self) -> "TaskStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -------------------------
    # Read operations
    # -------------------------

    def list_tasks(self, task_id: int = 0, author_id: int = 0) -> list[Task]:
        """
        Returns tasks matching both filters, ordered by id.

        0 disables a filter; list_tasks(0, 0) returns every task.
        """
        return self._query(_SELECT_TASKS, {"task_id": task_id, "author_id": author_id})

    def list_by_author(self, author_id: int) -> list[Task]:
        return self._query(_SELECT_BY_AUTHOR, {"author_id": author_id})

    def list_by_label(self, label_name: str) -> list[Task]:
        """Tasks linked through tasks_labels to the label named exactly `label_name`."""
        return self._query(_SELECT_BY_LABEL, {"label_name": label_name})

    # -------------------------
    # Write operations
    # -------------------------

    def create(self, task: Union[TaskCreate, Task]) -> int:
        """
        Inserts a task and returns its generated id.

        Only title and content are written; the schema supplies the rest.
        """
        try:
            with self.engine.begin() as conn:
                new_id = conn.execute(
                    text(_INSERT_TASK),
                    {"title": task.title, "content": task.content},
                ).scalar_one()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to create task: {exc}") from exc
        return int(new_id)

    def update(self, task: Task) -> Task:
        """
        Rewrites assigned_id, closed, content and title of task.id and returns
        the updated row.
        """
        params = {
            "assigned_id": task.assigned_id,
            "closed": task.closed,
            "content": task.content,
            "title": task.title,
            "id": task.id,
        }
        try:
            with self.engine.begin() as conn:
                row = conn.execute(text(_UPDATE_TASK), params).mappings().first()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to update task {task.id}: {exc}", details={"id": task.id}) from exc

        if row is None:
            raise NotFoundError(f"Task not found: {task.id}", details={"id": task.id})
        return self._to_task(row)

    def delete(self, task_id: int) -> None:
        """Deletes task_id. Deleting a missing id is not an error."""
        try:
            with self.engine.begin() as conn:
                conn.execute(text(_DELETE_TASK), {"id": task_id})
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to delete task {task_id}: {exc}", details={"id": task_id}) from exc

    # -------------------------
    # Helpers
    # -------------------------

    def _query(self, sql: str, params: Mapping[str, Any]) -> list[Task]:
        try:
            with self.engine.begin() as conn:
                rows = conn.execute(text(sql), dict(params)).mappings().all()
        except SQLAlchemyError as exc:
            raise StoreError(f"Task query failed: {exc}", details=dict(params)) from exc
        return [self._to_task(row) for row in rows]

    @staticmethod
    def _to_task(row: Mapping[str, Any]) -> Task:
        try:
            return Task.model_validate(dict(row))
        except pydantic.ValidationError as exc:
            raise StoreError(f"Failed to scan task row: {exc}", details={"id": row.get("id")}) from exc


def _safe_url(url: str) -> Optional[str]:
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return None
