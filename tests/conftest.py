# tests/conftest.py
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import pytest

from taskstore import TaskStore

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


@dataclass
class Seeder:
    """
    Writes rows the repository itself never writes (author ids, labels),
    straight through sqlite3.
    """
    db_path: Path

    def task(self, *, title: str = "t", content: str = "", author_id: int = 0,
             assigned_id: int = 0, opened: int | None = None) -> int:
        conn = sqlite3.connect(self.db_path)
        try:
            if opened is None:
                cur = conn.execute(
                    "INSERT INTO tasks(title, content, author_id, assigned_id) VALUES (?, ?, ?, ?);",
                    (title, content, author_id, assigned_id),
                )
            else:
                cur = conn.execute(
                    "INSERT INTO tasks(title, content, author_id, assigned_id, opened) VALUES (?, ?, ?, ?, ?);",
                    (title, content, author_id, assigned_id, opened),
                )
            conn.commit()
            return int(cur.lastrowid)
        finally:
            conn.close()

    def label(self, name: str, *task_ids: int) -> int:
        conn = sqlite3.connect(self.db_path)
        try:
            cur = conn.execute("INSERT INTO labels(name) VALUES (?);", (name,))
            label_id = int(cur.lastrowid)
            for task_id in task_ids:
                conn.execute(
                    "INSERT INTO tasks_labels(task_id, label_id) VALUES (?, ?);",
                    (task_id, label_id),
                )
            conn.commit()
            return label_id
        finally:
            conn.close()


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """
    Fresh sqlite db per test with the task schema applied.
    """
    path = tmp_path / "tasks.db"
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
    finally:
        conn.close()
    return path


@pytest.fixture()
def store(db_path: Path) -> Iterator[TaskStore]:
    with TaskStore.connect(f"sqlite:///{db_path}", pool_size=4) as s:
        yield s


@pytest.fixture()
def seed(db_path: Path) -> Seeder:
    return Seeder(db_path)
