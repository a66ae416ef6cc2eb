from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.pool import QueuePool, StaticPool

from taskstore.logging import get_logger

_LOG = get_logger(__name__)


def create_pool(
    url: str | URL,
    *,
    pool_size: int = 5,
    pool_timeout_s: float = 30.0,
    echo: bool = False,
) -> Engine:
    """
    Builds a SQLAlchemy engine (connection pool) for the given database URL.

    Notes:
    - The database and its schema must already exist; nothing is created here.
    - Connections are checked out per statement and returned on completion,
      so the engine can be shared across threads.
    - SQLite in-memory URLs use a StaticPool (one shared connection), otherwise
      a QueuePool holding at most pool_size connections; a checkout waits up
      to pool_timeout_s before raising sqlalchemy.exc.TimeoutError.
    """
    url = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_sqlite_memory(url):
            kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(poolclass=QueuePool, pool_size=pool_size, max_overflow=0,
                          pool_timeout=pool_timeout_s)
    else:
        kwargs.update(pool_size=pool_size, max_overflow=0, pool_timeout=pool_timeout_s,
                      pool_pre_ping=True)

    engine = create_engine(url, **kwargs)

    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _apply_sqlite_pragmas)

    _LOG.debug("Created pool for %s (%s)", url.render_as_string(hide_password=True),
               type(engine.pool).__name__)
    return engine


def _is_sqlite_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:") or (url.database or "").startswith("file::memory:")


def _apply_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    cur = dbapi_conn.cursor()
    # Enforce FK constraints
    cur.execute("PRAGMA foreign_keys=ON;")
    # Reduce spurious 'database is locked' under concurrent writers
    cur.execute("PRAGMA busy_timeout=5000;")
    cur.close()
