from __future__ import annotations

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _get_env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an int, got: {raw!r}") from e
    return value


def _get_env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be a number, got: {raw!r}") from e
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got: {raw!r}")


def _get_env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw


@dataclass(frozen=True)
class Settings:
    # Database
    database_url: str
    pool_size: int
    pool_timeout_s: float
    echo_sql: bool


def load_settings() -> Settings:
    """
    Loads settings from env vars with sane defaults.

    Env vars:
      - TASKSTORE_DATABASE_URL (default: sqlite:///./var/tasks.db)
      - TASKSTORE_POOL_SIZE (default: 5)
      - TASKSTORE_POOL_TIMEOUT_S (default: 30)
      - TASKSTORE_ECHO_SQL (default: 0)
    """
    database_url = _get_env_str("TASKSTORE_DATABASE_URL", "sqlite:///./var/tasks.db").strip()

    pool_size = _get_env_int("TASKSTORE_POOL_SIZE", 5)
    if pool_size <= 0:
        raise ValueError("TASKSTORE_POOL_SIZE must be > 0")

    pool_timeout_s = _get_env_float("TASKSTORE_POOL_TIMEOUT_S", 30.0)
    if pool_timeout_s <= 0:
        raise ValueError("TASKSTORE_POOL_TIMEOUT_S must be > 0")

    echo_sql = _get_env_bool("TASKSTORE_ECHO_SQL", False)

    return Settings(
        database_url=database_url,
        pool_size=pool_size,
        pool_timeout_s=pool_timeout_s,
        echo_sql=echo_sql,
    )
