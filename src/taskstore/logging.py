from __future__ import annotations

import logging
from typing import Optional


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Loggers for the task store live under "taskstore".

    Handlers and levels belong to the embedding application.
    """
    return logging.getLogger(name if name else "taskstore")
