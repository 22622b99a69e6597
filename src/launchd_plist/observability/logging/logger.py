"""Logger lookup used by every launchd_plist module."""
from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """structlog logger for *name* with *initial_values* bound as context.

    Module loggers are created at import time; nothing is rendered until an
    application configures structlog (see :func:`configure_logging`).
    """
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger


__all__ = ["get_logger"]
