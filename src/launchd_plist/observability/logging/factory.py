"""Observability – structlog setup on a stdlib root handler."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from launchd_plist.config.loaders import EnvSettingsLoader
from launchd_plist.config.settings import LoggingSettings


class JsonLoggerFactory:
    """Route structlog events through a single stdlib root handler.

    Events render as JSON lines; ``json_output=False`` switches to the
    console renderer.  The library never calls this, applications opt in.
    """

    @staticmethod
    def _shared_processors() -> list[Any]:
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

    @classmethod
    def configure(cls, level: int | str = logging.INFO, *, json_output: bool = True) -> None:
        renderer: Any = (
            structlog.processors.JSONRenderer()
            if json_output
            else structlog.dev.ConsoleRenderer(colors=False)
        )
        structlog.configure(
            processors=[*cls._shared_processors(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        handler = logging.StreamHandler()
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            )
        )
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure logging from *settings*, or from ``LAUNCHD_LOG_*`` when omitted."""
    if settings is None:
        settings = EnvSettingsLoader().load(LoggingSettings)
    JsonLoggerFactory.configure(settings.level, json_output=settings.json_output)


__all__ = ["JsonLoggerFactory", "configure_logging"]
