"""Observability – structured logging helpers."""
from launchd_plist.observability.logging.factory import JsonLoggerFactory, configure_logging
from launchd_plist.observability.logging.logger import get_logger

__all__ = ["JsonLoggerFactory", "configure_logging", "get_logger"]
