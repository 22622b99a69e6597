"""Config settings – Settings base class, CodecSettings and LoggingSettings."""
from __future__ import annotations

import dataclasses
import logging
import plistlib
from typing import ClassVar

from launchd_plist.config.errors import InvalidSettingValueError

_FORMATS: dict[str, plistlib.PlistFormat] = {
    "xml": plistlib.FMT_XML,
    "binary": plistlib.FMT_BINARY,
}


@dataclasses.dataclass
class Settings:
    """Base class for environment-driven settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class CodecSettings(Settings):
    """How plist documents are written and how strictly they are read.

    Environment variables: ``LAUNCHD_PLIST_FORMAT``, ``LAUNCHD_SORT_KEYS``,
    ``LAUNCHD_STRICT_KEYS``.
    """

    _prefix: ClassVar[str] = "LAUNCHD"

    plist_format: str = "xml"
    sort_keys: bool = False
    strict_keys: bool = True

    def _validate(self) -> None:
        normalised = self.plist_format.lower()
        if normalised not in _FORMATS:
            raise InvalidSettingValueError(
                "plist_format", self.plist_format, f"expected one of {sorted(_FORMATS)}"
            )
        self.plist_format = normalised

    @property
    def fmt(self) -> plistlib.PlistFormat:
        """The ``plistlib`` format constant for :attr:`plist_format`."""
        return _FORMATS[self.plist_format]


@dataclasses.dataclass
class LoggingSettings(Settings):
    """Log level and renderer for :func:`configure_logging`.

    Environment variables: ``LAUNCHD_LOG_LEVEL``, ``LAUNCHD_LOG_JSON_OUTPUT``.
    """

    _prefix: ClassVar[str] = "LAUNCHD_LOG"

    level: str = "INFO"
    json_output: bool = True

    def _validate(self) -> None:
        normalised = self.level.upper()
        if normalised not in logging.getLevelNamesMapping():
            raise InvalidSettingValueError("level", self.level, "not a logging level name")
        self.level = normalised


__all__ = ["CodecSettings", "LoggingSettings", "Settings"]
