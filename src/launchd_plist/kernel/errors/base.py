"""Root of the launchd_plist error tree."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, ClassVar


class BaseError(Exception):
    """Every error raised by launchd_plist derives from this class.

    ``code`` is a stable slug callers can branch on; ``detail`` names the
    offending field, key or value.  :meth:`to_dict` flattens all of it into
    a payload that can be passed straight to a structured log event.

    Args:
        message: Human-readable description.
        code: Overrides ``default_code``.
        detail: Extra serialisable context.
        cause: Lower-level exception being wrapped; also set as ``__cause__``.
    """

    default_code: ClassVar[str] = "launchd_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def _payload(self) -> dict[str, Any]:
        """Top-level entries a subclass adds to :meth:`to_dict`."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
            **self._payload(),
        }
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
