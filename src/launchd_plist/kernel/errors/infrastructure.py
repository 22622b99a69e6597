"""Infrastructure errors — failures reading or writing plist documents."""

from __future__ import annotations

from typing import Any

from launchd_plist.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O or codec failure that is not a model rule violation."""

    default_code = "infrastructure_error"


class CodecError(InfrastructureError):
    """Failed to serialize or deserialize a plist document.

    ``operation`` is ``"read"`` or ``"write"``.
    """

    default_code = "codec_error"

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operation = operation

    def _payload(self) -> dict[str, Any]:
        return {"operation": self.operation}


__all__ = ["CodecError", "InfrastructureError"]
