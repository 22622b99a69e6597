"""Domain errors — range and validation failures in the descriptor model."""

from __future__ import annotations

from typing import Any

from launchd_plist.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a model rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def _payload(self) -> dict[str, Any]:
        return {"errors": self.errors}


class ExpressionSyntaxError(ValidationError):
    """A crontab expression could not be parsed."""

    default_code = "expression_syntax_error"

    def __init__(self, expression: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Invalid schedule expression {expression!r}: {reason}",
            detail={"expression": expression, "reason": reason},
            **kwargs,
        )
        self.expression = expression
        self.reason = reason


class RangeError(DomainError):
    """A calendar field value lies outside the field's inclusive range."""

    default_code = "range_error"

    def __init__(
        self,
        field: str,
        value: Any,
        allowed_range: range,
        **kwargs: Any,
    ) -> None:
        low, high = allowed_range.start, allowed_range.stop - 1
        super().__init__(
            f"{field} value {value!r} should lie in inclusive range {low}..{high}",
            detail={"field": field, "value": value, "min": low, "max": high},
            **kwargs,
        )
        self.field = field
        self.value = value
        self.allowed_range = allowed_range

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive ``(min, max)`` of the allowed range."""
        return self.allowed_range.start, self.allowed_range.stop - 1


__all__ = [
    "DomainError",
    "ExpressionSyntaxError",
    "RangeError",
    "ValidationError",
]
