"""Kernel – framework-agnostic building blocks (errors, result type)."""

from launchd_plist.kernel.errors import (
    ApplicationError,
    BaseError,
    CodecError,
    DomainError,
    ExpressionSyntaxError,
    InfrastructureError,
    RangeError,
    ValidationError,
)
from launchd_plist.kernel.types import Err, Ok, Result

__all__ = [
    "ApplicationError",
    "BaseError",
    "CodecError",
    "DomainError",
    "Err",
    "ExpressionSyntaxError",
    "InfrastructureError",
    "Ok",
    "RangeError",
    "Result",
    "ValidationError",
]
