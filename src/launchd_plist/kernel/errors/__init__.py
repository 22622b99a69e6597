"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── ValidationError
    │   │   └── ExpressionSyntaxError
    │   └── RangeError
    ├── ApplicationError     (application.py)
    │   └── ConfigError      (launchd_plist.config)
    └── InfrastructureError  (infrastructure.py)
        └── CodecError
"""

from launchd_plist.kernel.errors.application import ApplicationError
from launchd_plist.kernel.errors.base import BaseError
from launchd_plist.kernel.errors.domain import (
    DomainError,
    ExpressionSyntaxError,
    RangeError,
    ValidationError,
)
from launchd_plist.kernel.errors.infrastructure import CodecError, InfrastructureError

__all__ = [
    "ApplicationError",
    "BaseError",
    "CodecError",
    "DomainError",
    "ExpressionSyntaxError",
    "InfrastructureError",
    "RangeError",
    "ValidationError",
]
