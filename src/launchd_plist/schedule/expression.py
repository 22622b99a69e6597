"""ScheduleExpression — the five value sets of a crontab line.

Each field is either :data:`WILDCARD` (no constraint) or a non-empty frozen
set of allowed integers.  A directly constructed expression is not
range-checked; translation does that, so an out-of-range value is reported
against the native calendar field it would have populated.

Parsing is delegated to ``croniter``: lists, ranges, ``*/S`` and ``N/S``
steps, month and weekday names, and the ``@daily`` family of macros.  Forms
with no calendar interval equivalent (``L``, ``#``, a seconds column) are
rejected.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Final

from croniter import CroniterError, croniter

from launchd_plist.kernel.errors.domain import ExpressionSyntaxError, ValidationError


class _Wildcard:
    """Singleton marker for an unconstrained field."""

    _instance: "_Wildcard | None" = None

    def __new__(cls) -> "_Wildcard":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "WILDCARD"

    def __reduce__(self) -> str:
        return "WILDCARD"


WILDCARD: Final = _Wildcard()

type FieldValues = frozenset[int] | _Wildcard

FIELD_NAMES: Final = ("minute", "hour", "day", "month", "weekday")

# Inclusive cron ranges, used to detect a list that covers the whole field.
_CRON_BOUNDS: Final = {
    "minute": (0, 59),
    "hour": (0, 23),
    "day": (1, 31),
    "month": (1, 12),
    "weekday": (0, 6),
}


def _coerce(name: str, values: FieldValues | Iterable[int]) -> FieldValues:
    if values is WILDCARD:
        return WILDCARD
    if isinstance(values, (str, bytes)):
        raise ValidationError(f"{name} must be WILDCARD or a set of integers, got {values!r}")
    frozen = frozenset(values)  # type: ignore[arg-type]
    if not frozen:
        raise ValidationError(
            f"{name} value set must not be empty",
            errors=[{"field": name, "reason": "empty"}],
        )
    return frozen


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class ScheduleExpression:
    """Parsed recurring schedule: one value set (or wildcard) per field."""

    minute: FieldValues = WILDCARD
    hour: FieldValues = WILDCARD
    day: FieldValues = WILDCARD
    month: FieldValues = WILDCARD
    weekday: FieldValues = WILDCARD

    def __post_init__(self) -> None:
        for name in FIELD_NAMES:
            object.__setattr__(self, name, _coerce(name, getattr(self, name)))

    def items(self) -> list[tuple[str, FieldValues]]:
        """``(field name, values)`` pairs in minute, hour, day, month, weekday order."""
        return [(name, getattr(self, name)) for name in FIELD_NAMES]

    @property
    def is_wildcard(self) -> bool:
        return all(values is WILDCARD for _, values in self.items())

    @classmethod
    def parse(cls, text: str) -> "ScheduleExpression":
        """Parse a five-field crontab expression (or an ``@`` macro).

        Raises:
            ExpressionSyntaxError: croniter rejects *text*, including values
                outside a field's cron range, or *text* uses a form that no
                set of calendar intervals can express.
        """
        try:
            expanded, nth_weekday = croniter.expand(text.strip())
        except CroniterError as exc:
            raise ExpressionSyntaxError(text, str(exc), cause=exc) from exc
        if len(expanded) != len(FIELD_NAMES):
            raise ExpressionSyntaxError(text, f"expected 5 fields, got {len(expanded)}")
        if nth_weekday:
            raise ExpressionSyntaxError(text, "nth weekday of the month (#) is not supported")
        return cls(
            **{
                name: _field_values(text, name, values)
                for name, values in zip(FIELD_NAMES, expanded)
            }
        )

    def __str__(self) -> str:
        return " ".join(
            "*" if values is WILDCARD else ",".join(str(v) for v in sorted(values))  # type: ignore[union-attr]
            for _, values in self.items()
        )


def _field_values(text: str, name: str, values: list[int | str]) -> FieldValues:
    """Map one croniter value list onto WILDCARD or a frozenset."""
    if "*" in values:
        return WILDCARD
    if not all(isinstance(v, int) for v in values):
        raise ExpressionSyntaxError(text, f"unsupported {name} value in {values!r}")
    low, high = _CRON_BOUNDS[name]
    folded = {0 if (name == "weekday" and v == 7) else v for v in values}
    if folded == set(range(low, high + 1)):
        return WILDCARD
    return frozenset(folded)  # type: ignore[arg-type]


__all__ = ["FIELD_NAMES", "WILDCARD", "FieldValues", "ScheduleExpression"]
