"""Translate a crontab-style ScheduleExpression into CalendarIntervals.

A native interval is the AND of its present fields, while a crontab field
can list several values (an OR inside that field).  The translation emits
one interval per element of the cross product of every constrained field's
values; wildcard fields stay absent in every interval.

Output size is the product of the constrained set sizes.  Nothing is capped
or truncated: ``*/5 */2 * * *`` already yields 12 x 12 = 144 intervals.  Use
:func:`estimate_interval_count` to check before translating.

Day-of-month and weekday constrained together become one interval with both
keys, which launchd matches as day AND weekday.  Classic cron fires when
either matches.  The translation keeps the native AND semantics.
"""

from __future__ import annotations

import itertools
import math
from typing import Any

from launchd_plist.calendar.field import FieldRole
from launchd_plist.calendar.interval import CalendarInterval
from launchd_plist.observability.logging import get_logger
from launchd_plist.schedule.expression import WILDCARD, ScheduleExpression

_log = get_logger(__name__)

_ROLE_BY_NAME = {role.label: role for role in FieldRole}


def _order_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, int) and not isinstance(value, bool):
        return (0, value)
    return (1, repr(value))


def _normalize(role: FieldRole, values: frozenset[Any]) -> list[int]:
    """Sorted, range-checked values; weekday 7 folds into 0 (Sunday)."""
    if role is FieldRole.WEEKDAY:
        values = frozenset(0 if (type(v) is int and v == 7) else v for v in values)
    return [role.check(value).unwrap() for value in sorted(values, key=_order_key)]


def _axes(expression: ScheduleExpression) -> list[tuple[FieldRole, list[int]]]:
    axes: list[tuple[FieldRole, list[int]]] = []
    for name, values in expression.items():
        if values is WILDCARD:
            continue
        role = _ROLE_BY_NAME[name]
        axes.append((role, _normalize(role, values)))  # type: ignore[arg-type]
    return axes


def translate_schedule_expression(expression: ScheduleExpression) -> list[CalendarInterval]:
    """Return the intervals that fire exactly when *expression* does.

    Raises:
        RangeError: a value lies outside its calendar field's range.  Every
            field is checked before any interval is built, so nothing is
            returned on failure.
    """
    axes = _axes(expression)
    if not axes:
        intervals = [CalendarInterval()]
    else:
        roles = [role for role, _ in axes]
        intervals = [
            CalendarInterval(**{role.label: value for role, value in zip(roles, combination)})
            for combination in itertools.product(*(values for _, values in axes))
        ]
    _log.debug(
        "schedule.translated",
        expression=str(expression),
        constrained=[role.label for role, _ in axes],
        interval_count=len(intervals),
    )
    return intervals


def translate_crontab(text: str) -> list[CalendarInterval]:
    """Parse a crontab expression and translate it in one step."""
    return translate_schedule_expression(ScheduleExpression.parse(text))


def estimate_interval_count(expression: ScheduleExpression) -> int:
    """Number of intervals :func:`translate_schedule_expression` will return.

    Counts after weekday normalization, so ``{0, 7}`` counts once.  Values are
    not range-checked.
    """
    sizes: list[int] = []
    for name, values in expression.items():
        if values is WILDCARD:
            continue
        if name == FieldRole.WEEKDAY.label:
            values = frozenset(0 if (type(v) is int and v == 7) else v for v in values)  # type: ignore[union-attr]
        sizes.append(len(values))  # type: ignore[arg-type]
    return math.prod(sizes)


__all__ = [
    "estimate_interval_count",
    "translate_crontab",
    "translate_schedule_expression",
]
