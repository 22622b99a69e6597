"""Schedule expressions and their translation into calendar intervals."""

from launchd_plist.schedule.expression import (
    FIELD_NAMES,
    WILDCARD,
    FieldValues,
    ScheduleExpression,
)
from launchd_plist.schedule.translator import (
    estimate_interval_count,
    translate_crontab,
    translate_schedule_expression,
)

__all__ = [
    "FIELD_NAMES",
    "WILDCARD",
    "FieldValues",
    "ScheduleExpression",
    "estimate_interval_count",
    "translate_crontab",
    "translate_schedule_expression",
]
