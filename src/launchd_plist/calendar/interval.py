"""CalendarInterval — one ``StartCalendarIntervals`` entry.

Present fields are ANDed, absent fields are wildcards.  A list of intervals
fires when any one of them matches.  An interval with every field absent is
legal and fires every minute; rejecting it is left to the caller.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from launchd_plist.calendar.field import CalendarField, FieldRole
from launchd_plist.kernel.errors import CodecError, RangeError

# Attribute order doubles as plist key order on output.
_ROLES: tuple[FieldRole, ...] = (
    FieldRole.MINUTE,
    FieldRole.HOUR,
    FieldRole.DAY,
    FieldRole.WEEKDAY,
    FieldRole.MONTH,
)


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class CalendarInterval:
    """Immutable calendar interval built through chained ``with_*`` calls.

    Example::

        ci = CalendarInterval().with_hour(12).with_minute(10).with_weekday(7)
    """

    minute: int | None = None
    hour: int | None = None
    day: int | None = None
    weekday: int | None = None
    month: int | None = None

    def __post_init__(self) -> None:
        for role in _ROLES:
            value = getattr(self, role.label)
            if value is not None:
                role.check(value).unwrap()

    # -- builders ----------------------------------------------------------

    def _with(self, role: FieldRole, value: int) -> "CalendarInterval":
        checked = role.check(value).unwrap()
        return dataclasses.replace(self, **{role.label: checked})

    def with_month(self, month: int) -> "CalendarInterval":
        return self._with(FieldRole.MONTH, month)

    def with_day(self, day: int) -> "CalendarInterval":
        return self._with(FieldRole.DAY, day)

    def with_weekday(self, weekday: int) -> "CalendarInterval":
        return self._with(FieldRole.WEEKDAY, weekday)

    def with_hour(self, hour: int) -> "CalendarInterval":
        return self._with(FieldRole.HOUR, hour)

    def with_minute(self, minute: int) -> "CalendarInterval":
        return self._with(FieldRole.MINUTE, minute)

    def clear_month(self) -> "CalendarInterval":
        return dataclasses.replace(self, month=None)

    def clear_day(self) -> "CalendarInterval":
        return dataclasses.replace(self, day=None)

    def clear_weekday(self) -> "CalendarInterval":
        return dataclasses.replace(self, weekday=None)

    def clear_hour(self) -> "CalendarInterval":
        return dataclasses.replace(self, hour=None)

    def clear_minute(self) -> "CalendarInterval":
        return dataclasses.replace(self, minute=None)

    # -- inspection --------------------------------------------------------

    def field(self, role: FieldRole) -> CalendarField:
        return CalendarField(role, getattr(self, role.label))

    def fields(self) -> tuple[CalendarField, ...]:
        """All five fields in plist key order, present or not."""
        return tuple(self.field(role) for role in _ROLES)

    @property
    def is_wildcard(self) -> bool:
        return all(getattr(self, role.label) is None for role in _ROLES)

    # -- wire mapping ------------------------------------------------------

    def to_document(self) -> dict[str, int]:
        """Plist dict with only the present fields, each as an integer."""
        return {
            role.key: getattr(self, role.label)
            for role in _ROLES
            if getattr(self, role.label) is not None
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "CalendarInterval":
        if not isinstance(document, Mapping):
            raise CodecError(
                f"StartCalendarIntervals entry must be a dict, got {type(document).__name__}",
                operation="read",
            )
        values: dict[str, int] = {}
        for key, value in document.items():
            try:
                role = FieldRole.from_key(key)
            except KeyError:
                raise CodecError(
                    f"Unknown calendar interval key {key!r}", operation="read"
                ) from None
            try:
                values[role.label] = role.check(value).unwrap()
            except RangeError as exc:
                raise CodecError(
                    f"Invalid {key} in calendar interval: {exc.message}",
                    operation="read",
                    cause=exc,
                ) from exc
        return cls(**values)

    def __str__(self) -> str:
        present = [str(f) for f in self.fields() if f.is_present]
        return "{" + ", ".join(present) + "}" if present else "{*}"


__all__ = ["CalendarInterval"]
