"""CalendarField — one optional, range-checked calendar component."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any

from launchd_plist.kernel.errors.domain import RangeError
from launchd_plist.kernel.types.result import Err, Ok, Result


class FieldRole(enum.Enum):
    """The five calendar components with their inclusive ranges and plist keys.

    Weekday accepts both 0 and 7 for Sunday.
    """

    MONTH = ("month", "Month", 1, 12)
    DAY = ("day", "Day", 1, 31)
    WEEKDAY = ("weekday", "Weekday", 0, 7)
    HOUR = ("hour", "Hour", 0, 23)
    MINUTE = ("minute", "Minute", 0, 59)

    def __init__(self, label: str, key: str, low: int, high: int) -> None:
        self.label = label
        self.key = key
        self.allowed = range(low, high + 1)

    def contains(self, value: Any) -> bool:
        """Return ``True`` when *value* is an int (not a bool) inside the range."""
        return isinstance(value, int) and not isinstance(value, bool) and value in self.allowed

    def check(self, value: Any) -> Result[int, RangeError]:
        """Validate *value* without raising."""
        if self.contains(value):
            return Ok(value)
        return Err(RangeError(self.label, value, self.allowed))

    @classmethod
    def from_key(cls, key: str) -> "FieldRole":
        """Look up a role by its plist key (``"Minute"`` → ``MINUTE``)."""
        for role in cls:
            if role.key == key:
                return role
        raise KeyError(key)


_ROLE_INDEX = {role: index for index, role in enumerate(FieldRole)}


@dataclasses.dataclass(frozen=True, slots=True)
class CalendarField:
    """A calendar component that is either present with a valid value or absent.

    ``value is None`` is the wildcard: the field matches any value.  Use
    :meth:`set` / :meth:`absent` rather than the constructor when the value
    comes from user input; the constructor validates as well.
    """

    role: FieldRole
    value: int | None = None

    def __post_init__(self) -> None:
        if self.value is not None:
            self.role.check(self.value).unwrap()

    @classmethod
    def set(cls, role: FieldRole, value: int) -> "CalendarField":
        """Return a present field, raising :class:`RangeError` when out of range."""
        return cls(role, role.check(value).unwrap())

    @classmethod
    def absent(cls, role: FieldRole) -> "CalendarField":
        return cls(role)

    def clear(self) -> "CalendarField":
        return CalendarField(self.role)

    @property
    def is_present(self) -> bool:
        return self.value is not None

    @property
    def key(self) -> str:
        return self.role.key

    def _sort_key(self) -> tuple[int, bool, int]:
        return (_ROLE_INDEX[self.role], self.is_present, self.value if self.value is not None else 0)

    def __lt__(self, other: "CalendarField") -> bool:
        if not isinstance(other, CalendarField):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "CalendarField") -> bool:
        if not isinstance(other, CalendarField):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "CalendarField") -> bool:
        if not isinstance(other, CalendarField):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "CalendarField") -> bool:
        if not isinstance(other, CalendarField):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        return f"{self.key}={'*' if self.value is None else self.value}"


__all__ = ["CalendarField", "FieldRole"]
