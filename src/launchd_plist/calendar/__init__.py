"""Calendar interval model — range-checked fields and interval records."""

from launchd_plist.calendar.field import CalendarField, FieldRole
from launchd_plist.calendar.interval import CalendarInterval

__all__ = ["CalendarField", "CalendarInterval", "FieldRole"]
