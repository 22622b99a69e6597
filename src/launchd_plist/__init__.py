"""
launchd_plist – build, translate and serialise launchd.plist(5) job descriptors.

Import path convention::

    from launchd_plist import CalendarInterval, ServiceDescriptor, translate_crontab
    from launchd_plist.codec import PlistCodec
    from launchd_plist.kernel.errors import RangeError
"""

from launchd_plist.calendar import CalendarField, CalendarInterval, FieldRole
from launchd_plist.codec import PlistCodec, dumps, from_document_reader, loads, to_document_writer
from launchd_plist.config import CodecSettings, EnvSettingsLoader
from launchd_plist.descriptor import (
    KeepAliveOptions,
    MachServiceOptions,
    ProcessType,
    ResourceLimits,
    ServiceDescriptor,
    SocketFamily,
    SocketOptions,
    SocketProtocol,
    SocketType,
)
from launchd_plist.kernel.errors import CodecError, ExpressionSyntaxError, RangeError, ValidationError
from launchd_plist.schedule import (
    WILDCARD,
    ScheduleExpression,
    estimate_interval_count,
    translate_crontab,
    translate_schedule_expression,
)

__version__ = "0.1.0"
__all__ = [
    "WILDCARD",
    "CalendarField",
    "CalendarInterval",
    "CodecError",
    "CodecSettings",
    "EnvSettingsLoader",
    "ExpressionSyntaxError",
    "FieldRole",
    "KeepAliveOptions",
    "MachServiceOptions",
    "PlistCodec",
    "ProcessType",
    "RangeError",
    "ResourceLimits",
    "ScheduleExpression",
    "ServiceDescriptor",
    "SocketFamily",
    "SocketOptions",
    "SocketProtocol",
    "SocketType",
    "ValidationError",
    "__version__",
    "dumps",
    "estimate_interval_count",
    "from_document_reader",
    "loads",
    "to_document_writer",
    "translate_crontab",
    "translate_schedule_expression",
]
