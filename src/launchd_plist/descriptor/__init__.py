"""Service descriptor model — the launchd job definition and its nested types."""

from launchd_plist.descriptor.options import (
    KeepAlive,
    KeepAliveOptions,
    MachServiceEntry,
    MachServiceOptions,
    ProcessType,
    ResourceLimits,
    SocketFamily,
    SocketGroup,
    SocketOptions,
    SocketProtocol,
    Sockets,
    SocketType,
)
from launchd_plist.descriptor.service import ServiceDescriptor

__all__ = [
    "KeepAlive",
    "KeepAliveOptions",
    "MachServiceEntry",
    "MachServiceOptions",
    "ProcessType",
    "ResourceLimits",
    "ServiceDescriptor",
    "SocketFamily",
    "SocketGroup",
    "SocketOptions",
    "SocketProtocol",
    "SocketType",
    "Sockets",
]
