"""Nested value types of a launchd.plist(5) document.

Every field carries ``metadata={"key": <plist key>, "kind": <kind>}``; the
codec walks that metadata to build and read plist dictionaries.  A kind is
either one of the primitive names handled by :mod:`launchd_plist.codec.mapping`
or a nested record / enum class.
"""

from __future__ import annotations

import dataclasses
import enum
import os
from collections.abc import Mapping, Sequence
from typing import Any


def plist_field(key: str, kind: Any, **kwargs: Any) -> Any:
    """Optional dataclass field mapped to plist *key*."""
    kwargs.setdefault("default", None)
    return dataclasses.field(metadata={"key": key, "kind": kind}, **kwargs)


class ProcessType(enum.Enum):
    BACKGROUND = "Background"
    STANDARD = "Standard"
    ADAPTIVE = "Adaptive"
    INTERACTIVE = "Interactive"


class SocketType(enum.Enum):
    DGRAM = "dgram"
    STREAM = "stream"
    SEQPACKET = "seqpacket"


class SocketFamily(enum.Enum):
    IPV4 = "IPv4"
    IPV6 = "IPv6"
    UNIX = "Unix"


class SocketProtocol(enum.Enum):
    TCP = "TCP"


def _freeze_strings(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool)):
        return value
    return tuple(value)


def _freeze_map(value: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return None if value is None else dict(value)


@dataclasses.dataclass(frozen=True, slots=True)
class KeepAliveOptions:
    """Conditional ``KeepAlive`` dictionary."""

    successful_exit: bool | None = plist_field("SuccessfulExit", "bool")
    network_state: bool | None = plist_field("NetworkState", "bool")
    path_state: dict[str, bool] | None = plist_field("PathState", "bool_map")
    other_job_enabled: dict[str, bool] | None = plist_field("OtherJobEnabled", "bool_map")

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_state", _freeze_map(self.path_state))
        object.__setattr__(self, "other_job_enabled", _freeze_map(self.other_job_enabled))

    def with_successful_exit(self, value: bool = True) -> "KeepAliveOptions":
        return dataclasses.replace(self, successful_exit=value)

    def with_network_state(self, value: bool = True) -> "KeepAliveOptions":
        return dataclasses.replace(self, network_state=value)

    def with_path_state(self, value: Mapping[str, bool]) -> "KeepAliveOptions":
        return dataclasses.replace(self, path_state=dict(value))

    def with_other_job_enabled(self, value: Mapping[str, bool]) -> "KeepAliveOptions":
        return dataclasses.replace(self, other_job_enabled=dict(value))


@dataclasses.dataclass(frozen=True, slots=True)
class ResourceLimits:
    """``SoftResourceLimits`` / ``HardResourceLimits`` dictionary."""

    core: int | None = plist_field("Core", "int")
    cpu: int | None = plist_field("CPU", "int")
    data: int | None = plist_field("Data", "int")
    file_size: int | None = plist_field("FileSize", "int")
    memory_lock: int | None = plist_field("MemoryLock", "int")
    number_of_files: int | None = plist_field("NumberOfFiles", "int")
    number_of_processes: int | None = plist_field("NumberOfProcesses", "int")
    resident_set_size: int | None = plist_field("ResidentSetSize", "int")
    stack: int | None = plist_field("Stack", "int")

    def with_core(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, core=value)

    def with_cpu(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, cpu=value)

    def with_data(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, data=value)

    def with_file_size(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, file_size=value)

    def with_memory_lock(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, memory_lock=value)

    def with_number_of_files(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, number_of_files=value)

    def with_number_of_processes(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, number_of_processes=value)

    def with_resident_set_size(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, resident_set_size=value)

    def with_stack(self, value: int) -> "ResourceLimits":
        return dataclasses.replace(self, stack=value)


@dataclasses.dataclass(frozen=True, slots=True)
class MachServiceOptions:
    """Dictionary form of a ``MachServices`` entry (the other form is a bool)."""

    reset_at_close: bool | None = plist_field("ResetAtClose", "bool")
    hide_until_check_in: bool | None = plist_field("HideUntilCheckIn", "bool")

    def with_reset_at_close(self, value: bool = True) -> "MachServiceOptions":
        return dataclasses.replace(self, reset_at_close=value)

    def with_hide_until_check_in(self, value: bool = True) -> "MachServiceOptions":
        return dataclasses.replace(self, hide_until_check_in=value)


@dataclasses.dataclass(frozen=True, slots=True)
class SocketOptions:
    """One named socket of the ``Sockets`` dictionary.

    ``bonjour`` is a bool, a service name, or a sequence of service names.
    """

    sock_type: SocketType | None = plist_field("SockType", SocketType)
    sock_passive: bool | None = plist_field("SockPassive", "bool")
    sock_node_name: str | None = plist_field("SockNodeName", "str")
    sock_service_name: str | None = plist_field("SockServiceName", "str")
    sock_family: SocketFamily | None = plist_field("SockFamily", SocketFamily)
    sock_protocol: SocketProtocol | None = plist_field("SockProtocol", SocketProtocol)
    sock_path_name: str | None = plist_field("SockPathName", "path")
    secure_socket_with_key: str | None = plist_field("SecureSocketWithKey", "str")
    sock_path_mode: int | None = plist_field("SockPathMode", "int")
    bonjour: bool | str | tuple[str, ...] | None = plist_field("Bonjour", "bonjour")
    multicast_group: str | None = plist_field("MulticastGroup", "str")

    def __post_init__(self) -> None:
        object.__setattr__(self, "bonjour", _freeze_strings(self.bonjour))
        if self.sock_path_name is not None:
            object.__setattr__(self, "sock_path_name", os.fspath(self.sock_path_name))

    def with_type(self, value: SocketType) -> "SocketOptions":
        return dataclasses.replace(self, sock_type=value)

    def with_passive(self, value: bool = True) -> "SocketOptions":
        return dataclasses.replace(self, sock_passive=value)

    def with_node_name(self, value: str) -> "SocketOptions":
        return dataclasses.replace(self, sock_node_name=value)

    def with_service_name(self, value: str) -> "SocketOptions":
        return dataclasses.replace(self, sock_service_name=value)

    def with_family(self, value: SocketFamily) -> "SocketOptions":
        return dataclasses.replace(self, sock_family=value)

    def with_protocol(self, value: SocketProtocol) -> "SocketOptions":
        return dataclasses.replace(self, sock_protocol=value)

    def with_path_name(self, value: Any) -> "SocketOptions":
        return dataclasses.replace(self, sock_path_name=value)

    def with_secure_socket_key(self, value: str) -> "SocketOptions":
        return dataclasses.replace(self, secure_socket_with_key=value)

    def with_path_mode(self, value: int) -> "SocketOptions":
        return dataclasses.replace(self, sock_path_mode=value)

    def with_bonjour(self, value: bool | str | Sequence[str]) -> "SocketOptions":
        return dataclasses.replace(self, bonjour=value)

    def with_multicast_group(self, value: str) -> "SocketOptions":
        return dataclasses.replace(self, multicast_group=value)


type SocketGroup = dict[str, SocketOptions]
type Sockets = SocketGroup | tuple[SocketGroup, ...]
type MachServiceEntry = bool | MachServiceOptions
type KeepAlive = bool | KeepAliveOptions


__all__ = [
    "KeepAlive",
    "KeepAliveOptions",
    "MachServiceEntry",
    "MachServiceOptions",
    "ProcessType",
    "ResourceLimits",
    "SocketFamily",
    "SocketGroup",
    "SocketOptions",
    "SocketProtocol",
    "SocketType",
    "Sockets",
    "plist_field",
]
