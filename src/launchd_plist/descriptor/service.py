"""ServiceDescriptor — the root of a launchd.plist(5) document.

The descriptor is a frozen value.  Every ``with_*`` call returns a new
descriptor, so chains read top to bottom::

    descriptor = (
        ServiceDescriptor.new("com.example.backup", "/usr/local/bin/backup")
        .with_program_arguments(["backup", "--quiet"])
        .with_start_calendar_intervals(translate_crontab("0 3 * * *"))
        .with_disabled()
    )

Only the label is validated.  Everything else is recorded as given; launchd
decides whether a combination makes sense.
"""

from __future__ import annotations

import copy
import dataclasses
import os
from collections.abc import Iterable, Mapping, Sequence
from typing import IO, TYPE_CHECKING, Any

from launchd_plist.calendar.interval import CalendarInterval
from launchd_plist.descriptor.options import (
    KeepAlive,
    KeepAliveOptions,
    MachServiceEntry,
    ProcessType,
    ResourceLimits,
    SocketOptions,
    Sockets,
    plist_field,
)
from launchd_plist.kernel.errors import ValidationError

if TYPE_CHECKING:
    from launchd_plist.config.settings import CodecSettings

type PathLike = str | os.PathLike[str]


def _sequence(name: str, value: Any) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes)):
        raise ValidationError(
            f"{name} must be a sequence, not a single {type(value).__name__}",
            errors=[{"field": name, "value": value}],
        )
    return tuple(value)


def _freeze(name: str, kind: Any, value: Any) -> Any:
    """Snapshot mutable inputs so a descriptor never shares state with its caller."""
    if value is None:
        return None
    if kind == "path":
        return os.fspath(value)
    if kind in ("strings", "calendar_intervals"):
        return _sequence(name, value)
    if kind == "string_or_strings":
        return value if isinstance(value, str) else _sequence(name, value)
    if kind == "strings_map":
        return {key: _sequence(f"{name}.{key}", items) for key, items in value.items()}
    if kind == "any_map":
        return copy.deepcopy(dict(value))
    if kind == "sockets":
        if isinstance(value, Mapping):
            return dict(value)
        return tuple(dict(group) for group in value)
    if kind in ("str_map", "bool_map", "mach_services"):
        return dict(value)
    return value


@dataclasses.dataclass(frozen=True, slots=True, kw_only=True)
class ServiceDescriptor:
    """A launchd job definition.  Field order is plist key order on output."""

    label: str = plist_field("Label", "str", default=dataclasses.MISSING)
    disabled: bool | None = plist_field("Disabled", "bool")
    user_name: str | None = plist_field("UserName", "str")
    group_name: str | None = plist_field("GroupName", "str")
    inetd_compatibility: bool | None = plist_field("inetdCompatibility", "inetd")
    limit_load_to_hosts: tuple[str, ...] | None = plist_field("LimitLoadToHosts", "strings")
    limit_load_from_hosts: tuple[str, ...] | None = plist_field("LimitLoadFromHosts", "strings")
    limit_load_to_session_type: str | tuple[str, ...] | None = plist_field(
        "LimitLoadToSessionType", "string_or_strings"
    )
    limit_load_to_hardware: dict[str, tuple[str, ...]] | None = plist_field(
        "LimitLoadToHardware", "strings_map"
    )
    limit_load_from_hardware: dict[str, tuple[str, ...]] | None = plist_field(
        "LimitLoadFromHardware", "strings_map"
    )
    program: str | None = plist_field("Program", "path")
    bundle_program: str | None = plist_field("BundleProgram", "str")
    program_arguments: tuple[str, ...] | None = plist_field("ProgramArguments", "strings")
    enable_globbing: bool | None = plist_field("EnableGlobbing", "bool")
    enable_transactions: bool | None = plist_field("EnableTransactions", "bool")
    enable_pressured_exit: bool | None = plist_field("EnablePressuredExit", "bool")
    on_demand: bool | None = plist_field("OnDemand", "bool")  # deprecated, read-compatible
    service_ipc: bool | None = plist_field("ServiceIPC", "bool")  # deprecated
    keep_alive: KeepAlive | None = plist_field("KeepAlive", "keep_alive")
    run_at_load: bool | None = plist_field("RunAtLoad", "bool")
    root_directory: str | None = plist_field("RootDirectory", "path")
    working_directory: str | None = plist_field("WorkingDirectory", "path")
    environment_variables: dict[str, str] | None = plist_field("EnvironmentVariables", "str_map")
    umask: int | None = plist_field("Umask", "int")
    time_out: int | None = plist_field("TimeOut", "int")
    exit_time_out: int | None = plist_field("ExitTimeOut", "int")
    throttle_interval: int | None = plist_field("ThrottleInterval", "int")
    init_groups: bool | None = plist_field("InitGroups", "bool")
    watch_paths: tuple[str, ...] | None = plist_field("WatchPaths", "strings")
    queue_directories: tuple[str, ...] | None = plist_field("QueueDirectories", "strings")
    start_on_mount: bool | None = plist_field("StartOnMount", "bool")
    start_interval: int | None = plist_field("StartInterval", "int")
    start_calendar_intervals: tuple[CalendarInterval, ...] | None = plist_field(
        "StartCalendarIntervals", "calendar_intervals"
    )
    standard_in_path: str | None = plist_field("StandardInPath", "path")
    standard_out_path: str | None = plist_field("StandardOutPath", "path")
    standard_error_path: str | None = plist_field("StandardErrorPath", "path")
    debug: bool | None = plist_field("Debug", "bool")
    wait_for_debugger: bool | None = plist_field("WaitForDebugger", "bool")
    soft_resource_limits: ResourceLimits | None = plist_field("SoftResourceLimits", ResourceLimits)
    hard_resource_limits: ResourceLimits | None = plist_field("HardResourceLimits", ResourceLimits)
    nice: int | None = plist_field("Nice", "int")
    process_type: ProcessType | None = plist_field("ProcessType", ProcessType)
    abandon_process_group: bool | None = plist_field("AbandonProcessGroup", "bool")
    low_priority_io: bool | None = plist_field("LowPriorityIO", "bool")
    low_priority_background_io: bool | None = plist_field("LowPriorityBackgroundIO", "bool")
    materialize_dataless_files: bool | None = plist_field("MaterializeDatalessFiles", "bool")
    launch_only_once: bool | None = plist_field("LaunchOnlyOnce", "bool")
    mach_services: dict[str, MachServiceEntry] | None = plist_field("MachServices", "mach_services")
    sockets: Sockets | None = plist_field("Sockets", "sockets")
    launch_events: dict[str, Any] | None = plist_field("LaunchEvents", "any_map")
    hopefully_exits_last: bool | None = plist_field("HopefullyExitsLast", "bool")  # deprecated
    hopefully_exits_first: bool | None = plist_field("HopefullyExitsFirst", "bool")  # deprecated
    session_create: bool | None = plist_field("SessionCreate", "bool")
    legacy_timers: bool | None = plist_field("LegacyTimers", "bool")  # deprecated

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label:
            raise ValidationError(
                "Service label must be a non-empty string",
                errors=[{"field": "label", "value": self.label}],
            )
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            frozen = _freeze(field.name, field.metadata["kind"], value)
            if frozen is not value:
                object.__setattr__(self, field.name, frozen)

    @classmethod
    def new(cls, label: str, program: PathLike | None = None) -> "ServiceDescriptor":
        """Descriptor with *label* and *program* set; raises ``ValidationError`` on an empty label."""
        return cls(label=label, program=program)

    def _set(self, **changes: Any) -> "ServiceDescriptor":
        return dataclasses.replace(self, **changes)

    # -- identity and execution --------------------------------------------

    def with_label(self, label: str) -> "ServiceDescriptor":
        return self._set(label=label)

    def with_disabled(self, disabled: bool = True) -> "ServiceDescriptor":
        return self._set(disabled=disabled)

    def with_user_name(self, user_name: str) -> "ServiceDescriptor":
        return self._set(user_name=user_name)

    def with_group_name(self, group_name: str) -> "ServiceDescriptor":
        return self._set(group_name=group_name)

    def with_program(self, program: PathLike) -> "ServiceDescriptor":
        return self._set(program=program)

    def with_bundle_program(self, bundle_program: str) -> "ServiceDescriptor":
        return self._set(bundle_program=bundle_program)

    def with_program_arguments(self, arguments: Iterable[str]) -> "ServiceDescriptor":
        return self._set(program_arguments=arguments)

    def with_inetd_compatibility(self, wait: bool) -> "ServiceDescriptor":
        return self._set(inetd_compatibility=wait)

    def with_init_groups(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(init_groups=value)

    def with_root_directory(self, path: PathLike) -> "ServiceDescriptor":
        return self._set(root_directory=path)

    def with_working_directory(self, path: PathLike) -> "ServiceDescriptor":
        return self._set(working_directory=path)

    def with_environment_variables(self, env: Mapping[str, str]) -> "ServiceDescriptor":
        return self._set(environment_variables=env)

    def with_umask(self, umask: int) -> "ServiceDescriptor":
        return self._set(umask=umask)

    def with_standard_in_path(self, path: PathLike) -> "ServiceDescriptor":
        return self._set(standard_in_path=path)

    def with_standard_out_path(self, path: PathLike) -> "ServiceDescriptor":
        return self._set(standard_out_path=path)

    def with_standard_error_path(self, path: PathLike) -> "ServiceDescriptor":
        return self._set(standard_error_path=path)

    def with_session_create(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(session_create=value)

    # -- load limits -------------------------------------------------------

    def with_limit_load_to_hosts(self, hosts: Iterable[str]) -> "ServiceDescriptor":
        return self._set(limit_load_to_hosts=hosts)

    def with_limit_load_from_hosts(self, hosts: Iterable[str]) -> "ServiceDescriptor":
        return self._set(limit_load_from_hosts=hosts)

    def with_limit_load_to_session_type(self, value: str | Iterable[str]) -> "ServiceDescriptor":
        return self._set(limit_load_to_session_type=value)

    def with_limit_load_to_hardware(self, value: Mapping[str, Sequence[str]]) -> "ServiceDescriptor":
        return self._set(limit_load_to_hardware=value)

    def with_limit_load_from_hardware(self, value: Mapping[str, Sequence[str]]) -> "ServiceDescriptor":
        return self._set(limit_load_from_hardware=value)

    # -- launch triggers ---------------------------------------------------

    def with_run_at_load(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(run_at_load=value)

    def with_keep_alive(self, keep_alive: bool | KeepAliveOptions) -> "ServiceDescriptor":
        return self._set(keep_alive=keep_alive)

    def with_on_demand(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(on_demand=value)

    def with_watch_paths(self, paths: Iterable[str]) -> "ServiceDescriptor":
        return self._set(watch_paths=paths)

    def with_queue_directories(self, paths: Iterable[str]) -> "ServiceDescriptor":
        return self._set(queue_directories=paths)

    def with_start_on_mount(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(start_on_mount=value)

    def with_start_interval(self, seconds: int) -> "ServiceDescriptor":
        return self._set(start_interval=seconds)

    def with_start_calendar_intervals(self, intervals: Iterable[CalendarInterval]) -> "ServiceDescriptor":
        """Replace the calendar intervals wholesale; order and duplicates are kept."""
        return self._set(start_calendar_intervals=intervals)

    def with_launch_only_once(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(launch_only_once=value)

    def with_launch_events(self, events: Mapping[str, Any]) -> "ServiceDescriptor":
        return self._set(launch_events=events)

    def with_mach_services(self, services: Mapping[str, MachServiceEntry]) -> "ServiceDescriptor":
        return self._set(mach_services=services)

    def with_sockets(self, sockets: Sockets) -> "ServiceDescriptor":
        return self._set(sockets=sockets)

    def with_socket(self, name: str, options: SocketOptions) -> "ServiceDescriptor":
        """Add one named socket, merging with any sockets already present.

        A single dictionary becomes a list of dictionaries on the second call.
        """
        group = {name: options}
        if self.sockets is None:
            return self._set(sockets=group)
        if isinstance(self.sockets, dict):
            return self._set(sockets=(self.sockets, group))
        return self._set(sockets=(*self.sockets, group))

    # -- timing and process attributes -------------------------------------

    def with_timeout(self, seconds: int) -> "ServiceDescriptor":
        return self._set(time_out=seconds)

    def with_exit_timeout(self, seconds: int) -> "ServiceDescriptor":
        return self._set(exit_time_out=seconds)

    def with_throttle_interval(self, seconds: int) -> "ServiceDescriptor":
        return self._set(throttle_interval=seconds)

    def with_nice(self, nice: int) -> "ServiceDescriptor":
        return self._set(nice=nice)

    def with_process_type(self, process_type: ProcessType) -> "ServiceDescriptor":
        return self._set(process_type=process_type)

    def with_soft_resource_limits(self, limits: ResourceLimits) -> "ServiceDescriptor":
        return self._set(soft_resource_limits=limits)

    def with_hard_resource_limits(self, limits: ResourceLimits) -> "ServiceDescriptor":
        return self._set(hard_resource_limits=limits)

    def with_abandon_process_group(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(abandon_process_group=value)

    def with_low_priority_io(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(low_priority_io=value)

    def with_low_priority_background_io(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(low_priority_background_io=value)

    def with_materialize_dataless_files(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(materialize_dataless_files=value)

    def with_enable_globbing(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(enable_globbing=value)

    def with_enable_transactions(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(enable_transactions=value)

    def with_enable_pressured_exit(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(enable_pressured_exit=value)

    def with_debug(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(debug=value)

    def with_wait_for_debugger(self, value: bool = True) -> "ServiceDescriptor":
        return self._set(wait_for_debugger=value)

    # -- codec shortcuts ---------------------------------------------------

    def to_document_writer(self, stream: IO[bytes], settings: CodecSettings | None = None) -> None:
        """Write this descriptor as a plist; raises ``CodecError`` on failure."""
        from launchd_plist.codec.plist import PlistCodec  # noqa: PLC0415

        PlistCodec(settings).to_document_writer(self, stream)

    @classmethod
    def from_document_reader(
        cls, stream: IO[bytes], settings: CodecSettings | None = None
    ) -> "ServiceDescriptor":
        """Read a descriptor from a plist stream; raises ``CodecError`` on failure."""
        from launchd_plist.codec.plist import PlistCodec  # noqa: PLC0415

        return PlistCodec(settings).from_document_reader(stream)


__all__ = ["ServiceDescriptor"]
