"""Field mapping between descriptor records and plist dictionaries.

Records are frozen dataclasses whose fields carry ``key`` and ``kind``
metadata (see :func:`launchd_plist.descriptor.options.plist_field`).  Absent
(``None``) fields are omitted on output.  Every value is type checked against
its kind in both directions and a mismatch raises :class:`CodecError` with
``operation`` set to ``"write"`` or ``"read"``.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from launchd_plist.calendar.interval import CalendarInterval
from launchd_plist.descriptor.options import KeepAliveOptions, MachServiceOptions, SocketOptions
from launchd_plist.descriptor.service import ServiceDescriptor
from launchd_plist.kernel.errors import CodecError, ValidationError

R = TypeVar("R")

_LABEL_KEY = "Label"
_INETD_WAIT = "Wait"


def _fail(key: str, expected: str, value: Any, operation: str = "read") -> CodecError:
    return CodecError(
        f"{key}: expected {expected}, got {type(value).__name__}",
        operation=operation,
        detail={"key": key, "expected": expected},
    )


def _strings(key: str, value: Any, operation: str = "read") -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise _fail(key, "array of strings", value, operation)
    return tuple(value)


def _mapping(
    key: str,
    value: Any,
    check: Callable[[str, Any, str], Any],
    expected: str,
    operation: str = "read",
) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _fail(key, f"dictionary of {expected}", value, operation)
    return {name: check(f"{key}.{name}", item, operation) for name, item in value.items()}


def _scalar(expected_type: type, expected: str) -> Callable[..., Any]:
    def check(key: str, value: Any, operation: str = "read") -> Any:
        if isinstance(value, bool) and expected_type is not bool:
            raise _fail(key, expected, value, operation)
        if not isinstance(value, expected_type):
            raise _fail(key, expected, value, operation)
        return value

    return check


def _instance(key: str, value: Any, record_type: type) -> Any:
    if not isinstance(value, record_type):
        raise _fail(key, record_type.__name__, value, "write")
    return value


_check_bool = _scalar(bool, "boolean")
_check_int = _scalar(int, "integer")
_check_str = _scalar(str, "string")


# -- encoding ------------------------------------------------------------
#
# Every value is checked against its kind so that nothing is written that
# from_document would refuse to read back.


def _encode(kind: Any, key: str, value: Any) -> Any:  # noqa: PLR0911, PLR0912
    if isinstance(kind, type) and issubclass(kind, enum.Enum):
        return _instance(key, value, kind).value
    if isinstance(kind, type) and dataclasses.is_dataclass(kind):
        return to_document(_instance(key, value, kind))
    if kind == "bool":
        return _check_bool(key, value, "write")
    if kind == "int":
        return _check_int(key, value, "write")
    if kind in ("str", "path"):
        return _check_str(key, value, "write")
    if kind == "strings":
        return list(_strings(key, value, "write"))
    if kind == "string_or_strings":
        return value if isinstance(value, str) else list(_strings(key, value, "write"))
    if kind == "bonjour":
        return value if isinstance(value, (str, bool)) else list(_strings(key, value, "write"))
    if kind == "strings_map":
        checked = _mapping(key, value, _strings, "string arrays", "write")
        return {name: list(items) for name, items in checked.items()}
    if kind == "str_map":
        return _mapping(key, value, _check_str, "strings", "write")
    if kind == "bool_map":
        return _mapping(key, value, _check_bool, "booleans", "write")
    if kind == "any_map":
        if not isinstance(value, dict):
            raise _fail(key, "dictionary", value, "write")
        return dict(value)
    if kind == "inetd":
        return {_INETD_WAIT: _check_bool(key, value, "write")}
    if kind == "keep_alive":
        if isinstance(value, bool):
            return value
        return to_document(_instance(key, value, KeepAliveOptions))
    if kind == "mach_services":
        if not isinstance(value, dict):
            raise _fail(key, "dictionary", value, "write")
        return {
            name: entry
            if isinstance(entry, bool)
            else to_document(_instance(f"{key}.{name}", entry, MachServiceOptions))
            for name, entry in value.items()
        }
    if kind == "sockets":
        if isinstance(value, dict):
            return _encode_socket_group(key, value)
        if not isinstance(value, (list, tuple)):
            raise _fail(key, "dictionary or array of socket dictionaries", value, "write")
        return [_encode_socket_group(key, group) for group in value]
    if kind == "calendar_intervals":
        if not isinstance(value, (list, tuple)):
            raise _fail(key, "array of calendar intervals", value, "write")
        return [_instance(key, interval, CalendarInterval).to_document() for interval in value]
    raise CodecError(f"{key}: unsupported field kind {kind!r}", operation="write")


def _encode_socket_group(key: str, group: Any) -> dict[str, Any]:
    if not isinstance(group, dict):
        raise _fail(key, "dictionary of socket options", group, "write")
    return {
        name: to_document(_instance(f"{key}.{name}", options, SocketOptions))
        for name, options in group.items()
    }


def to_document(record: Any) -> dict[str, Any]:
    """Plist dictionary for *record*, present fields only, in field order.

    Raises :class:`CodecError` (``operation="write"``) when a value does not
    match its field's kind.
    """
    document: dict[str, Any] = {}
    for field in dataclasses.fields(record):
        value = getattr(record, field.name)
        if value is None:
            continue
        key = field.metadata["key"]
        document[key] = _encode(field.metadata["kind"], key, value)
    return document


# -- decoding ------------------------------------------------------------


def _decode(kind: Any, key: str, value: Any, strict: bool) -> Any:  # noqa: PLR0911, PLR0912
    if isinstance(kind, type) and issubclass(kind, enum.Enum):
        try:
            return kind(value)
        except ValueError:
            allowed = ", ".join(repr(member.value) for member in kind)
            raise _fail(key, f"one of {allowed}", value) from None
    if isinstance(kind, type) and dataclasses.is_dataclass(kind):
        return from_document(kind, value, strict=strict, context=key)
    if kind == "bool":
        return _check_bool(key, value)
    if kind == "int":
        return _check_int(key, value)
    if kind in ("str", "path"):
        return _check_str(key, value)
    if kind == "strings":
        return _strings(key, value)
    if kind == "string_or_strings":
        return value if isinstance(value, str) else _strings(key, value)
    if kind == "bonjour":
        return value if isinstance(value, (str, bool)) else _strings(key, value)
    if kind == "str_map":
        return _mapping(key, value, _check_str, "strings")
    if kind == "bool_map":
        return _mapping(key, value, _check_bool, "booleans")
    if kind == "strings_map":
        return _mapping(key, value, _strings, "string arrays")
    if kind == "any_map":
        if not isinstance(value, dict):
            raise _fail(key, "dictionary", value)
        return value
    if kind == "inetd":
        if not isinstance(value, dict) or set(value) != {_INETD_WAIT}:
            raise _fail(key, f"dictionary with a single {_INETD_WAIT!r} key", value)
        return _check_bool(f"{key}.{_INETD_WAIT}", value[_INETD_WAIT])
    if kind == "keep_alive":
        if isinstance(value, bool):
            return value
        return from_document(KeepAliveOptions, value, strict=strict, context=key)
    if kind == "mach_services":
        if not isinstance(value, dict):
            raise _fail(key, "dictionary", value)
        return {
            name: entry
            if isinstance(entry, bool)
            else from_document(MachServiceOptions, entry, strict=strict, context=f"{key}.{name}")
            for name, entry in value.items()
        }
    if kind == "sockets":
        if isinstance(value, list):
            return tuple(_decode_socket_group(key, group, strict) for group in value)
        return _decode_socket_group(key, value, strict)
    if kind == "calendar_intervals":
        if not isinstance(value, list):
            raise _fail(key, "array of dictionaries", value)
        return tuple(CalendarInterval.from_document(entry) for entry in value)
    raise CodecError(f"{key}: unsupported field kind {kind!r}", operation="read")


def _decode_socket_group(key: str, value: Any, strict: bool) -> dict[str, SocketOptions]:
    if not isinstance(value, dict):
        raise _fail(key, "dictionary of socket options", value)
    return {
        name: from_document(SocketOptions, options, strict=strict, context=f"{key}.{name}")
        for name, options in value.items()
    }


def from_document(
    record_type: type[R],
    document: Any,
    *,
    strict: bool = True,
    context: str = "document",
) -> R:
    """Build *record_type* from a plist dictionary.

    With ``strict`` an unknown key raises :class:`CodecError`; otherwise it
    is ignored.
    """
    if not isinstance(document, Mapping):
        raise _fail(context, "dictionary", document)
    by_key = {field.metadata["key"]: field for field in dataclasses.fields(record_type)}  # type: ignore[arg-type]
    kwargs: dict[str, Any] = {}
    for key, value in document.items():
        field = by_key.get(key)
        if field is None:
            if strict:
                raise CodecError(
                    f"{context}: unknown key {key!r}",
                    operation="read",
                    detail={"key": key},
                )
            continue
        kwargs[field.name] = _decode(field.metadata["kind"], key, value, strict)
    return record_type(**kwargs)


def descriptor_to_document(descriptor: ServiceDescriptor) -> dict[str, Any]:
    return to_document(descriptor)


def descriptor_from_document(document: Any, *, strict: bool = True) -> ServiceDescriptor:
    """Rebuild a :class:`ServiceDescriptor`; a missing or empty ``Label`` raises ``CodecError``."""
    if isinstance(document, Mapping) and _LABEL_KEY not in document:
        raise CodecError(f"missing required key {_LABEL_KEY!r}", operation="read")
    try:
        return from_document(ServiceDescriptor, document, strict=strict)
    except ValidationError as exc:
        raise CodecError(exc.message, operation="read", cause=exc) from exc


__all__ = [
    "descriptor_from_document",
    "descriptor_to_document",
    "from_document",
    "to_document",
]
