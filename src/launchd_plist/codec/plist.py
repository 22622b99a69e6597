"""PlistCodec – read and write ServiceDescriptors as property lists.

``plistlib`` does the document encoding; this module adds the descriptor
field mapping, format selection from :class:`CodecSettings`, and turns every
read/write failure into :class:`CodecError`.
"""
from __future__ import annotations

import plistlib
from typing import IO
from xml.parsers.expat import ExpatError

from launchd_plist.codec.mapping import descriptor_from_document, descriptor_to_document
from launchd_plist.config.settings import CodecSettings
from launchd_plist.descriptor.service import ServiceDescriptor
from launchd_plist.kernel.errors import CodecError
from launchd_plist.observability.logging import get_logger

_log = get_logger(__name__)

_READ_ERRORS = (plistlib.InvalidFileException, ExpatError, ValueError, TypeError, OSError)
_WRITE_ERRORS = (TypeError, ValueError, OverflowError, AttributeError, OSError)
_STREAM_ERRORS = (ValueError, OSError)


class PlistCodec:
    """Serialise descriptors to XML or binary plists and back.

    Output keys follow descriptor field order (``Label`` first) unless
    ``settings.sort_keys`` is set.  Reading auto-detects XML or binary.
    The stream methods go through :meth:`dumps` and :meth:`loads`, so
    both paths log and fail the same way.
    """

    def __init__(self, settings: CodecSettings | None = None) -> None:
        self._settings = settings or CodecSettings()

    @property
    def settings(self) -> CodecSettings:
        return self._settings

    def _write_failed(self, descriptor: ServiceDescriptor, exc: BaseException) -> CodecError:
        _log.warning("plist.write_failed", label=descriptor.label, error=str(exc))
        return CodecError(
            f"Could not write plist for {descriptor.label!r}: {exc}",
            operation="write",
            cause=exc,
        )

    def _render(self, descriptor: ServiceDescriptor) -> bytes:
        try:
            document = descriptor_to_document(descriptor)
            return plistlib.dumps(
                document,
                fmt=self._settings.fmt,
                sort_keys=self._settings.sort_keys,
            )
        except CodecError as exc:
            _log.warning("plist.write_failed", label=descriptor.label, error=exc.message)
            raise
        except _WRITE_ERRORS as exc:
            raise self._write_failed(descriptor, exc) from exc

    def dumps(self, descriptor: ServiceDescriptor) -> bytes:
        data = self._render(descriptor)
        _log.debug("plist.written", label=descriptor.label, format=self._settings.plist_format)
        return data

    def to_document_writer(self, descriptor: ServiceDescriptor, stream: IO[bytes]) -> None:
        data = self._render(descriptor)
        try:
            stream.write(data)
        except _STREAM_ERRORS as exc:
            raise self._write_failed(descriptor, exc) from exc
        _log.debug("plist.written", label=descriptor.label, format=self._settings.plist_format)

    def loads(self, data: bytes) -> ServiceDescriptor:
        try:
            document = plistlib.loads(data)
        except _READ_ERRORS as exc:
            _log.warning("plist.read_failed", error=str(exc))
            raise CodecError(f"Could not parse plist: {exc}", operation="read", cause=exc) from exc
        try:
            descriptor = descriptor_from_document(document, strict=self._settings.strict_keys)
        except CodecError as exc:
            _log.warning("plist.read_failed", error=exc.message)
            raise
        _log.debug("plist.read", label=descriptor.label)
        return descriptor

    def from_document_reader(self, stream: IO[bytes]) -> ServiceDescriptor:
        try:
            data = stream.read()
        except _STREAM_ERRORS as exc:
            _log.warning("plist.read_failed", error=str(exc))
            raise CodecError(f"Could not read plist: {exc}", operation="read", cause=exc) from exc
        return self.loads(data)


def to_document_writer(
    descriptor: ServiceDescriptor,
    stream: IO[bytes],
    *,
    settings: CodecSettings | None = None,
) -> None:
    """Write *descriptor* to *stream*; raises :class:`CodecError` on failure."""
    PlistCodec(settings).to_document_writer(descriptor, stream)


def from_document_reader(
    stream: IO[bytes],
    *,
    settings: CodecSettings | None = None,
) -> ServiceDescriptor:
    """Read a descriptor from *stream*; raises :class:`CodecError` on failure."""
    return PlistCodec(settings).from_document_reader(stream)


def dumps(descriptor: ServiceDescriptor, *, settings: CodecSettings | None = None) -> bytes:
    return PlistCodec(settings).dumps(descriptor)


def loads(data: bytes, *, settings: CodecSettings | None = None) -> ServiceDescriptor:
    return PlistCodec(settings).loads(data)


__all__ = ["PlistCodec", "dumps", "from_document_reader", "loads", "to_document_writer"]
