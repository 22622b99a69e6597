"""Unit tests for PlistCodec and the module-level codec helpers."""

from __future__ import annotations

import io
import plistlib

import pytest
import structlog

from launchd_plist.calendar import CalendarInterval
from launchd_plist.codec import PlistCodec, dumps, from_document_reader, loads, to_document_writer
from launchd_plist.config import CodecSettings
from launchd_plist.descriptor import ServiceDescriptor
from launchd_plist.kernel.errors import CodecError
from launchd_plist.schedule import translate_crontab


@pytest.fixture
def descriptor() -> ServiceDescriptor:
    return (
        ServiceDescriptor.new("com.example.backup", "/usr/local/bin/backup")
        .with_program_arguments(["backup", "--quiet"])
        .with_start_calendar_intervals(translate_crontab("0,30 9 * * *"))
        .with_run_at_load(False)
        .with_nice(10)
    )


# ---------------------------------------------------------------------------
# XML
# ---------------------------------------------------------------------------


class TestXmlOutput:
    def test_round_trip_through_stream(self, descriptor: ServiceDescriptor) -> None:
        buffer = io.BytesIO()
        PlistCodec().to_document_writer(descriptor, buffer)
        buffer.seek(0)
        assert PlistCodec().from_document_reader(buffer) == descriptor

    def test_xml_header_and_tags(self, descriptor: ServiceDescriptor) -> None:
        data = dumps(descriptor)
        assert data.startswith(b"<?xml")
        assert b"<key>Label</key>" in data
        assert b"<string>com.example.backup</string>" in data
        assert b"<key>StartCalendarIntervals</key>" in data
        assert b"<key>Minute</key>" in data
        assert b"<integer>30</integer>" in data
        assert b"<key>RunAtLoad</key>\n\t<false/>" in data

    def test_absent_fields_are_not_written(self, descriptor: ServiceDescriptor) -> None:
        data = dumps(descriptor)
        assert b"Disabled" not in data
        assert b"KeepAlive" not in data
        assert b"<key>Day</key>" not in data

    def test_label_written_first(self, descriptor: ServiceDescriptor) -> None:
        data = dumps(descriptor)
        assert data.index(b"<key>Label</key>") < data.index(b"<key>Program</key>")
        assert data.index(b"<key>Minute</key>") < data.index(b"<key>Hour</key>")

    def test_sort_keys(self, descriptor: ServiceDescriptor) -> None:
        data = dumps(descriptor.with_disabled(), settings=CodecSettings(sort_keys=True))
        assert data.index(b"<key>Disabled</key>") < data.index(b"<key>Label</key>")
        assert data.index(b"<key>Hour</key>") < data.index(b"<key>Minute</key>")

    def test_plistlib_reads_output(self, descriptor: ServiceDescriptor) -> None:
        document = plistlib.loads(dumps(descriptor))
        assert document["StartCalendarIntervals"] == [
            {"Minute": 0, "Hour": 9},
            {"Minute": 30, "Hour": 9},
        ]
        assert document["Nice"] == 10

    def test_empty_interval_list(self) -> None:
        descriptor = ServiceDescriptor.new("job").with_start_calendar_intervals([])
        assert loads(dumps(descriptor)).start_calendar_intervals == ()

    def test_wildcard_interval_round_trips(self) -> None:
        descriptor = ServiceDescriptor.new("job").with_start_calendar_intervals([CalendarInterval()])
        assert loads(dumps(descriptor)).start_calendar_intervals == (CalendarInterval(),)


# ---------------------------------------------------------------------------
# Binary
# ---------------------------------------------------------------------------


class TestBinaryOutput:
    def test_binary_magic(self, descriptor: ServiceDescriptor) -> None:
        data = dumps(descriptor, settings=CodecSettings(plist_format="binary"))
        assert data.startswith(b"bplist00")

    def test_binary_round_trip(self, descriptor: ServiceDescriptor) -> None:
        settings = CodecSettings(plist_format="binary")
        assert loads(dumps(descriptor, settings=settings)) == descriptor

    def test_reader_autodetects_format(self, descriptor: ServiceDescriptor) -> None:
        buffer = io.BytesIO()
        to_document_writer(descriptor, buffer, settings=CodecSettings(plist_format="BINARY"))
        buffer.seek(0)
        assert from_document_reader(buffer) == descriptor


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestCodecErrors:
    def test_garbage_bytes(self) -> None:
        with pytest.raises(CodecError) as exc_info:
            loads(b"definitely not a plist")
        assert exc_info.value.operation == "read"

    def test_garbage_stream_logs_warning(self) -> None:
        with structlog.testing.capture_logs() as logs:
            with pytest.raises(CodecError):
                from_document_reader(io.BytesIO(b"<plist><dict><key>"))
        assert any(e["event"] == "plist.read_failed" for e in logs)

    def test_top_level_array(self) -> None:
        with pytest.raises(CodecError):
            loads(plistlib.dumps(["Label", "job"]))

    def test_missing_label(self) -> None:
        with pytest.raises(CodecError, match="Label"):
            loads(plistlib.dumps({"Program": "/bin/true"}))

    def test_out_of_range_interval(self) -> None:
        data = plistlib.dumps({"Label": "job", "StartCalendarIntervals": [{"Minute": 60}]})
        with pytest.raises(CodecError):
            loads(data)

    def test_unknown_key_strict_by_default(self) -> None:
        data = plistlib.dumps({"Label": "job", "Frobnicate": 1})
        with pytest.raises(CodecError):
            loads(data)

    def test_unknown_key_lenient(self) -> None:
        data = plistlib.dumps({"Label": "job", "Frobnicate": 1})
        assert loads(data, settings=CodecSettings(strict_keys=False)).label == "job"

    def test_unrepresentable_integer(self) -> None:
        with pytest.raises(CodecError) as exc_info:
            dumps(ServiceDescriptor.new("job").with_nice(2**70))
        assert exc_info.value.operation == "write"

    def test_closed_stream(self, descriptor: ServiceDescriptor) -> None:
        buffer = io.BytesIO()
        buffer.close()
        with structlog.testing.capture_logs() as logs:
            with pytest.raises(CodecError):
                to_document_writer(descriptor, buffer)
        assert any(e["event"] == "plist.write_failed" for e in logs)

    def test_keep_alive_string_is_a_write_error(self) -> None:
        with structlog.testing.capture_logs() as logs:
            with pytest.raises(CodecError) as exc_info:
                dumps(ServiceDescriptor.new("x").with_keep_alive("yes"))  # type: ignore[arg-type]
        assert exc_info.value.operation == "write"
        assert any(e["event"] == "plist.write_failed" for e in logs)

    def test_environment_value_must_be_a_string(self) -> None:
        descriptor = ServiceDescriptor.new("job").with_environment_variables({"A": 1})  # type: ignore[dict-item]
        buffer = io.BytesIO()
        with pytest.raises(CodecError) as exc_info:
            to_document_writer(descriptor, buffer)
        assert exc_info.value.operation == "write"
        assert buffer.getvalue() == b""

    def test_unserialisable_launch_event(self) -> None:
        descriptor = ServiceDescriptor.new("job").with_launch_events(
            {"com.apple.notifyd.matching": {"wake": object()}}
        )
        with pytest.raises(CodecError) as exc_info:
            dumps(descriptor)
        assert exc_info.value.operation == "write"
        assert isinstance(exc_info.value.__cause__, TypeError)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestCodecLogging:
    def test_dumps_logs_written(self, descriptor: ServiceDescriptor) -> None:
        with structlog.testing.capture_logs() as logs:
            dumps(descriptor, settings=CodecSettings(plist_format="binary"))
        written = [e for e in logs if e["event"] == "plist.written"]
        assert written[0]["label"] == "com.example.backup"
        assert written[0]["format"] == "binary"

    def test_loads_logs_read(self, descriptor: ServiceDescriptor) -> None:
        data = dumps(descriptor)
        with structlog.testing.capture_logs() as logs:
            loads(data)
        assert any(
            e["event"] == "plist.read" and e["label"] == "com.example.backup" for e in logs
        )

    def test_loads_logs_rejected_document(self) -> None:
        data = plistlib.dumps({"Label": "job", "Frobnicate": 1})
        with structlog.testing.capture_logs() as logs:
            with pytest.raises(CodecError):
                loads(data)
        assert any(e["event"] == "plist.read_failed" for e in logs)

    def test_stream_and_bytes_log_alike(self, descriptor: ServiceDescriptor) -> None:
        buffer = io.BytesIO()
        with structlog.testing.capture_logs() as stream_logs:
            to_document_writer(descriptor, buffer)
            buffer.seek(0)
            from_document_reader(buffer)
        with structlog.testing.capture_logs() as bytes_logs:
            loads(dumps(descriptor))
        assert [e["event"] for e in stream_logs] == [e["event"] for e in bytes_logs]


# ---------------------------------------------------------------------------
# Descriptor shortcuts
# ---------------------------------------------------------------------------


class TestDescriptorShortcuts:
    def test_write_then_read(self, descriptor: ServiceDescriptor) -> None:
        buffer = io.BytesIO()
        descriptor.to_document_writer(buffer)
        buffer.seek(0)
        assert ServiceDescriptor.from_document_reader(buffer) == descriptor

    def test_settings_are_honoured(self, descriptor: ServiceDescriptor) -> None:
        buffer = io.BytesIO()
        descriptor.to_document_writer(buffer, CodecSettings(plist_format="binary"))
        assert buffer.getvalue().startswith(b"bplist00")

    def test_codec_exposes_settings(self) -> None:
        settings = CodecSettings(sort_keys=True)
        assert PlistCodec(settings).settings is settings
        assert PlistCodec().settings == CodecSettings()
