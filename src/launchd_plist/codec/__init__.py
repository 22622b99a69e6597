"""Codec – plist document reading/writing and the field mapping it relies on."""

from launchd_plist.codec.mapping import (
    descriptor_from_document,
    descriptor_to_document,
    from_document,
    to_document,
)
from launchd_plist.codec.plist import (
    PlistCodec,
    dumps,
    from_document_reader,
    loads,
    to_document_writer,
)

__all__ = [
    "PlistCodec",
    "descriptor_from_document",
    "descriptor_to_document",
    "dumps",
    "from_document",
    "from_document_reader",
    "loads",
    "to_document",
    "to_document_writer",
]
