# src/serialbox/core/codec.py
"""
Tagged binary frame for the persistable records.

Layout (big-endian):
    magic   4 bytes   b"SBOX"
    tag     1 byte    0x01 IntBox, 0x02 LineCount
    payload
        IntBox      content as signed 64-bit
        LineCount   u32 path length, UTF-8 path bytes, lines as unsigned 64-bit
"""
import struct
from typing import Optional, Type, Union

from serialbox.errors import EncodingError, FormatError, TypeMismatchError
from serialbox.models import IntBox, LineCount

Record = Union[IntBox, LineCount]

MAGIC = b"SBOX"
TAG_INT_BOX = 0x01
TAG_LINE_COUNT = 0x02

_HEADER = struct.Struct(">4sB")
_INT64 = struct.Struct(">q")
_UINT64 = struct.Struct(">Q")
_UINT32 = struct.Struct(">I")

_TAGS = {
    IntBox: TAG_INT_BOX,
    LineCount: TAG_LINE_COUNT,
}
_TYPES = {tag: record_type for record_type, tag in _TAGS.items()}


def record_tag(record_type: type) -> int:
    """Returns the frame tag for a record type."""
    try:
        return _TAGS[record_type]
    except KeyError:
        raise EncodingError(f"Unsupported record type: {record_type.__name__}") from None


def encode_record(record: Record) -> bytes:
    tag = record_tag(type(record))
    header = _HEADER.pack(MAGIC, tag)

    if tag == TAG_INT_BOX:
        try:
            return header + _INT64.pack(record.content)
        except struct.error as e:
            raise EncodingError(f"IntBox content out of 64-bit range: {record.content}") from e

    try:
        path_bytes = str(record.path).encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Path is not representable as UTF-8: {record.path!r}") from e
    if len(path_bytes) > 0xFFFFFFFF:
        raise EncodingError("Path too long to encode")
    try:
        lines = _UINT64.pack(record.lines)
    except struct.error as e:
        raise EncodingError(f"Line count out of range: {record.lines}") from e
    return header + _UINT32.pack(len(path_bytes)) + path_bytes + lines


class _Reader:
    """Cursor over a frame; every short read is a FormatError."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise FormatError(
                f"Truncated frame: need {size} bytes at offset {self.offset}, "
                f"only {len(self.data) - self.offset} left"
            )
        chunk = self.data[self.offset:end]
        self.offset = end
        return chunk

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.take(fmt.size))

    def finish(self):
        if self.offset != len(self.data):
            raise FormatError(f"Trailing bytes after frame: {len(self.data) - self.offset}")


def decode_record(data: bytes, expected: Optional[Type[Record]] = None) -> Record:
    """
    Decodes a frame back into a record.
    If `expected` is given, any other decoded type raises TypeMismatchError.
    """
    if not data:
        raise FormatError("Empty frame")

    reader = _Reader(bytes(data))
    magic, tag = reader.unpack(_HEADER)
    if magic != MAGIC:
        raise FormatError(f"Bad magic: {magic!r}")

    record_type = _TYPES.get(tag)
    if record_type is None:
        raise FormatError(f"Unknown record tag: 0x{tag:02x}")
    if expected is not None and record_type is not expected:
        raise TypeMismatchError(expected, record_type)

    if record_type is IntBox:
        (content,) = reader.unpack(_INT64)
        reader.finish()
        return IntBox(content)

    (length,) = reader.unpack(_UINT32)
    raw_path = reader.take(length)
    (lines,) = reader.unpack(_UINT64)
    reader.finish()
    try:
        path = raw_path.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError("Path bytes are not valid UTF-8") from e
    return LineCount.restore(path, lines)
