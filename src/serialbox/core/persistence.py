# src/serialbox/core/persistence.py
import os
from pathlib import Path
from typing import Optional, Type, Union

from serialbox.core.codec import Record, decode_record, encode_record

PathLike = Union[str, os.PathLike]


def serialize(record: Record, dest_path: PathLike) -> None:
    """
    Writes the encoded record to dest_path, creating or truncating it.
    Encoding happens first, so an unrepresentable record leaves the file alone.
    """
    data = encode_record(record)
    with open(dest_path, "wb") as f:
        f.write(data)


def deserialize(src_path: PathLike, expected: Optional[Type[Record]] = None) -> Record:
    with open(src_path, "rb") as f:
        data = f.read()
    return decode_record(data, expected)


def read_raw_bytes(path: PathLike) -> bytes:
    return Path(path).read_bytes()


def format_bytes(data: bytes) -> str:
    """Printable form of a byte sequence, e.g. '[83, 66, 79, 88]'."""
    return "[" + ", ".join(str(b) for b in data) + "]"
