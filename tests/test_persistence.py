# tests/test_persistence.py
import struct

import pytest

from serialbox.config import POEM
from serialbox.core.codec import MAGIC, TAG_INT_BOX, TAG_LINE_COUNT, decode_record, encode_record, record_tag
from serialbox.core.persistence import deserialize, format_bytes, read_raw_bytes, serialize
from serialbox.errors import EncodingError, FormatError, PersistenceError, TypeMismatchError
from serialbox.models import IntBox, LineCount


@pytest.fixture
def line_count(tmp_path):
    path = tmp_path / "poem.txt"
    path.write_text(POEM, encoding="utf-8")
    return LineCount(path)


# --- Test 1: Round trips ---

@pytest.mark.parametrize("n", [0, 1, -1, 214748364, 2**63 - 1, -(2**63)])
def test_intbox_round_trip(tmp_path, n):
    dest = tmp_path / "box.ser"
    serialize(IntBox(n), dest)
    restored = deserialize(dest, IntBox)
    assert restored == IntBox(n)
    assert restored.content == n

def test_intbox_str_survives_round_trip(tmp_path):
    box = IntBox(214748364)
    serialize(box, tmp_path / "box.ser")
    assert str(deserialize(tmp_path / "box.ser")) == "IntBox{content=214748364}"

def test_line_count_round_trip(tmp_path, line_count):
    dest = tmp_path / "line-count.ser"
    serialize(line_count, dest)
    restored = deserialize(dest, LineCount)
    assert restored.path == line_count.path
    assert restored.lines == 5

def test_line_count_round_trip_does_not_reread(tmp_path, line_count):
    dest = tmp_path / "line-count.ser"
    serialize(line_count, dest)
    line_count.path.unlink()
    assert deserialize(dest, LineCount).lines == 5

def test_reserialization_is_stable(tmp_path, line_count):
    serialize(line_count, tmp_path / "a.ser")
    serialize(line_count, tmp_path / "b.ser")
    assert deserialize(tmp_path / "a.ser") == deserialize(tmp_path / "b.ser")
    assert read_raw_bytes(tmp_path / "a.ser") == read_raw_bytes(tmp_path / "b.ser")

def test_serialize_truncates_existing_file(tmp_path):
    dest = tmp_path / "box.ser"
    dest.write_bytes(b"x" * 100)
    serialize(IntBox(3), dest)
    assert deserialize(dest) == IntBox(3)


# --- Test 2: Raw bytes ---

def test_raw_bytes_non_empty(tmp_path, line_count):
    serialize(IntBox(0), tmp_path / "box.ser")
    serialize(line_count, tmp_path / "line-count.ser")
    assert len(read_raw_bytes(tmp_path / "box.ser")) > 0
    assert len(read_raw_bytes(tmp_path / "line-count.ser")) > 0

def test_intbox_frame_layout():
    data = encode_record(IntBox(214748364))
    assert data[:4] == MAGIC
    assert data[4] == TAG_INT_BOX
    assert struct.unpack(">q", data[5:]) == (214748364,)

def test_format_bytes():
    assert format_bytes(b"") == "[]"
    assert format_bytes(b"SB\x00\xff") == "[83, 66, 0, 255]"

def test_read_raw_bytes_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_raw_bytes(tmp_path / "missing.ser")


# --- Test 3: Failures ---

def test_type_mismatch_intbox_as_line_count(tmp_path):
    serialize(IntBox(5), tmp_path / "box.ser")
    with pytest.raises(TypeMismatchError) as exc_info:
        deserialize(tmp_path / "box.ser", LineCount)
    assert exc_info.value.expected is LineCount
    assert exc_info.value.actual is IntBox

def test_type_mismatch_line_count_as_intbox(tmp_path, line_count):
    serialize(line_count, tmp_path / "line-count.ser")
    with pytest.raises(FormatError):
        deserialize(tmp_path / "line-count.ser", IntBox)

def test_deserialize_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        deserialize(tmp_path / "missing.ser")

@pytest.mark.parametrize("data", [
    b"",
    b"SBO",
    b"NOPE\x01" + b"\x00" * 8,
    MAGIC + b"\x09" + b"\x00" * 8,
    MAGIC + bytes([TAG_INT_BOX]) + b"\x00" * 4,
    MAGIC + bytes([TAG_INT_BOX]) + b"\x00" * 9,
    MAGIC + bytes([TAG_LINE_COUNT]) + struct.pack(">I", 50) + b"abc",
    MAGIC + bytes([TAG_LINE_COUNT]) + struct.pack(">I", 2) + b"\xff\xfe" + struct.pack(">Q", 1),
])
def test_corrupt_frames_rejected(data):
    with pytest.raises(FormatError):
        decode_record(data)

def test_corrupt_file_rejected(tmp_path):
    dest = tmp_path / "box.ser"
    serialize(IntBox(1), dest)
    dest.write_bytes(read_raw_bytes(dest)[:-1])
    with pytest.raises(FormatError):
        deserialize(dest)

def test_intbox_out_of_range():
    with pytest.raises(EncodingError):
        encode_record(IntBox(2**63))

def test_encoding_failure_leaves_file_untouched(tmp_path):
    dest = tmp_path / "box.ser"
    dest.write_bytes(b"keep")
    with pytest.raises(EncodingError):
        serialize(IntBox(-(2**64)), dest)
    assert dest.read_bytes() == b"keep"

def test_unsupported_record_type(tmp_path):
    with pytest.raises(EncodingError):
        serialize("not a record", tmp_path / "x.ser")
    with pytest.raises(EncodingError):
        record_tag(dict)
    assert not (tmp_path / "x.ser").exists()

def test_serialize_into_missing_directory(tmp_path):
    with pytest.raises(OSError):
        serialize(IntBox(1), tmp_path / "no" / "such" / "box.ser")

def test_error_hierarchy():
    assert issubclass(TypeMismatchError, FormatError)
    assert issubclass(FormatError, PersistenceError)
    assert issubclass(EncodingError, PersistenceError)
