# src/serialbox/core/demo.py
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Type

from serialbox.config import BOX_CONTENT, BOX_FILE, LINE_COUNT_FILE, POEM, POEM_FILE, TEXT_ENCODING
from serialbox.core.codec import Record
from serialbox.core.persistence import deserialize, format_bytes, read_raw_bytes, serialize
from serialbox.models import IntBox, LineCount


class DemoStage(Enum):
    START = "start"
    CONSTRUCTED = "constructed"
    SERIALIZED = "serialized"
    BYTES_READ = "bytes_read"
    DESERIALIZED = "deserialized"
    DONE = "done"
    FAILED = "failed"


class RecordDemo:
    """
    Runs one persistence round trip and prints each stage:
    construct -> serialize -> read raw bytes -> deserialize.

    The sequence is linear. The first failing step moves the demo to FAILED
    and its exception propagates to the caller untouched.
    """

    def __init__(
        self,
        build: Callable[[], Record],
        dest_path: Path,
        expected: Optional[Type[Record]] = None,
        out: Callable[[str], None] = print,
    ):
        self.build = build
        self.dest_path = Path(dest_path)
        self.expected = expected
        self.out = out
        self.stage = DemoStage.START

    def run(self) -> Record:
        try:
            record = self.build()
            self.stage = DemoStage.CONSTRUCTED
            self.out(f"Original: {record}")

            serialize(record, self.dest_path)
            self.stage = DemoStage.SERIALIZED

            raw = read_raw_bytes(self.dest_path)
            self.stage = DemoStage.BYTES_READ
            self.out(f"Serialized: {format_bytes(raw)}")

            restored = deserialize(self.dest_path, self.expected)
            self.stage = DemoStage.DESERIALIZED
            self.out(f"Deserialized: {restored}")
        except BaseException:
            self.stage = DemoStage.FAILED
            raise

        self.stage = DemoStage.DONE
        return restored


def intbox_demo(workdir: Path, out: Callable[[str], None] = print) -> RecordDemo:
    return RecordDemo(
        build=lambda: IntBox(BOX_CONTENT),
        dest_path=Path(workdir) / BOX_FILE,
        expected=IntBox,
        out=out,
    )


def line_count_demo(workdir: Path, out: Callable[[str], None] = print) -> RecordDemo:
    """Writes the poem fixture, then prepares the LineCount round trip over it."""
    poem_path = Path(workdir) / POEM_FILE
    poem_path.write_text(POEM, encoding=TEXT_ENCODING)
    return RecordDemo(
        build=lambda: LineCount(poem_path),
        dest_path=Path(workdir) / LINE_COUNT_FILE,
        expected=LineCount,
        out=out,
    )
