# src/serialbox/models.py
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from serialbox.config import TEXT_ENCODING
from serialbox.core.lines import count_lines


@dataclass(frozen=True)
class IntBox:
    """Immutable box around a single signed integer."""
    content: int

    def __post_init__(self):
        # bool is an int subclass
        if isinstance(self.content, bool) or not isinstance(self.content, int):
            raise TypeError(f"IntBox content must be an int, got {type(self.content).__name__}")

    def __str__(self) -> str:
        return f"IntBox{{content={self.content}}}"


@dataclass(frozen=True)
class LineCount:
    """
    Line-count summary of a text file.
    `lines` is computed once, when the record is built, and is never refreshed.
    """
    path: Path
    lines: int = field(init=False)

    def __post_init__(self):
        path = Path(self.path)
        lines = count_lines(path, encoding=TEXT_ENCODING)
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "lines", lines)

    @classmethod
    def restore(cls, path: Union[str, os.PathLike], lines: int) -> "LineCount":
        """Rebuilds a record from persisted fields without touching the file."""
        if isinstance(lines, bool) or not isinstance(lines, int):
            raise TypeError(f"lines must be an int, got {type(lines).__name__}")
        if lines < 0:
            raise ValueError(f"lines must be non-negative, got {lines}")
        record = object.__new__(cls)
        object.__setattr__(record, "path", Path(path))
        object.__setattr__(record, "lines", lines)
        return record

    def __str__(self) -> str:
        return f"LineCount{{path={self.path}, lines={self.lines}}}"
