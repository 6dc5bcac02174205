# src/serialbox/core/lines.py
import os
from typing import Union


def count_lines(path: Union[str, os.PathLike], encoding: str = "utf-8") -> int:
    """
    Counts the lines of a text file.

    '\\n', '\\r\\n' and a lone '\\r' each terminate a line. A trailing segment
    without a terminator still counts as a line, but a trailing terminator
    does not open an extra empty one. An empty file has 0 lines.
    """
    # newline=None turns every terminator style into '\n' while iterating
    with open(path, "r", encoding=encoding, newline=None) as f:
        return sum(1 for _ in f)
