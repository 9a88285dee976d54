"""Line sources feeding the scanner."""
from __future__ import annotations

from pathlib import Path
from typing import Iterator


def iter_lines(path: str | Path, encoding: str = "utf-8") -> Iterator[str]:
    """Stream a text file line by line without its line terminators.

    Memory usage is O(1) in file size.  Nothing is opened until the first
    line is requested, and the file is closed once the iterator is exhausted.
    """
    with open(path, encoding=encoding, errors="replace", newline=None) as f:
        for line in f:
            yield line.rstrip("\r\n")
